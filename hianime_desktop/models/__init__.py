"""
Models package initialization.
Re-exports the local user data store.
"""
from .storage import AppStorage, DEFAULT_SETTINGS, DOWNLOAD_STATUSES

__all__ = ['AppStorage', 'DEFAULT_SETTINGS', 'DOWNLOAD_STATUSES']
