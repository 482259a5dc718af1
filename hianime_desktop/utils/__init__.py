"""
Utils package initialization.
Re-exports background task helpers.
"""

__all__ = [
    'PeriodicTask',
    'NotificationQueue',
    'check_for_new_episodes',
    'run_episode_check',
]

from .scheduler import PeriodicTask
from .notifications import NotificationQueue
from .episode_watch import check_for_new_episodes, run_episode_check
