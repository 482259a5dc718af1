"""
HiAnime scraping package
Client, HTML extractors and the cached data service
"""
from .base import HianimeBaseClient, DEFAULT_HEADERS
from .hianime import HianimeScraper

__all__ = [
    "HianimeBaseClient",
    "HianimeScraper",
    "DEFAULT_HEADERS",
]
