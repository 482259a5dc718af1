"""
Main HiAnime scraper - unified interface
Runs fetch -> extract -> cache for every logical query
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote, urlencode

from ...core.caching import ResultCache
from .base import HianimeBaseClient
from . import parsers

logger = logging.getLogger(__name__)


def empty_sources() -> Dict[str, List[Dict[str, str]]]:
    return {"sources": [], "subtitles": []}


class HianimeScraper:
    """
    Async data service over the HiAnime website.

    Query methods never raise: a failed fetch or extraction is logged and
    turned into an empty default ([] / None / {}), so callers cannot tell
    "no results" apart from "request failed".
    """

    def __init__(self, client: HianimeBaseClient, cache: ResultCache):
        self.client = client
        self.cache = cache

    @classmethod
    def from_config(cls, cfg) -> "HianimeScraper":
        """Build a scraper with its own client and cache from a Config class"""
        client = HianimeBaseClient(cfg.HIANIME_BASE_URL, timeout=cfg.REQUEST_TIMEOUT)
        cache = ResultCache(
            freshness=cfg.CACHE_FRESHNESS_SECONDS,
            staleness=cfg.CACHE_STALENESS_SECONDS,
        )
        return cls(client, cache)

    async def _cached_query(
        self,
        cache_key: str,
        path: str,
        extract: Callable[[str], Any],
        default: Any,
        label: str,
    ) -> Any:
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            html = await self.client.fetch(self.client.url_for(path))
            result = extract(html)
        except Exception as e:
            logger.error(f"[HianimeScraper] Failed to fetch {label}: {e}")
            return default

        self.cache.put(cache_key, result)
        return result

    # =========================================================================
    # LISTINGS
    # =========================================================================
    async def get_trending_anime(self) -> List[Dict[str, str]]:
        return await self._cached_query(
            "trending", "/home", parsers.extract_listing, [], "trending anime"
        )

    async def get_new_releases(self) -> List[Dict[str, str]]:
        return await self._cached_query(
            "new-releases", "/new-release", parsers.extract_listing, [], "new releases"
        )

    async def get_ongoing_anime(self) -> List[Dict[str, str]]:
        return await self._cached_query(
            "ongoing", "/ongoing", parsers.extract_listing, [], "ongoing anime"
        )

    async def search_anime(self, query: str, page: int = 1) -> List[Dict[str, str]]:
        """Search by keyword; a blank query returns [] without any request"""
        if not query or not query.strip():
            return []

        path = "/search?" + urlencode({"keyword": query, "page": page})
        return await self._cached_query(
            f"search-{query}-{page}", path, parsers.extract_listing, [], f"search '{query}'"
        )

    async def get_anime_by_genre(self, genre_name: str, page: int = 1) -> List[Dict[str, str]]:
        if not genre_name or not genre_name.strip():
            return []

        path = f"/genre/{quote(genre_name.lower())}?page={page}"
        return await self._cached_query(
            f"genre-{genre_name}-{page}", path, parsers.extract_listing, [], f"genre '{genre_name}'"
        )

    async def home(self) -> Dict[str, List[Dict[str, str]]]:
        """
        Fetch the three home sections concurrently.
        A failed section comes back empty; the others are unaffected.
        """
        trending, new_releases, ongoing = await asyncio.gather(
            self.get_trending_anime(),
            self.get_new_releases(),
            self.get_ongoing_anime(),
        )
        logger.info(
            f"[HianimeScraper] Home: trending={len(trending)}, "
            f"newReleases={len(new_releases)}, ongoing={len(ongoing)}"
        )
        return {
            "trending": trending,
            "newReleases": new_releases,
            "ongoing": ongoing,
        }

    # =========================================================================
    # ANIME INFO
    # =========================================================================
    async def get_anime_details(self, anime_id: str) -> Optional[Dict[str, Any]]:
        return await self._cached_query(
            f"details-{anime_id}",
            f"/watch/{quote(anime_id)}",
            parsers.extract_detail,
            None,
            f"anime details for {anime_id}",
        )

    async def get_episode_sources(self, episode_id: str) -> Dict[str, List[Dict[str, str]]]:
        """Stream links expire, so sources are always fetched fresh"""
        url = self.client.url_for(
            "/ajax/v2/episode/sources?" + urlencode({"id": episode_id})
        )
        try:
            text = await self.client.fetch(url)
            return parsers.extract_episode_sources(text)
        except Exception as e:
            logger.error(f"[HianimeScraper] Failed to fetch episode sources for {episode_id}: {e}")
            return empty_sources()

    # =========================================================================
    # CATALOG
    # =========================================================================
    async def get_genres(self) -> List[Dict[str, str]]:
        return await self._cached_query(
            "genres", "/genre", parsers.extract_genres, [], "genres"
        )

    async def get_anime_calendar(self) -> Dict[str, List[Dict[str, Any]]]:
        return await self._cached_query(
            "calendar", "/schedule", parsers.extract_calendar, {}, "anime calendar"
        )

    # =========================================================================
    # CACHE MAINTENANCE
    # =========================================================================
    def clear_cache(self) -> None:
        self.cache.clear()

    def sweep_cache(self) -> int:
        return self.cache.sweep()
