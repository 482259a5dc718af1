"""
New episode detection for favorited anime
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from ..models.storage import AppStorage
from ..scrapers.hianime.hianime import HianimeScraper

logger = logging.getLogger(__name__)

Notifier = Callable[[Dict[str, Any], str], Any]


async def check_for_new_episodes(
    scraper: HianimeScraper,
    storage: AppStorage,
    notify: Optional[Notifier] = None,
) -> List[Dict[str, Any]]:
    """
    Compare every favorite's stored episode count with the live detail page.

    Does nothing unless the ``notifications`` setting is on. For each changed
    favorite the notifier is called with (favorite, new_count) and the stored
    favorite is updated.

    Returns:
        List of {id, title, previous, current} for changed favorites
    """
    if not storage.get_setting("notifications"):
        return []

    updates = []
    for favorite in storage.get_favorites():
        anime_id = favorite.get("id")
        if not anime_id:
            continue

        details = await scraper.get_anime_details(anime_id)
        if not details:
            continue

        current = details.get("episodes", "")
        previous = favorite.get("episodes", "")
        if not current or current == previous:
            continue

        logger.info(f"[EpisodeWatch] {anime_id}: episodes {previous!r} -> {current!r}")
        if notify is not None:
            try:
                notify(favorite, current)
            except Exception as e:
                logger.warning(f"[EpisodeWatch] Notifier failed for {anime_id}: {e}")

        storage.update_favorite(anime_id, {"episodes": current})
        updates.append({
            "id": anime_id,
            "title": favorite.get("title", ""),
            "previous": previous,
            "current": current,
        })

    return updates


def run_episode_check(
    scraper: HianimeScraper,
    storage: AppStorage,
    notify: Optional[Notifier] = None,
) -> List[Dict[str, Any]]:
    """Blocking wrapper for the scheduler thread"""
    return asyncio.run(check_for_new_episodes(scraper, storage, notify))
