"""
Local user data for the desktop shell.

Single JSON document on disk holding favorites, watch history, continue
watching, search history, settings and download records:

{
    "favorites": [{"id": "one-piece-100", "title": "One Piece", "addedAt": 1700000000.0}],
    "watchHistory": [...],
    "continueWatching": [...],
    "settings": {"theme": "dark", ...},
    "downloads": [...],
    "searchHistory": ["frieren", ...]
}

Every mutation rewrites the file. Reads and writes share one lock.
"""

import copy
import json
import logging
import os
import tempfile
import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

MAX_WATCH_HISTORY = 100
MAX_CONTINUE_WATCHING = 20
MAX_SEARCH_HISTORY = 20
COMPLETED_PROGRESS = 0.9

DOWNLOAD_STATUSES = ("pending", "downloading", "completed", "failed")
# set by the store, never by callers
DOWNLOAD_READONLY_FIELDS = ("id", "addedAt", "completedAt")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "theme": "dark",
    "defaultQuality": "auto",
    "autoplayNext": True,
    "autoplayCountdown": 10,
    "defaultSubtitleLang": "en",
    "subtitleSize": "medium",
    "downloadDirectory": "",
    "downloadQuality": "1080p",
    "notifications": False,
}


def default_data() -> Dict[str, Any]:
    return {
        "favorites": [],
        "watchHistory": [],
        "continueWatching": [],
        "settings": dict(DEFAULT_SETTINGS),
        "downloads": [],
        "searchHistory": [],
    }


class AppStorage:
    """JSON-file backed store for favorites, history, settings and downloads"""

    def __init__(self, path: Union[str, Path], clock: Callable[[], float] = time.time):
        self.path = Path(path).expanduser()
        self._clock = clock
        self._lock = threading.RLock()
        self.data = self._load()

    # ----- File I/O -----

    def _load(self) -> Dict[str, Any]:
        """Load the document from disk, falling back to defaults."""
        try:
            if self.path.exists():
                with open(self.path, "r", encoding="utf-8") as f:
                    stored = json.load(f)
                if isinstance(stored, dict):
                    logger.info("[AppStorage] Loaded user data from %s", self.path)
                    return {**default_data(), **stored}
                logger.warning("[AppStorage] Ignoring malformed user data in %s", self.path)
        except (OSError, ValueError) as e:
            logger.warning("[AppStorage] Failed to load user data: %s", e)
        return default_data()

    def _save(self) -> None:
        """Write the in-memory document to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(self.data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.warning("[AppStorage] Failed to save user data: %s", e)

    def _list(self, name: str) -> List[Any]:
        value = self.data.get(name)
        if not isinstance(value, list):
            value = []
            self.data[name] = value
        return value

    # ---------- Favorites ----------

    def get_favorites(self) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._list("favorites"))

    def get_favorite(self, anime_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            for fav in self._list("favorites"):
                if fav.get("id") == anime_id:
                    return dict(fav)
        return None

    def add_to_favorites(self, anime: Dict[str, Any]) -> bool:
        """Add anime at the front of favorites. False if it is already there."""
        with self._lock:
            favorites = self._list("favorites")
            if any(fav.get("id") == anime.get("id") for fav in favorites):
                return False
            favorites.insert(0, {**anime, "addedAt": self._clock()})
            self._save()
            return True

    def update_favorite(self, anime_id: str, updates: Dict[str, Any]) -> bool:
        with self._lock:
            for fav in self._list("favorites"):
                if fav.get("id") == anime_id:
                    fav.update(updates)
                    self._save()
                    return True
        return False

    def remove_from_favorites(self, anime_id: str) -> bool:
        with self._lock:
            favorites = self._list("favorites")
            for index, fav in enumerate(favorites):
                if fav.get("id") == anime_id:
                    del favorites[index]
                    self._save()
                    return True
        return False

    def is_favorite(self, anime_id: str) -> bool:
        return self.get_favorite(anime_id) is not None

    # ---------- Watch history ----------

    def get_watch_history(self) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._list("watchHistory"))

    def add_to_watch_history(self, anime: Dict[str, Any], episode: Any = None) -> None:
        with self._lock:
            history = [item for item in self._list("watchHistory") if item.get("id") != anime.get("id")]
            history.insert(0, {
                **anime,
                "lastWatched": self._clock(),
                "lastEpisode": episode,
            })
            self.data["watchHistory"] = history[:MAX_WATCH_HISTORY]
            self._save()

    def clear_watch_history(self) -> None:
        with self._lock:
            self.data["watchHistory"] = []
            self._save()

    # ---------- Continue watching ----------

    def get_continue_watching(self) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._list("continueWatching"))

    def add_to_continue_watching(self, anime: Dict[str, Any], episode: Any, progress: float = 0) -> None:
        """
        Track where the user stopped. An anime watched past 90% is dropped
        from the list instead of being updated.
        """
        with self._lock:
            items = [item for item in self._list("continueWatching") if item.get("id") != anime.get("id")]
            if progress < COMPLETED_PROGRESS:
                items.insert(0, {
                    **anime,
                    "currentEpisode": episode,
                    "progress": progress,
                    "updatedAt": self._clock(),
                })
            self.data["continueWatching"] = items[:MAX_CONTINUE_WATCHING]
            self._save()

    def remove_from_continue_watching(self, anime_id: str) -> None:
        with self._lock:
            self.data["continueWatching"] = [
                item for item in self._list("continueWatching") if item.get("id") != anime_id
            ]
            self._save()

    # ---------- Settings ----------

    def get_settings(self) -> Dict[str, Any]:
        with self._lock:
            stored = self.data.get("settings") or {}
            return {**DEFAULT_SETTINGS, **stored}

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self.get_settings().get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        with self._lock:
            settings = self.data.get("settings")
            if not isinstance(settings, dict):
                settings = {}
                self.data["settings"] = settings
            settings[key] = value
            self._save()

    def set_settings(self, new_settings: Dict[str, Any]) -> None:
        with self._lock:
            self.data["settings"] = {**self.get_settings(), **new_settings}
            self._save()

    def reset_settings(self) -> None:
        with self._lock:
            self.data["settings"] = dict(DEFAULT_SETTINGS)
            self._save()

    # ---------- Downloads ----------

    def get_downloads(self) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._list("downloads"))

    def add_download(
        self,
        anime: Dict[str, Any],
        episode: Dict[str, Any],
        file_path: str,
        status: str = "pending",
    ) -> Dict[str, Any]:
        if status not in DOWNLOAD_STATUSES:
            raise ValueError(f"Unknown download status: {status}")

        download = {
            "id": f"{anime.get('id')}-{episode.get('number')}",
            "anime": anime,
            "episode": episode,
            "filePath": file_path,
            "status": status,
            "progress": 0,
            "addedAt": self._clock(),
            "completedAt": None,
        }
        with self._lock:
            self._list("downloads").insert(0, download)
            self._save()
        return dict(download)

    def update_download(self, download_id: str, updates: Dict[str, Any]) -> bool:
        updates = {k: v for k, v in updates.items() if k not in DOWNLOAD_READONLY_FIELDS}
        status = updates.get("status")
        if status is not None and status not in DOWNLOAD_STATUSES:
            raise ValueError(f"Unknown download status: {status}")

        with self._lock:
            for download in self._list("downloads"):
                if download.get("id") == download_id:
                    download.update(updates)
                    if status == "completed":
                        download["completedAt"] = self._clock()
                    self._save()
                    return True
        return False

    def remove_download(self, download_id: str) -> bool:
        with self._lock:
            downloads = self._list("downloads")
            for index, download in enumerate(downloads):
                if download.get("id") == download_id:
                    del downloads[index]
                    self._save()
                    return True
        return False

    # ---------- Search history ----------

    def get_search_history(self) -> List[str]:
        with self._lock:
            return list(self._list("searchHistory"))

    def add_to_search_history(self, query: str) -> None:
        if not query or not query.strip():
            return
        with self._lock:
            history = [item for item in self._list("searchHistory") if item != query]
            history.insert(0, query)
            self.data["searchHistory"] = history[:MAX_SEARCH_HISTORY]
            self._save()

    def clear_search_history(self) -> None:
        with self._lock:
            self.data["searchHistory"] = []
            self._save()

    # ---------- Export / import ----------

    def export_data(self) -> str:
        with self._lock:
            return json.dumps(self.data, indent=2, ensure_ascii=False)

    def import_data(self, json_data: str) -> bool:
        """Replace stored data with an export. False when json_data is not a JSON object."""
        try:
            imported = json.loads(json_data)
        except (TypeError, ValueError) as e:
            logger.error("[AppStorage] Failed to import data: %s", e)
            return False
        if not isinstance(imported, dict):
            logger.error("[AppStorage] Failed to import data: expected an object")
            return False

        with self._lock:
            self.data = {**default_data(), **imported}
            self._save()
        return True

    def clear_all_data(self) -> None:
        with self._lock:
            self.data = default_data()
            self._save()

    def stats(self) -> Dict[str, int]:
        downloads = self.get_downloads()
        return {
            "favorites": len(self.get_favorites()),
            "watchHistory": len(self.get_watch_history()),
            "downloads": len(downloads),
            "completedDownloads": sum(1 for dl in downloads if dl.get("status") == "completed"),
        }
