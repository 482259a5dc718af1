"""
Queue of new-episode notifications waiting for the shell to display them
"""
import threading
import time
from typing import Any, Dict, List


class NotificationQueue:
    def __init__(self, max_size: int = 50):
        self.max_size = max_size
        self._items: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def push_new_episode(self, anime: Dict[str, Any], episodes: str) -> None:
        """Notifier callback for check_for_new_episodes"""
        with self._lock:
            self._items.append({
                "type": "new-episode",
                "title": "New Episode Available",
                "body": f"{anime.get('title') or anime.get('id')} now has {episodes} episodes",
                "animeId": anime.get("id"),
                "episodes": episodes,
                "createdAt": time.time(),
            })
            # oldest notifications go first
            del self._items[:-self.max_size]

    def drain(self) -> List[Dict[str, Any]]:
        with self._lock:
            items, self._items = self._items, []
        return items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
