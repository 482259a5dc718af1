"""
Periodic background tasks for the desktop shell
Runs cache sweeps and new-episode checks outside the request path
"""
import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Call func every interval seconds on a daemon thread until stopped"""

    def __init__(self, name: str, interval: float, func: Callable[[], Any]):
        self.name = name
        self.interval = interval
        self.func = func
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        if self.is_running:
            logger.info(f"[Scheduler] {self.name} already running")
            return False

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.info(f"[Scheduler] Started {self.name} (every {self.interval}s)")
        return True

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def run_once(self) -> Any:
        """Run func a single time, logging instead of raising on failure"""
        try:
            return self.func()
        except Exception as e:
            logger.error(f"[Scheduler] {self.name} failed: {e}")
            return None

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.run_once()
