import time
from typing import Callable, List, Optional

from .registry import RoomRegistry


class Reaper:
    """Periodically evicts stale rooms from a registry.

    - Waiting rooms older than ``waiting_timeout`` are dropped
    - Running rooms are dropped once no player has polled for
      ``inactivity_timeout``; a running room nobody ever polled is kept
    - ``on_evict(room_id, reason)`` is called after each eviction
    """

    def __init__(self, registry: RoomRegistry, interval: float = 5,
                 waiting_timeout: float = 120, inactivity_timeout: float = 10,
                 logger=None, on_evict: Optional[Callable[[int, str], None]] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.registry = registry
        self.interval = interval
        self.waiting_timeout = waiting_timeout
        self.inactivity_timeout = inactivity_timeout
        self.logger = logger
        self.on_evict = on_evict
        self._sleep = sleep
        self._stopped = False

    def sweep(self, now: Optional[float] = None) -> List[int]:
        if now is None:
            now = time.time()
        evicted = self.registry.evict_where(
            lambda room: room.is_stale(now, self.waiting_timeout, self.inactivity_timeout)
        )
        for room_id, reason in evicted:
            if self.logger is not None:
                self.logger.info(f"[reaper-evict] game={room_id} reason={reason}")
            if self.on_evict is not None:
                self.on_evict(room_id, reason)
        return [room_id for room_id, _ in evicted]

    def run(self) -> None:
        if self.logger is not None:
            self.logger.info(
                f"[reaper-start] interval={self.interval}s waiting_timeout={self.waiting_timeout}s "
                f"inactivity_timeout={self.inactivity_timeout}s"
            )
        while not self._stopped:
            self._sleep(self.interval)
            if self._stopped:
                break
            try:
                self.sweep()
            except Exception:
                if self.logger is not None:
                    self.logger.exception("[reaper-error] sweep failed")
        if self.logger is not None:
            self.logger.info("[reaper-stop]")

    def stop(self) -> None:
        self._stopped = True
