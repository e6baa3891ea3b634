import threading
from typing import Callable, Dict, List, Optional

from tetris_rooms.errors import RoomNotFound
from tetris_rooms.models import Room


class RoomRegistry:
    """Thread-safe in-memory set of live rooms keyed by integer id.

    Lock order is always registry lock first, then a room's lock.
    """

    def __init__(self, batch_size: int = 100, penalty_seed: int = 10):
        self.batch_size = batch_size
        self.penalty_seed = penalty_seed
        self._rooms: Dict[int, Room] = {}
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._rooms)

    def __contains__(self, room_id):
        with self._lock:
            return room_id in self._rooms

    def create(self, width: int, height: int, capacity: int, duck_prob: float,
               now: Optional[float] = None) -> Room:
        with self._lock:
            room_id = self._next_id()
            room = Room(
                room_id, width, height, capacity, duck_prob,
                batch_size=self.batch_size,
                penalty_seed=self.penalty_seed,
                now=now,
            )
            self._rooms[room_id] = room
            return room

    def get(self, room_id: int) -> Room:
        with self._lock:
            room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFound(room_id)
        return room

    def delete(self, room_id: int) -> None:
        with self._lock:
            room = self._rooms.pop(room_id, None)
            if room is None:
                raise RoomNotFound(room_id)
            room.close()

    def rooms(self) -> List[Room]:
        with self._lock:
            return list(self._rooms.values())

    def list(self) -> Dict[int, dict]:
        """Point-in-time copy of every room, safe to serialize without locks."""
        return {room.id: room.to_dict() for room in self.rooms() if not room.closed}

    def evict_where(self, predicate: Callable[[Room], Optional[str]]) -> List[tuple]:
        """Remove every room for which ``predicate`` returns a truthy reason.

        The predicate runs with the room's lock held, so the check and the
        removal cannot interleave with a concurrent operation on that room.
        Returns ``(room_id, reason)`` pairs.
        """
        evicted = []
        with self._lock:
            for room_id, room in list(self._rooms.items()):
                with room.lock:
                    reason = predicate(room)
                    if not reason:
                        continue
                    del self._rooms[room_id]
                    room.close()
                evicted.append((room_id, reason))
        return evicted

    def _next_id(self) -> int:
        room_id = 0
        while room_id in self._rooms:
            room_id += 1
        return room_id
