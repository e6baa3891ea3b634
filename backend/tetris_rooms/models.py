import threading
import time
from collections import deque
from typing import List, Optional

from tetris_rooms.errors import PlayerNotFound, RoomFull, RoomNotFound

# Appended to a screen name until it no longer collides within a room
NAME_SEPARATOR = '_'


class Player:
    def __init__(self, player_id: str, penalty_seed: int = 10):
        self.id = player_id
        self.alive = True
        self.penalty_queue = deque([0] * penalty_seed)
        self.last_snapshot = ''
        self.last_request_time: Optional[float] = None
        self.part_index = 0

    def to_dict(self):
        return {
            'player_id': self.id,
            'alive': self.alive,
            'snapshot': self.last_snapshot,
            'penalties': list(self.penalty_queue),
            'part_index': self.part_index,
            'last_request_time': self.last_request_time,
        }


class Room:
    """One game session: roster, shared piece queue and running flag.

    Every read or check-then-mutate sequence on the mutable fields runs
    under ``self.lock``. Once the registry drops the room, ``closed`` is
    set and every further operation raises ``RoomNotFound``.
    """

    def __init__(self, room_id: int, width: int, height: int, capacity: int,
                 duck_prob: float, batch_size: int = 100, penalty_seed: int = 10,
                 now: Optional[float] = None):
        self.id = room_id
        self.width = width
        self.height = height
        self.capacity = capacity
        self.duck_prob = duck_prob
        self.batch_size = batch_size
        self.penalty_seed = penalty_seed
        self.creation_time = time.time() if now is None else now
        self.running = False
        self.closed = False
        self.players: List[Player] = []
        self.piece_queue: List[int] = []
        self.lock = threading.RLock()

    def ensure_open(self) -> None:
        if self.closed:
            raise RoomNotFound(self.id)

    def close(self) -> None:
        with self.lock:
            self.closed = True

    def add_player(self, name: str) -> str:
        """Seat a player and return the id it was registered under.

        Colliding names get the separator appended until unique. Seating the
        last free slot starts the game.
        """
        with self.lock:
            self.ensure_open()
            if len(self.players) >= self.capacity:
                raise RoomFull(self.id, self.capacity)

            taken = {p.id for p in self.players}
            player_id = name
            while player_id in taken:
                player_id += NAME_SEPARATOR

            self.players.append(Player(player_id, penalty_seed=self.penalty_seed))
            if len(self.players) == self.capacity:
                self.running = True
            return player_id

    def get_player(self, player_id: str) -> Player:
        with self.lock:
            self.ensure_open()
            for player in self.players:
                if player.id == player_id:
                    return player
            raise PlayerNotFound(self.id, player_id)

    def unregister(self, player_id: str) -> None:
        with self.lock:
            self.get_player(player_id).alive = False

    def last_activity(self) -> Optional[float]:
        """Most recent penalty poll across the roster, or None if nobody polled."""
        with self.lock:
            stamps = [p.last_request_time for p in self.players if p.last_request_time is not None]
            return max(stamps) if stamps else None

    def is_stale(self, now: float, waiting_timeout: float, inactivity_timeout: float) -> Optional[str]:
        """Return the eviction reason if the room has timed out, else None."""
        with self.lock:
            if not self.running:
                if now - self.creation_time > waiting_timeout:
                    return 'waiting'
                return None
            # A running room whose players never polled is left alone.
            last = self.last_activity()
            if last is not None and now - last > inactivity_timeout:
                return 'inactive'
            return None

    def to_dict(self):
        with self.lock:
            return {
                'game_id': self.id,
                'started': self.running,
                'width': self.width,
                'height': self.height,
                'size': self.capacity,
                'duck_prob': self.duck_prob,
                'screen_names': [p.to_dict() for p in self.players],
            }
