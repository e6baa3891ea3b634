import time
from typing import Optional

from tetris_rooms.models import Room


def send_lines(room: Room, sender_id: str, num_lines: int) -> int:
    """Queue ``num_lines`` garbage lines for every player except the sender.

    Dead players still receive penalties. Returns the number of recipients.
    """
    with room.lock:
        room.ensure_open()
        recipients = 0
        for player in room.players:
            if player.id == sender_id:
                continue
            player.penalty_queue.append(num_lines)
            recipients += 1
        return recipients


def poll_penalty(room: Room, player_id: str, snapshot: str, now: Optional[float] = None) -> int:
    """Record the player's heartbeat and snapshot, then pop its oldest penalty.

    Returns 0 when nothing is pending.
    """
    with room.lock:
        player = room.get_player(player_id)
        player.last_snapshot = snapshot
        player.last_request_time = time.time() if now is None else now
        if player.penalty_queue:
            return player.penalty_queue.popleft()
        return 0
