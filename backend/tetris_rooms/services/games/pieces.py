import random
from typing import List

from tetris_rooms.models import Room

# Piece types: 0 is the duck (wildcard), 1-7 the standard tetrominoes
DUCK_PIECE = 0
NUM_STANDARD_PIECES = 7


def create_random_pieces(duck_prob: float, amount: int, rng=random) -> List[int]:
    """Draw ``amount`` piece types, each a duck with probability ``duck_prob``."""
    pieces = []
    for _ in range(amount):
        if rng.random() < duck_prob:
            pieces.append(DUCK_PIECE)
        else:
            pieces.append(rng.randint(1, NUM_STANDARD_PIECES))
    return pieces


def next_piece_window(room: Room, player_id: str, rng=random, logger=None) -> List[int]:
    """Hand the player the next window of the room's shared piece queue.

    The queue is grown a batch at a time and never rewritten, so every
    player sees the same piece at the same offset.
    """
    with room.lock:
        player = room.get_player(player_id)
        batch = room.batch_size
        while player.part_index + batch > len(room.piece_queue):
            room.piece_queue.extend(create_random_pieces(room.duck_prob, batch, rng=rng))
            if logger is not None:
                logger.debug(f"[parts] game={room.id} generated={batch} total={len(room.piece_queue)}")
        window = room.piece_queue[player.part_index:player.part_index + batch]
        player.part_index += batch
        return window
