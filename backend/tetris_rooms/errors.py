class NotFound(Exception):
    """A room or player id is not present."""


class RoomNotFound(NotFound):
    def __init__(self, room_id):
        super().__init__(f"Game {room_id} not found")
        self.room_id = room_id


class PlayerNotFound(NotFound):
    def __init__(self, room_id, player_id):
        super().__init__(f"Player {player_id!r} not found in game {room_id}")
        self.room_id = room_id
        self.player_id = player_id


class RoomFull(Exception):
    def __init__(self, room_id, capacity):
        super().__init__(f"Game {room_id} is full ({capacity} players)")
        self.room_id = room_id
        self.capacity = capacity
