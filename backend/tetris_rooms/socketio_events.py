from flask_socketio import join_room, leave_room, emit
from tetris_rooms import socketio


def _channel(game_id) -> str:
    return f"game:{game_id}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_game(data):
    game_id = (data or {}).get('game_id')
    if game_id is None:
        emit('error', {'message': 'game_id is required'})
        return
    room = _channel(game_id)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_game(data):
    game_id = (data or {}).get('game_id')
    if game_id is None:
        emit('error', {'message': 'game_id is required'})
        return
    room = _channel(game_id)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def broadcast_state_update(game_id: int) -> None:
    """Tell everyone watching a game that its roster or status changed."""
    socketio.emit('state_update', {'game_id': game_id}, to=_channel(game_id), namespace='/ws')


def broadcast_session_ended(game_id: int, reason: str = '') -> None:
    # Called from the reaper's background task, outside any request context
    socketio.emit('session_ended', {'game_id': game_id, 'reason': reason}, to=_channel(game_id), namespace='/ws')


def register_socketio_handlers(testing: bool = False) -> None:
    """Bind the room subscription handlers.

    Game clients subscribe on '/ws'. Under TESTING the same handlers are
    bound on '/' too, where the Socket.IO test client connects by default.
    """
    for namespace in (('/ws', '/') if testing else ('/ws',)):
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_game', handle_join_game, namespace=namespace)
        socketio.on_event('leave_game', handle_leave_game, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
