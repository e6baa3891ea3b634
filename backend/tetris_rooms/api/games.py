from flask import Blueprint, jsonify, request, current_app
from tetris_rooms.errors import NotFound, RoomFull
from tetris_rooms.services.games.pieces import next_piece_window
from tetris_rooms.services.games.penalties import poll_penalty, send_lines
from tetris_rooms.socketio_events import broadcast_state_update


games = Blueprint('games', __name__)


def _registry():
    return current_app.extensions['room_registry']


def _int_arg(name: str) -> int:
    # Unparseable numbers count as 0, as the game client has always relied on
    try:
        return int(request.values.get(name, ''))
    except ValueError:
        return 0


def _float_arg(name: str) -> float:
    try:
        return float(request.values.get(name, ''))
    except ValueError:
        return 0.0


def _parse_dimensions(value: str):
    parts = (value or '').split('x')
    dims = []
    for part in (parts + ['', ''])[:2]:
        try:
            dims.append(int(part))
        except ValueError:
            dims.append(0)
    return dims[0], dims[1]


def _json_response(payload, status: int = 200):
    try:
        return jsonify(payload), status
    except (TypeError, ValueError) as exc:
        current_app.logger.error(f"[encode-error] status={status} error={exc}")
        return '', 500


def _not_found(exc: NotFound):
    return jsonify({'error': str(exc)}), 404


@games.route('/new', methods=['POST'])
def new_game():
    width, height = _parse_dimensions(request.values.get('dimensions'))
    room = _registry().create(
        width,
        height,
        _int_arg('size'),
        _float_arg('duck_prob'),
    )
    current_app.logger.info(
        f"[new] game={room.id} dimensions={width}x{height} size={room.capacity} duck_prob={room.duck_prob}"
    )
    response = _json_response(room.to_dict(), 201)
    if response[1] == 500:
        # A room the client could never read would also poison /list
        _registry().delete(room.id)
    return response


@games.route('/register', methods=['GET'])
def register_player():
    game_id = _int_arg('game_id')
    screen_name = request.values.get('screen_name', '')
    try:
        room = _registry().get(game_id)
        player_id = room.add_player(screen_name)
    except NotFound as exc:
        return _not_found(exc)
    except RoomFull as exc:
        current_app.logger.info(f"[register-full] game={game_id} name={screen_name}")
        return jsonify({'error': str(exc)}), 406

    current_app.logger.info(f"[register] game={game_id} player={player_id} started={room.running}")
    broadcast_state_update(game_id)
    return _json_response({'player_id': player_id})


@games.route('/unregister', methods=['POST'])
def unregister_player():
    game_id = _int_arg('game_id')
    player_id = request.values.get('player_id', '')
    try:
        _registry().get(game_id).unregister(player_id)
    except NotFound as exc:
        return _not_found(exc)

    current_app.logger.info(f"[unregister] game={game_id} player={player_id}")
    broadcast_state_update(game_id)
    return '', 200


@games.route('/list', methods=['GET'])
def list_games():
    rooms = _registry().list()
    return _json_response({str(room_id): room for room_id, room in rooms.items()})


@games.route('/getparts', methods=['GET'])
def get_parts():
    game_id = _int_arg('game_id')
    player_id = request.values.get('player_id', '')
    try:
        room = _registry().get(game_id)
        window = next_piece_window(room, player_id, logger=current_app.logger)
    except NotFound as exc:
        return _not_found(exc)
    return _json_response(window)


@games.route('/receive', methods=['GET'])
def receive_penalty():
    game_id = _int_arg('game_id')
    player_id = request.values.get('player_id', '')
    snapshot = request.values.get('game_snapshot', '')
    try:
        room = _registry().get(game_id)
        penalty = poll_penalty(room, player_id, snapshot)
    except NotFound as exc:
        return _not_found(exc)
    return _json_response({'penalty': penalty})


@games.route('/sendlines', methods=['GET'])
def send_cleared_lines():
    game_id = _int_arg('game_id')
    player_id = request.values.get('player_id', '')
    num_lines = _int_arg('num_lines')
    try:
        room = _registry().get(game_id)
        recipients = send_lines(room, player_id, num_lines)
    except NotFound as exc:
        return _not_found(exc)

    current_app.logger.info(f"[sendlines] game={game_id} from={player_id} lines={num_lines} recipients={recipients}")
    return _json_response({'status': 'ok'})


@games.route('/status', methods=['GET'])
def game_status():
    try:
        payload = _registry().get(_int_arg('game_id')).to_dict()
    except NotFound:
        payload = None
    return _json_response(payload)
