from flask import Flask
from flask.json.provider import DefaultJSONProvider
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


class StrictJSONProvider(DefaultJSONProvider):
    """Refuse NaN and Infinity, which game clients cannot parse."""

    def dumps(self, obj, **kwargs):
        kwargs.setdefault('allow_nan', False)
        return super().dumps(obj, **kwargs)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.json = StrictJSONProvider(flask_app)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', [])
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry per application, shared by the routes and the reaper
    from tetris_rooms.services.games.registry import RoomRegistry
    registry = RoomRegistry(
        batch_size=int(flask_app.config.get('PIECE_BATCH_SIZE', 100)),
        penalty_seed=int(flask_app.config.get('PENALTY_QUEUE_SEED', 10)),
    )
    flask_app.extensions['room_registry'] = registry

    from tetris_rooms.main import main
    flask_app.register_blueprint(main)

    from tetris_rooms.api.games import games
    # Mounted at the root to match the game client's paths (/new, /register, ...)
    flask_app.register_blueprint(games)

    from tetris_rooms.socketio_events import register_socketio_handlers, broadcast_session_ended
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    from tetris_rooms.services.games.reaper import Reaper
    reaper = Reaper(
        registry,
        interval=float(flask_app.config.get('REAPER_INTERVAL_SEC', 5)),
        waiting_timeout=float(flask_app.config.get('WAITING_TIMEOUT_SEC', 120)),
        inactivity_timeout=float(flask_app.config.get('INACTIVITY_TIMEOUT_SEC', 10)),
        logger=flask_app.logger,
        on_evict=broadcast_session_ended,
        sleep=socketio.sleep,
    )
    flask_app.extensions['room_reaper'] = reaper

    # No background sweeps in tests; they call reaper.sweep() directly
    if not flask_app.config.get('TESTING') or flask_app.config.get('ENABLE_REAPER_IN_TESTS'):
        socketio.start_background_task(reaper.run)

    return flask_app
