import os
import sys
import pytest

# Ensure the backend root (containing the `tetris_rooms` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tetris_rooms import create_app, socketio


class TestConfig:
    TESTING = True
    CORS_ORIGINS = ['http://localhost:5173']
    PIECE_BATCH_SIZE = 5
    PENALTY_QUEUE_SEED = 10
    REAPER_INTERVAL_SEC = 5
    WAITING_TIMEOUT_SEC = 120
    INACTIVITY_TIMEOUT_SEC = 10


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return flask_app.extensions['room_registry']


@pytest.fixture()
def reaper(flask_app):
    return flask_app.extensions['room_reaper']


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
