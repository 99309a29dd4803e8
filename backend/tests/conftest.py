import os
import random
import sys
import pytest

# Ensure the backend root (containing the `dotsdice` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from dotsdice import create_app, socketio
from dotsdice.services.games.registry import RoomRegistry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ALLOWED_ORIGINS = ['*']
    SOCKETIO_NAMESPACE = '/'
    DEFAULT_BOARD_SIZE = 3
    MIN_BOARD_SIZE = 1
    MAX_BOARD_SIZE = 8
    ROOM_CODE_LENGTH = 5
    FINISHED_ROOM_TTL_SEC = 60


@pytest.fixture()
def registry():
    return RoomRegistry.from_config(vars(TestConfig), rng=random.Random(1234))


@pytest.fixture()
def flask_app(registry):
    application = create_app(TestConfig, registry=registry)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    """Factory for Socket.IO test clients; all are disconnected at teardown."""
    created = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        # Drop the greeting so tests only see what they trigger
        test_client.get_received()
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


def payloads(packets, name):
    """First argument of every packet called ``name``."""
    return [pkt['args'][0] if pkt['args'] else None for pkt in packets if pkt['name'] == name]
