import os
import sys
import pytest

# Ensure the backend root (containing the `partnerquiz` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from partnerquiz import create_app, socketio
from partnerquiz.services.games.store import RoomStore


QUESTIONS = [{'question': f'Question {n}?', 'options': ['A', 'B', 'C']} for n in range(12)]


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ALLOWED_ORIGINS = ['http://localhost:3000']
    SOCKETIO_NAMESPACE = '/'
    STATIC_FOLDER = Config.STATIC_FOLDER
    QUESTIONS_PATH = Config.QUESTIONS_PATH
    QUESTIONS_PER_GAME = 10
    ROOM_IDLE_TIMEOUT_SEC = 30 * 60
    REAPER_INTERVAL_SEC = 5 * 60


class Recorder:
    """Stand-in for the Socket.IO broadcast: records (event, payload, room)."""

    def __init__(self):
        self.events = []

    def __call__(self, event, payload, room_code):
        self.events.append((event, payload, room_code))

    def names(self):
        return [name for name, _, _ in self.events]

    def last(self, event):
        for name, payload, _ in reversed(self.events):
            if name == event:
                return payload
        return None

    def clear(self):
        self.events = []


@pytest.fixture()
def store():
    return RoomStore(QUESTIONS, questions_per_game=10)


@pytest.fixture()
def broadcast():
    return Recorder()


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def room_store(flask_app):
    return flask_app.extensions['room_store']


@pytest.fixture()
def sio_client(flask_app):
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
