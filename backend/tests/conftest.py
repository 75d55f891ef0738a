import os
import random
import sys
import threading
from collections import namedtuple

import pytest

# Ensure the backend root (containing the `partyhub` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from partyhub import create_app, db, socketio
from partyhub.hub import GameHub
from partyhub.models import User
from partyhub.services.registry import RoomRegistry
from partyhub.services.rooms import RoomDirectory
from partyhub.services.scheduler import AdvanceScheduler
from partyhub.services.state_store import GameStateStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    CORS_ORIGINS = ['http://localhost:5173']
    TEMP_ROOM_CAPACITY = 2
    PERMANENT_ROOM_CAPACITY = 8
    WOULD_YOU_RATHER_ADVANCE_SEC = 4
    THIS_OR_THAT_ADVANCE_SEC = 2
    RPS_ADVANCE_SEC = 3
    ENABLE_SCHEDULER_IN_TESTS = False


Player = namedtuple('Player', 'id name')


class RecordingTransport:
    """Stands in for Socket.IO: remembers every broadcast, send and group change."""

    def __init__(self):
        self.broadcasts = []
        self.sent = []
        self.groups = {}

    def broadcast(self, room_id, event, payload):
        self.broadcasts.append((room_id, event, payload))

    def send(self, sid, event, payload):
        self.sent.append((sid, event, payload))

    def join(self, sid, room_id):
        self.groups.setdefault(room_id, set()).add(sid)

    def leave(self, sid, room_id):
        self.groups.get(room_id, set()).discard(sid)

    def events(self, name):
        return [payload for _, event, payload in self.broadcasts if event == name]

    def last(self, name):
        found = self.events(name)
        return found[-1] if found else None

    def sent_to(self, sid, name=None):
        return [payload for to, event, payload in self.sent if to == sid and (name is None or event == name)]

    def errors(self, sid):
        return self.sent_to(sid, 'error')


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')


@pytest.fixture()
def players():
    return [Player('p1', 'Alice'), Player('p2', 'Bob')]


@pytest.fixture()
def hub(flask_app):
    lock = threading.RLock()
    registry = RoomRegistry(flask_app.logger)
    return GameHub(
        rooms=RoomDirectory(registry, rng=random.Random(11)),
        states=GameStateStore(),
        registry=registry,
        transport=RecordingTransport(),
        scheduler=AdvanceScheduler(socketio, flask_app, flask_app.logger, lock=lock, autostart=False),
        config=flask_app.config,
        logger=flask_app.logger,
        rng=random.Random(3),
        clock=FakeClock(),
        lock=lock,
    )


@pytest.fixture()
def make_user(flask_app):
    def _make(username, pin='1234'):
        user = User(username=username)
        user.set_pin(pin)
        db.session.add(user)
        db.session.commit()
        return user
    return _make
