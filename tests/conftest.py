"""
Shared fixtures: in-memory MongoDB, recording transport, wired app state
"""
import mongomock
import pytest
from fastapi.testclient import TestClient

from peerpulse import state
from peerpulse.db import MongoStore
from peerpulse.main import app
from peerpulse.models import Criterion, Settings
from peerpulse.transport.base import Transport


class RecordingTransport(Transport):
    """Collects broadcasts instead of sending them"""

    name = "recording"

    def __init__(self):
        self.sent = []

    async def broadcast(self, event, payload=None):
        self.sent.append((event, payload))

    @property
    def events(self):
        return [event for event, _ in self.sent]

    def last(self, event):
        return [payload for name, payload in self.sent if name == event][-1]


@pytest.fixture
def store():
    db = mongomock.MongoClient()["peerpulse_test"]
    mongo_store = MongoStore(db)
    mongo_store.ensure_indexes()
    return mongo_store


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def settings():
    return Settings(criteria=[
        Criterion(id="content", label="Content Quality", description="Technical accuracy and depth of content"),
        Criterion(id="teamwork", label="Team Coordination", description="Collaboration and team dynamics"),
    ])


@pytest.fixture
def wired(settings, store, transport):
    state.wire(settings, store, transport)
    yield state
    state.reset()


@pytest.fixture
def client(wired):
    return TestClient(app)
