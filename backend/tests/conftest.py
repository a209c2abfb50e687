import random

import pytest

from guessbox.game.catalog import DEFAULT_CATALOG
from guessbox.game.service import RoomRegistry
from guessbox.server import create_app


class TestConfig:
    TESTING = True
    SECRET_KEY = "test-secret"
    CORS_ORIGINS = "*"
    TRUST_PROXY_HEADERS = False
    LOG_LEVEL = "DEBUG"
    MAX_PLAYERS_PER_ROOM = 2
    MAX_NAME_LENGTH = 16
    CATALOG_PATH = ""
    SCORE_BY = "id"


@pytest.fixture()
def registry():
    return RoomRegistry(DEFAULT_CATALOG, rng=random.Random(7))


@pytest.fixture()
def app_and_socketio():
    return create_app(TestConfig, rng=random.Random(7))


@pytest.fixture()
def flask_app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture()
def socketio(app_and_socketio):
    return app_and_socketio[1]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app, socketio):
    clients = []

    def make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield make

    for c in clients:
        try:
            if c.is_connected():
                c.disconnect()
        except Exception:
            pass


def events_named(received, name):
    return [pkt["args"][0] if pkt["args"] else None for pkt in received if pkt["name"] == name]
