import os
import sys


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Reverse proxy / IP headers
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "1") == "1"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Game
    MAX_PLAYERS_PER_ROOM = 2
    MAX_NAME_LENGTH = int(os.environ.get("MAX_NAME_LENGTH", "16"))
    # Optional JSON file replacing the built-in object list.
    CATALOG_PATH = os.environ.get("CATALOG_PATH", "")
    # "id" credits the guessing connection, "name" the first player sharing the guesser's name.
    SCORE_BY = os.environ.get("SCORE_BY", "id").strip().lower()


def socketio_async_mode(testing: bool = False) -> str:
    env_async_mode = os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()
    if env_async_mode:
        return env_async_mode
    # Default choice:
    # - Windows: threading (eventlet has known compatibility issues on newer Python)
    # - Python >= 3.13: threading (safer default)
    # - Tests: threading, the test client needs no green threads
    # - Otherwise: eventlet
    if testing or sys.platform.startswith("win") or sys.version_info >= (3, 13):
        return "threading"
    return "eventlet"
