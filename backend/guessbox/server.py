from __future__ import annotations

import logging
import random
from pathlib import Path

from flask import Flask, send_from_directory
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config, socketio_async_mode
from .game.catalog import DEFAULT_CATALOG, load_catalog
from .game.service import RoomRegistry
from .routes.health import bp as health_bp
from .routes.questions import bp as questions_bp
from .routes.rooms import bp as rooms_bp
from .realtime.handlers import register_socketio_handlers


def _configure_logging(level: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # "guessbox" or "backend.guessbox", depending on how the app was imported.
    package_logger = logging.getLogger(__package__)
    package_logger.setLevel(level)
    return package_logger


def create_app(config_class=Config, rng: random.Random | None = None) -> tuple[Flask, SocketIO]:
    dist_dir = Path(__file__).resolve().parents[2] / "frontend" / "dist"

    static_folder = str(dist_dir) if dist_dir.exists() else None
    static_url_path = "/" if dist_dir.exists() else None

    app = Flask(
        __name__,
        static_folder=static_folder,
        static_url_path=static_url_path,
    )
    app.config.from_object(config_class)

    _configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    if app.config.get("TRUST_PROXY_HEADERS", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    cors_origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": cors_origins}})

    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=socketio_async_mode(app.config.get("TESTING", False)),
    )

    catalog_path = app.config.get("CATALOG_PATH", "")
    catalog = load_catalog(catalog_path) if catalog_path else DEFAULT_CATALOG

    registry = RoomRegistry(
        catalog,
        rng=rng,
        score_by=app.config.get("SCORE_BY", "id"),
        max_players=app.config.get("MAX_PLAYERS_PER_ROOM", 2),
    )
    app.extensions["guessbox"] = registry

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(questions_bp, url_prefix="/api")
    app.register_blueprint(rooms_bp, url_prefix="/api")

    register_socketio_handlers(socketio, registry)

    if dist_dir.exists():
        @app.get("/")
        def index():
            return send_from_directory(dist_dir, "index.html")

        @app.get("/<path:path>")
        def static_proxy(path: str):
            file_path = dist_dir / path
            if file_path.exists() and file_path.is_file():
                return send_from_directory(dist_dir, path)
            return send_from_directory(dist_dir, "index.html")
    else:
        @app.get("/")
        def index():
            return "Guess in the Box server running!"

    return app, socketio
