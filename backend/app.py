import os
from pathlib import Path

from dotenv import load_dotenv


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default) == "1"


def main() -> None:
    load_dotenv(Path(__file__).resolve().parents[1] / ".env")

    # Only os/sys behind this import, so it is safe before monkey patching.
    try:
        from backend.guessbox.config import socketio_async_mode
    except ImportError:  # pragma: no cover
        from guessbox.config import socketio_async_mode

    if socketio_async_mode() == "eventlet":
        import eventlet

        eventlet.monkey_patch()

    try:
        from backend.guessbox.server import create_app
    except ImportError:  # pragma: no cover
        from guessbox.server import create_app

    app, socketio = create_app()

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "4000"))
    app.logger.info("Guess in the Box listening on %s:%s", host, port)

    socketio.run(
        app,
        host=host,
        port=port,
        debug=_env_flag("FLASK_DEBUG", "0"),
        allow_unsafe_werkzeug=_env_flag("ALLOW_UNSAFE_WERKZEUG", "1"),
        use_reloader=_env_flag("FLASK_USE_RELOADER", "0"),
    )


if __name__ == "__main__":
    main()
