# gunicorn -k eventlet -w 1 backend.wsgi:app
# Rooms live in process memory, so run a single worker.
try:
    from backend.guessbox.server import create_app
except ImportError:  # pragma: no cover
    from guessbox.server import create_app

app, socketio = create_app()
