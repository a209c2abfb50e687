from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from flask import current_app, request
from flask_socketio import SocketIO, emit, join_room

from ..config import Config
from ..game.errors import GameError, InvalidInput
from ..game.models import Room
from ..game.service import RoomRegistry
from . import events

logger = logging.getLogger(__name__)


def _validate_name(name: str, max_length: int = Config.MAX_NAME_LENGTH) -> bool:
    n = (name or "").strip()
    if not n:
        return False
    if len(n) > max_length:
        return False
    # Avoid obvious HTML/script injection.
    if "<" in n or ">" in n:
        return False
    # No control characters.
    for ch in n:
        if ord(ch) < 32:
            return False
    return True


def _room_code(payload: dict) -> str:
    # Codes are matched exactly as typed; only a blank code counts as missing.
    code = payload.get("roomCode")
    if not isinstance(code, str) or not code.strip():
        return ""
    return code


def register_socketio_handlers(socketio: SocketIO, registry: RoomRegistry) -> None:
    def recovered(handler: Callable[[dict], Any]) -> Callable[..., Any]:
        """Turn game errors into an error_message for the calling socket only."""

        @functools.wraps(handler)
        def wrapper(data=None):
            payload = data if isinstance(data, dict) else {}
            try:
                return handler(payload)
            except GameError as exc:
                if exc.silent:
                    logger.debug("%s from %s ignored: %s", handler.__name__, request.sid, exc)
                    return None
                logger.info("%s from %s rejected: %s", handler.__name__, request.sid, exc.code)
                emit(events.ERROR_MESSAGE, {"message": exc.message, "code": exc.code})
                return None

        return wrapper

    def _broadcast_scores(room: Room) -> None:
        socketio.emit(events.SCORES_UPDATED, {"players": registry.player_list(room)}, to=room.code)

    def _broadcast_started(room: Room) -> None:
        socketio.emit(
            events.GAME_STARTED,
            {
                "message": "New game started! Ask yes/no questions or try to guess the object.",
                "round": room.rounds_played,
                "wins": room.rounds_won,
            },
            to=room.code,
        )
        _broadcast_scores(room)

    @socketio.on("connect")
    def on_connect(auth=None):
        logger.info("player connected: %s", request.sid)

    @socketio.on(events.JOIN_ROOM)
    @recovered
    def on_join_room(payload: dict):
        room_code = _room_code(payload)
        name = str(payload.get("playerName") or "").strip()
        if not room_code or not name:
            raise InvalidInput("Room code and name required.")
        if not _validate_name(name, current_app.config.get("MAX_NAME_LENGTH", Config.MAX_NAME_LENGTH)):
            raise InvalidInput("That name can't be used.")

        result = registry.join(room_code, request.sid, name)
        room = result.room
        join_room(room_code)

        players = registry.player_list(room)
        emit(events.ROOM_JOINED, {"roomCode": room_code, "playerName": name, "players": players})
        emit(
            events.PLAYER_JOINED,
            {"playerName": name, "players": players},
            to=room_code,
            include_self=False,
        )

        if result.started:
            _broadcast_started(room)
        else:
            emit(events.WAITING_FOR_PLAYER, {"message": "Waiting for another player…"})

    @socketio.on(events.ASK_QUESTION)
    @recovered
    def on_ask_question(payload: dict):
        room_code = _room_code(payload)
        question_key = payload.get("questionKey")
        custom_text = payload.get("questionText")

        room, player, qa = registry.ask_question(room_code, request.sid, question_key, custom_text)
        socketio.emit(
            events.QUESTION_ANSWERED,
            {
                "questionKey": qa.question_key,
                "questionLabel": qa.label,
                "answer": qa.answer.value,
                "playerName": player.name,
                "playerId": player.id,
            },
            to=room.code,
        )

    @socketio.on(events.MAKE_GUESS)
    @recovered
    def on_make_guess(payload: dict):
        room_code = _room_code(payload)
        text = payload.get("guess")

        room, player, result = registry.make_guess(room_code, request.sid, text)
        if not result.correct:
            # Wrong guesses stay private to the guesser.
            emit(events.GUESS_RESULT, {"correct": False, "message": "Nope! Keep guessing 🔎"})
            return

        socketio.emit(
            events.GAME_OVER,
            {"winner": player.name, "winnerId": player.id, "secretObject": result.secret_name},
            to=room.code,
        )
        _broadcast_scores(room)

    @socketio.on(events.FORFEIT)
    @recovered
    def on_forfeit(payload: dict):
        room_code = _room_code(payload)

        room, player, result = registry.forfeit(room_code, request.sid)
        socketio.emit(
            events.PLAYER_FORFEITED,
            {"playerName": player.name, "playerId": player.id},
            to=room.code,
        )
        if result.ended:
            socketio.emit(
                events.GAME_OVER,
                {"winner": None, "winnerId": None, "secretObject": result.secret_name},
                to=room.code,
            )

    @socketio.on(events.NEW_GAME)
    @recovered
    def on_new_game(payload: dict):
        room = registry.new_game(_room_code(payload))
        _broadcast_started(room)

    @socketio.on("disconnect")
    def on_disconnect(reason=None):
        logger.info("player disconnected: %s", request.sid)
        for left in registry.leave(request.sid):
            if left.destroyed:
                continue
            socketio.emit(
                events.PLAYER_LEFT,
                {"players": left.players},
                to=left.code,
                skip_sid=request.sid,
            )
