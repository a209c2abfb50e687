from __future__ import annotations


class GameError(Exception):
    """Base for failures reported back to the connection that caused them."""

    code = "game_error"
    message = "Something went wrong."
    # Silent errors are dropped at the gateway instead of reaching the client.
    silent = False

    def __init__(self, message: str | None = None, silent: bool | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message
        if silent is not None:
            self.silent = silent


class RoomFull(GameError):
    code = "room_full"
    message = "Room is full."


class UnknownQuestion(GameError):
    code = "unknown_question"
    message = "Unknown question."


class DuplicateQuestion(GameError):
    code = "duplicate_question"
    message = "That question was already asked."


class InvalidInput(GameError):
    code = "invalid_input"
    message = "Room code and name required."


class NotActive(GameError):
    code = "not_active"
    message = "Nothing to do right now."
    silent = True
