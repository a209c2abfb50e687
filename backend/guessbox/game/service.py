from __future__ import annotations

import logging
import random
from dataclasses import asdict, dataclass
from threading import RLock
from typing import Sequence

from ..config import Config
from .catalog import Entity
from .errors import InvalidInput, NotActive, RoomFull
from .models import Player, Room
from .rounds import (
    ForfeitResult,
    GuessResult,
    QuestionAnswer,
    add_forfeit,
    ask_question,
    start_round,
    submit_guess,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinResult:
    room: Room
    player: Player
    started: bool


@dataclass(frozen=True)
class LeaveResult:
    code: str
    players: list[dict]
    destroyed: bool


class RoomRegistry:
    """All live rooms of one server process.

    Rooms are created on the first join to an unseen code and destroyed as
    soon as their last player leaves. Nothing outside this class mutates a
    Room or its Round.
    """

    def __init__(
        self,
        catalog: Sequence[Entity],
        rng: random.Random | None = None,
        score_by: str = "id",
        max_players: int = Config.MAX_PLAYERS_PER_ROOM,
    ) -> None:
        if score_by not in ("id", "name"):
            raise ValueError(f"score_by must be 'id' or 'name', got {score_by!r}")
        self.catalog = tuple(catalog)
        self.rng = rng or random.Random()
        self.score_by = score_by
        self.max_players = max_players
        self._lock = RLock()
        self._rooms: dict[str, Room] = {}

    # -- lookup --

    def get_room(self, code: str) -> Room | None:
        with self._lock:
            return self._rooms.get(code)

    def list_rooms(self) -> list[Room]:
        with self._lock:
            return list(self._rooms.values())

    def delete_room(self, code: str) -> bool:
        with self._lock:
            if code in self._rooms:
                del self._rooms[code]
                logger.info("room %s destroyed", code)
                return True
            return False

    def _member_room(self, code: str, player_id: str) -> tuple[Room, Player]:
        room = self._rooms.get(code)
        if room is None:
            raise NotActive(f"No room {code!r}")
        player = room.find_player(player_id)
        if player is None:
            raise NotActive(f"{player_id} is not in room {code!r}")
        return room, player

    # -- membership --

    def join(self, code: str, player_id: str, name: str) -> JoinResult:
        code = code if isinstance(code, str) else ""
        name = name.strip() if isinstance(name, str) else ""
        if not code.strip() or not name:
            raise InvalidInput()

        with self._lock:
            room = self._rooms.get(code)
            if room is None:
                room = Room(code=code)
                self._rooms[code] = room
                logger.info("room %s created", code)

            player = room.find_player(player_id)
            if player is not None:
                player.name = name
            else:
                if len(room.players) >= self.max_players:
                    raise RoomFull()
                player = Player(id=player_id, name=name, score=0)
                room.players.append(player)

            started = False
            if len(room.players) == self.max_players and not room.has_active_round:
                self._start(room)
                started = True

            return JoinResult(room=room, player=player, started=started)

    def leave(self, player_id: str) -> list[LeaveResult]:
        results: list[LeaveResult] = []
        with self._lock:
            for room in list(self._rooms.values()):
                before = len(room.players)
                room.players = [p for p in room.players if p.id != player_id]
                if len(room.players) == before:
                    continue

                destroyed = not room.players
                if destroyed:
                    self.delete_room(room.code)
                results.append(
                    LeaveResult(code=room.code, players=self.player_list(room), destroyed=destroyed)
                )
        return results

    # -- rounds --

    def _start(self, room: Room) -> None:
        room.rounds_played += 1
        room.round = start_round(
            self.catalog,
            room.used_entity_names,
            number=room.rounds_played,
            rng=self.rng,
        )
        logger.info("room %s: round %s started", room.code, room.rounds_played)

    def new_game(self, code: str) -> Room:
        with self._lock:
            room = self._rooms.get(code)
            if room is None:
                raise NotActive(f"No room {code!r}")
            self._start(room)
            return room

    def ask_question(
        self, code: str, player_id: str, question_key: str, custom_text: str | None = None
    ) -> tuple[Room, Player, QuestionAnswer]:
        with self._lock:
            room, player = self._member_room(code, player_id)
            if room.round is None:
                raise NotActive()
            return room, player, ask_question(room.round, question_key, custom_text)

    def make_guess(self, code: str, player_id: str, text: str) -> tuple[Room, Player, GuessResult]:
        with self._lock:
            room, player = self._member_room(code, player_id)
            if room.round is None:
                raise NotActive()

            result = submit_guess(room.round, text, guesser_id=player.id, guesser_name=player.name)
            if result.correct:
                room.rounds_won += 1
                credited = self._credit_winner(room, player)
                logger.info(
                    "room %s: %s guessed %s (credited: %s)",
                    room.code,
                    player.name,
                    result.secret_name,
                    credited.name if credited else None,
                )
            return room, player, result

    def _credit_winner(self, room: Room, guesser: Player) -> Player | None:
        if self.score_by == "name":
            # Legacy behaviour: first player carrying the guesser's display name.
            winner = next((p for p in room.players if p.name == guesser.name), None)
        else:
            winner = room.find_player(guesser.id)
        if winner is not None:
            winner.score += 1
        return winner

    def forfeit(self, code: str, player_id: str) -> tuple[Room, Player, ForfeitResult]:
        with self._lock:
            room, player = self._member_room(code, player_id)
            if room.round is None:
                return room, player, ForfeitResult(ended=False, secret_name=None)

            result = add_forfeit(room.round, player.id, room.member_ids())
            if result.ended:
                logger.info("room %s: all players forfeited, object was %s", room.code, result.secret_name)
            return room, player, result

    # -- views --

    def player_list(self, room: Room) -> list[dict]:
        with self._lock:
            return [asdict(p) for p in room.players]

    def public_state(self, room: Room) -> dict:
        with self._lock:
            rnd = room.round
            payload = {
                "code": room.code,
                "players": self.player_list(room),
                "round": rnd.number if rnd else 0,
                "state": rnd.state if rnd else "not_started",
                "askedQuestions": len(rnd.asked_labels) if rnd else 0,
                "forfeited": sorted(rnd.forfeited_ids) if rnd else [],
                "winner": None,
            }

            # Only reveal the secret once the round is over.
            if rnd is not None and rnd.state == "ended":
                payload["secretObject"] = rnd.secret_name
                if rnd.outcome is not None:
                    payload["winner"] = rnd.outcome.winner_name

            return payload
