from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .catalog import Entity


RoundState = Literal["not_started", "active", "ended"]
OutcomeKind = Literal["won", "forfeited"]


@dataclass
class Player:
    id: str
    name: str
    score: int = 0


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    winner_id: str | None = None
    winner_name: str | None = None


@dataclass
class Round:
    secret: Entity | None = None
    state: RoundState = "not_started"
    number: int = 0
    asked_labels: set[str] = field(default_factory=set)
    forfeited_ids: set[str] = field(default_factory=set)
    outcome: Outcome | None = None

    @property
    def is_active(self) -> bool:
        return self.state == "active"

    @property
    def secret_name(self) -> str | None:
        return self.secret.name if self.secret else None


@dataclass
class Room:
    code: str
    players: list[Player] = field(default_factory=list)
    used_entity_names: set[str] = field(default_factory=set)
    round: Round | None = None
    rounds_played: int = 0
    rounds_won: int = 0

    def find_player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def member_ids(self) -> list[str]:
        return [p.id for p in self.players]

    @property
    def has_active_round(self) -> bool:
        return self.round is not None and self.round.is_active
