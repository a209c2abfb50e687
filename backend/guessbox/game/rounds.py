from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Sequence

from .catalog import Answer, Entity
from .errors import DuplicateQuestion, InvalidInput, NotActive
from .models import Outcome, Round
from .questions import question_label, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuestionAnswer:
    question_key: str
    label: str
    answer: Answer


@dataclass(frozen=True)
class GuessResult:
    correct: bool
    secret_name: str


@dataclass(frozen=True)
class ForfeitResult:
    ended: bool
    secret_name: str | None


def pick_entity(
    catalog: Sequence[Entity],
    used_names: set[str],
    rng: random.Random | None = None,
) -> Entity:
    """Uniform draw over entities not yet used in this room.

    Once every entity has been used, ``used_names`` is cleared in place and
    the draw covers the whole catalog again. The chosen name is recorded.
    """
    rng = rng or random
    available = [e for e in catalog if e.name not in used_names]
    if not available:
        used_names.clear()
        available = list(catalog)

    chosen = rng.choice(available)
    used_names.add(chosen.name)
    return chosen


def start_round(
    catalog: Sequence[Entity],
    used_names: set[str],
    number: int = 1,
    rng: random.Random | None = None,
) -> Round:
    secret = pick_entity(catalog, used_names, rng)
    logger.debug("round %s secret object: %s", number, secret.name)
    return Round(secret=secret, state="active", number=number)


def ask_question(rnd: Round, question_key: str, custom_text: str | None = None) -> QuestionAnswer:
    if not rnd.is_active or rnd.secret is None:
        raise NotActive()

    key = question_key.strip() if isinstance(question_key, str) else ""
    if not key:
        raise InvalidInput("Pick a question to ask.")

    label = question_label(key, custom_text)
    label_key = label.lower()
    if label_key in rnd.asked_labels:
        raise DuplicateQuestion()

    # Resolve before recording so an unknown key leaves the round untouched.
    answer = resolve(rnd.secret, key)
    rnd.asked_labels.add(label_key)
    return QuestionAnswer(question_key=key, label=label, answer=answer)


def submit_guess(rnd: Round, text: str, guesser_id: str, guesser_name: str | None = None) -> GuessResult:
    if not rnd.is_active or rnd.secret is None:
        raise NotActive()

    if not isinstance(text, str) or not text.strip():
        raise InvalidInput("Guess is empty.", silent=True)

    if text.strip().lower() != rnd.secret.name.lower():
        return GuessResult(correct=False, secret_name=rnd.secret.name)

    rnd.state = "ended"
    rnd.outcome = Outcome(kind="won", winner_id=guesser_id, winner_name=guesser_name)
    return GuessResult(correct=True, secret_name=rnd.secret.name)


def add_forfeit(rnd: Round, player_id: str, member_ids: Iterable[str]) -> ForfeitResult:
    # Recorded in every state; only an active round can end here.
    rnd.forfeited_ids.add(player_id)

    members = set(member_ids)
    if rnd.is_active and members and members <= rnd.forfeited_ids:
        rnd.state = "ended"
        rnd.outcome = Outcome(kind="forfeited")
        return ForfeitResult(ended=True, secret_name=rnd.secret_name)

    return ForfeitResult(ended=False, secret_name=None)
