import random

import pytest

from guessbox.game.catalog import DEFAULT_CATALOG, build_catalog
from guessbox.game.errors import DuplicateQuestion, InvalidInput, NotActive, UnknownQuestion
from guessbox.game.models import Round
from guessbox.game.rounds import add_forfeit, ask_question, pick_entity, start_round, submit_guess


@pytest.fixture()
def rnd():
    catalog = build_catalog([{"name": "Cat", "isAlive": True, "isPortable": "maybe"}])
    return start_round(catalog, set(), rng=random.Random(1))


def test_pick_entity_skips_used_names():
    rng = random.Random(3)
    used = {"apple", "cat", "phone", "car", "book", "pizza"}
    chosen = pick_entity(DEFAULT_CATALOG, used, rng)
    assert chosen.name == "laptop"
    assert "laptop" in used


def test_pick_entity_cycles_through_the_whole_catalog():
    rng = random.Random(11)
    used = set()
    names = [pick_entity(DEFAULT_CATALOG, used, rng).name for _ in DEFAULT_CATALOG]
    assert sorted(names) == sorted(e.name for e in DEFAULT_CATALOG)

    # Exhausted: the next draw resets the history and starts a new cycle.
    again = pick_entity(DEFAULT_CATALOG, used, rng)
    assert used == {again.name}


def test_pick_entity_is_roughly_uniform():
    rng = random.Random(5)
    counts = {e.name: 0 for e in DEFAULT_CATALOG}
    for _ in range(7000):
        counts[pick_entity(DEFAULT_CATALOG, set(), rng).name] += 1
    assert all(800 < n < 1200 for n in counts.values())


def test_start_round_is_active_and_fresh(rnd):
    assert rnd.is_active
    assert rnd.secret_name == "Cat"
    assert rnd.asked_labels == set()
    assert rnd.forfeited_ids == set()
    assert rnd.outcome is None


def test_ask_question_records_label(rnd):
    qa = ask_question(rnd, "alive")
    assert qa.answer.value == "yes"
    assert qa.label == "alive"
    assert rnd.asked_labels == {"alive"}


def test_custom_text_is_label_but_key_picks_attribute(rnd):
    qa = ask_question(rnd, "portable", "  Could I carry it?  ")
    assert qa.label == "Could I carry it?"
    assert qa.answer.value == "maybe"
    assert rnd.asked_labels == {"could i carry it?"}


def test_duplicate_question_is_case_insensitive_and_leaves_state(rnd):
    ask_question(rnd, "alive", "Is it ALIVE?")
    with pytest.raises(DuplicateQuestion):
        ask_question(rnd, "food", "is it alive?")
    assert rnd.asked_labels == {"is it alive?"}


def test_unknown_question_does_not_record(rnd):
    with pytest.raises(UnknownQuestion):
        ask_question(rnd, "colour")
    assert rnd.asked_labels == set()


def test_blank_question_key(rnd):
    with pytest.raises(InvalidInput):
        ask_question(rnd, "  ")


def test_wrong_guess_keeps_round_active(rnd):
    result = submit_guess(rnd, "dog", "p1", "Ann")
    assert result.correct is False
    assert rnd.is_active
    assert rnd.outcome is None


def test_correct_guess_is_trimmed_and_case_insensitive(rnd):
    result = submit_guess(rnd, "  cAT ", "p1", "Ann")
    assert result.correct is True
    assert result.secret_name == "Cat"
    assert rnd.state == "ended"
    assert rnd.outcome.kind == "won"
    assert rnd.outcome.winner_id == "p1"


def test_blank_guess_is_a_silent_invalid_input(rnd):
    with pytest.raises(InvalidInput) as exc_info:
        submit_guess(rnd, "   ", "p1")
    assert exc_info.value.silent
    with pytest.raises(InvalidInput):
        submit_guess(rnd, None, "p1")
    assert rnd.is_active


def test_ended_round_rejects_ask_and_guess(rnd):
    submit_guess(rnd, "cat", "p1")
    outcome = rnd.outcome
    with pytest.raises(NotActive):
        ask_question(rnd, "alive")
    with pytest.raises(NotActive):
        submit_guess(rnd, "cat", "p2")
    assert rnd.outcome is outcome


def test_not_started_round_rejects_ask():
    with pytest.raises(NotActive):
        ask_question(Round(), "alive")


def test_forfeit_ends_only_when_every_member_forfeited(rnd):
    first = add_forfeit(rnd, "p1", ["p1", "p2"])
    assert first.ended is False
    assert rnd.is_active

    again = add_forfeit(rnd, "p1", ["p1", "p2"])
    assert again.ended is False
    assert rnd.forfeited_ids == {"p1"}

    second = add_forfeit(rnd, "p2", ["p1", "p2"])
    assert second.ended is True
    assert second.secret_name == "Cat"
    assert rnd.outcome.kind == "forfeited"
    assert rnd.outcome.winner_id is None


def test_forfeit_after_end_is_recorded_but_changes_nothing(rnd):
    submit_guess(rnd, "cat", "p1")
    result = add_forfeit(rnd, "p2", ["p1", "p2"])
    assert result.ended is False
    assert "p2" in rnd.forfeited_ids
    assert rnd.outcome.kind == "won"
