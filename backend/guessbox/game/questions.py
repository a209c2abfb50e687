from __future__ import annotations

from .catalog import Answer, Entity
from .errors import UnknownQuestion


# question key -> (entity attribute, default label)
QUESTIONS: dict[str, tuple[str, str]] = {
    "alive": ("isAlive", "Is it alive?"),
    "animal": ("isAnimal", "Is it an animal?"),
    "food": ("isFood", "Is it food?"),
    "electronic": ("isElectronic", "Is it electronic?"),
    "vehicle": ("isVehicle", "Is it a vehicle?"),
    "portable": ("isPortable", "Can you carry it easily?"),
    "bigger_than_hand": ("isBiggerThanHand", "Bigger than your hand?"),
    "indoor": ("isIndoor", "Usually found indoors?"),
    "outdoor": ("isOutdoor", "Usually found outdoors?"),
}


def resolve(entity: Entity, question_key: str) -> Answer:
    """Answer one of the fixed questions about ``entity``.

    Custom wording never reaches this function: the attribute is always
    picked by ``question_key``.
    """
    try:
        attribute, _ = QUESTIONS[question_key]
    except KeyError:
        raise UnknownQuestion(f"Unknown question: {question_key}") from None
    return entity.attribute(attribute)


def question_label(question_key: str, custom_text: str | None = None) -> str:
    text = (custom_text or "").strip() if isinstance(custom_text, str) else ""
    return text or question_key


def list_questions() -> list[dict]:
    return [{"key": key, "label": label} for key, (_, label) in QUESTIONS.items()]
