from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from .errors import InvalidInput


class Answer(str, Enum):
    YES = "yes"
    NO = "no"
    MAYBE = "maybe"


def to_answer(value: Any) -> Answer:
    if value is True:
        return Answer.YES
    if value is False:
        return Answer.NO
    return Answer.MAYBE


@dataclass(frozen=True)
class Entity:
    name: str
    attributes: Mapping[str, Answer] = field(default_factory=dict)

    def attribute(self, key: str) -> Answer:
        return self.attributes.get(key, Answer.MAYBE)


# Built-in object list: attribute values are True / False / "maybe".
DEFAULT_OBJECTS: list[dict[str, Any]] = [
    {
        "name": "apple",
        "isAlive": False,
        "isFood": True,
        "isElectronic": False,
        "isBiggerThanHand": False,
        "isPortable": True,
        "isAnimal": False,
        "isVehicle": False,
        "isIndoor": True,
        "isOutdoor": True,
    },
    {
        "name": "cat",
        "isAlive": True,
        "isFood": False,
        "isElectronic": False,
        "isBiggerThanHand": False,
        "isPortable": "maybe",
        "isAnimal": True,
        "isVehicle": False,
        "isIndoor": True,
        "isOutdoor": True,
    },
    {
        "name": "phone",
        "isAlive": False,
        "isFood": False,
        "isElectronic": True,
        "isBiggerThanHand": False,
        "isPortable": True,
        "isAnimal": False,
        "isVehicle": False,
        "isIndoor": True,
        "isOutdoor": True,
    },
    {
        "name": "car",
        "isAlive": False,
        "isFood": False,
        "isElectronic": True,
        "isBiggerThanHand": True,
        "isPortable": False,
        "isAnimal": False,
        "isVehicle": True,
        "isIndoor": False,
        "isOutdoor": True,
    },
    {
        "name": "book",
        "isAlive": False,
        "isFood": False,
        "isElectronic": False,
        "isBiggerThanHand": False,
        "isPortable": True,
        "isAnimal": False,
        "isVehicle": False,
        "isIndoor": True,
        "isOutdoor": True,
    },
    {
        "name": "pizza",
        "isAlive": False,
        "isFood": True,
        "isElectronic": False,
        "isBiggerThanHand": True,
        "isPortable": "maybe",
        "isAnimal": False,
        "isVehicle": False,
        "isIndoor": True,
        "isOutdoor": False,
    },
    {
        "name": "laptop",
        "isAlive": False,
        "isFood": False,
        "isElectronic": True,
        "isBiggerThanHand": False,
        "isPortable": True,
        "isAnimal": False,
        "isVehicle": False,
        "isIndoor": True,
        "isOutdoor": True,
    },
]


def build_catalog(records: Iterable[Mapping[str, Any]]) -> tuple[Entity, ...]:
    entities: list[Entity] = []
    seen: set[str] = set()
    for raw in records:
        name = str(raw.get("name") or "").strip()
        if not name:
            raise InvalidInput("Catalog entry without a name.")
        if name.lower() in seen:
            raise InvalidInput(f"Duplicate catalog entry: {name}")
        seen.add(name.lower())

        attributes = {k: to_answer(v) for k, v in raw.items() if k != "name"}
        entities.append(Entity(name=name, attributes=MappingProxyType(attributes)))

    if not entities:
        raise InvalidInput("Catalog is empty.")
    return tuple(entities)


def load_catalog(path: str | Path) -> tuple[Entity, ...]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise InvalidInput("Catalog file must hold a JSON list.")
    return build_catalog(data)


DEFAULT_CATALOG = build_catalog(DEFAULT_OBJECTS)
