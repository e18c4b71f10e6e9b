"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any


class Direction(IntEnum):
    """Traffic movement covered by a reading."""

    LEFT = 0
    STRAIGHT = 1
    RIGHT = 2


class InvalidDirection(ValueError):
    """Raised when a direction code outside {0, 1, 2} is supplied."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Invalid direction {value!r}; expected one of "
            f"{', '.join(str(member.value) for member in Direction)}."
        )
        self.value = value


def validate_direction(value: Any) -> Direction:
    """Return the ``Direction`` for ``value`` or raise ``InvalidDirection``."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDirection(value)
    try:
        return Direction(value)
    except ValueError as exc:
        raise InvalidDirection(value) from exc


@dataclass(slots=True)
class Reading:
    """A single traffic sensor observation.

    Only ``direction`` is validated; it is checked before being stored, so a
    rejected assignment leaves the previous value untouched.
    """

    id: str
    volume: int
    speed: float
    queue_length: int
    direction: int

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "direction":
            value = validate_direction(value)
        object.__setattr__(self, name, value)

    def copy(self) -> Reading:
        return replace(self)
