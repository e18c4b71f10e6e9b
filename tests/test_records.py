"""Unit tests for the reading model and its direction validation."""

from __future__ import annotations

import sys

import pytest

from models.records import Direction, InvalidDirection, Reading, validate_direction


def _reading(direction: int = 1) -> Reading:
    return Reading(id="r-1", volume=10, speed=30.5, queue_length=5, direction=direction)


@pytest.mark.parametrize("direction", [0, 1, 2])
def test_valid_directions_are_stored(direction: int) -> None:
    reading = _reading(direction)

    assert reading.direction == direction
    assert isinstance(reading.direction, Direction)


@pytest.mark.parametrize("direction", [-1, 3, 100, -(2**63)])
def test_construction_rejects_invalid_direction(direction: int) -> None:
    with pytest.raises(InvalidDirection) as excinfo:
        _reading(direction)

    assert excinfo.value.value == direction


@pytest.mark.parametrize("direction", [-1, 3, 42])
def test_rejected_assignment_keeps_previous_direction(direction: int) -> None:
    reading = _reading(2)

    with pytest.raises(InvalidDirection):
        reading.direction = direction

    assert reading.direction == Direction.RIGHT


def test_valid_assignment_replaces_direction() -> None:
    reading = _reading(0)

    reading.direction = 2

    assert reading.direction == 2


@pytest.mark.parametrize("value", [True, False, 1.0, "1", None])
def test_non_integer_directions_are_rejected(value) -> None:
    with pytest.raises(InvalidDirection):
        validate_direction(value)


def test_invalid_direction_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="Invalid direction 7"):
        validate_direction(7)


def test_other_fields_are_mutable_without_validation() -> None:
    reading = _reading()

    reading.id = "r-2"
    reading.volume = -5
    reading.speed = -1.25
    reading.queue_length = -3

    assert reading.id == "r-2"
    assert reading.volume == -5
    assert reading.speed == -1.25
    assert reading.queue_length == -3


def test_boundary_magnitudes_are_kept_exactly() -> None:
    reading = Reading(
        id="max",
        volume=sys.maxsize,
        speed=sys.float_info.max,
        queue_length=sys.maxsize,
        direction=0,
    )

    assert reading.id == "max"
    assert reading.volume == sys.maxsize
    assert reading.speed == sys.float_info.max
    assert reading.queue_length == sys.maxsize
    assert reading.direction == Direction.LEFT


def test_copy_is_independent() -> None:
    original = _reading()

    duplicate = original.copy()
    duplicate.volume = 99

    assert duplicate == Reading(id="r-1", volume=99, speed=30.5, queue_length=5, direction=1)
    assert original.volume == 10
