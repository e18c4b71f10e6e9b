from __future__ import annotations

from typing import List

from models.records import Reading


class SensorBuffer:
    """Append-only, order-preserving store for one sensor's readings."""

    def __init__(self) -> None:
        self._readings: List[Reading] = []

    def append(self, reading: Reading) -> None:
        self._readings.append(reading.copy())

    def read_all(self) -> tuple[Reading, ...]:
        """Return copies of all stored readings in append order."""

        return tuple(reading.copy() for reading in self._readings)

    def clear(self) -> None:
        self._readings.clear()

    def __len__(self) -> int:
        return len(self._readings)
