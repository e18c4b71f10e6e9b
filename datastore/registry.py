from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Optional, Tuple

from datastore.sensor_buffer import SensorBuffer
from models.records import Reading
from settings import get_settings

logger = logging.getLogger(__name__)


class UnknownSensor(KeyError):
    """Raised by a strict registry when a sensor id was never registered."""

    def __init__(self, sensor_id: str) -> None:
        super().__init__(f"Sensor {sensor_id!r} is not registered.")
        self.sensor_id = sensor_id

    def __str__(self) -> str:
        return str(self.args[0])


class SensorRegistry:
    """Directory of sensor buffers keyed by sensor id.

    By default lookups of unregistered sensors degrade quietly: ``route``
    drops the reading and ``readings_of`` returns an empty tuple. With
    ``strict=True`` both raise ``UnknownSensor`` instead.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self._buffers: Dict[str, SensorBuffer] = {}

    def register_sensor(self, sensor_id: str) -> None:
        """Create an empty buffer for ``sensor_id``, discarding any previous one."""

        previous = self._buffers.get(sensor_id)
        self._buffers[sensor_id] = SensorBuffer()
        if previous is not None:
            logger.info(
                "Sensor re-registered; previous readings discarded",
                extra={"sensor_id": sensor_id, "reading_count": len(previous)},
            )
        else:
            logger.debug("Sensor registered", extra={"sensor_id": sensor_id})

    def route(self, sensor_id: str, reading: Reading) -> bool:
        """Append ``reading`` to the sensor's buffer.

        Returns ``False`` when the sensor is unknown and the reading was dropped.
        """

        buffer = self._lookup(sensor_id)
        if buffer is None:
            logger.debug(
                "Dropping reading for unregistered sensor",
                extra={
                    "sensor_id": sensor_id,
                    "reading_id": reading.id,
                    "reason": "unregistered",
                },
            )
            return False
        buffer.append(reading)
        return True

    def readings_of(self, sensor_id: str) -> tuple[Reading, ...]:
        buffer = self._lookup(sensor_id)
        if buffer is None:
            return ()
        return buffer.read_all()

    def clear_all(self) -> None:
        """Empty every buffer while keeping all sensors registered."""

        total = 0
        for buffer in self._buffers.values():
            total += len(buffer)
            buffer.clear()
        logger.info(
            "Cleared all sensor buffers",
            extra={"sensor_count": len(self._buffers), "reading_count": total},
        )

    def sensor_ids(self) -> list[str]:
        return sorted(self._buffers)

    def __contains__(self, sensor_id: object) -> bool:
        return sensor_id in self._buffers

    def _lookup(self, sensor_id: str) -> Optional[SensorBuffer]:
        buffer = self._buffers.get(sensor_id)
        if buffer is None and self.strict:
            raise UnknownSensor(sensor_id)
        return buffer


@lru_cache
def build_default_registry(
    strict: Optional[bool] = None,
    seed: Optional[Tuple[str, ...]] = None,
) -> SensorRegistry:
    """Factory that wires a registry from settings."""
    settings = get_settings()
    is_strict = settings.strict_registry if strict is None else strict
    sensor_ids = settings.seed_sensors if seed is None else seed
    registry = SensorRegistry(strict=is_strict)
    for sensor_id in sensor_ids:
        registry.register_sensor(sensor_id)
    return registry
