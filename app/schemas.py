"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, StrictInt

from models.records import Reading


class ReadingPayload(BaseModel):
    """A single sensor observation as exchanged over HTTP."""

    id: str = Field(..., description="Caller-assigned reading identifier.")
    volume: int
    speed: float
    queue_length: int
    direction: StrictInt = Field(
        ..., description="Movement code: 0 = left, 1 = straight, 2 = right."
    )

    @classmethod
    def from_reading(cls, reading: Reading) -> ReadingPayload:
        return cls(
            id=reading.id,
            volume=reading.volume,
            speed=reading.speed,
            queue_length=reading.queue_length,
            direction=int(reading.direction),
        )

    def to_reading(self) -> Reading:
        return Reading(
            id=self.id,
            volume=self.volume,
            speed=self.speed,
            queue_length=self.queue_length,
            direction=self.direction,
        )


class SensorResponse(BaseModel):
    sensor_id: str


class RouteResponse(BaseModel):
    """Outcome of routing a reading to a sensor."""

    sensor_id: str
    accepted: bool = Field(
        ..., description="False when the sensor is unknown and the reading was dropped."
    )


class SensorReadingsResponse(BaseModel):
    sensor_id: str
    readings: List[ReadingPayload] = Field(default_factory=list)


class SensorListResponse(BaseModel):
    sensor_ids: List[str] = Field(default_factory=list)
