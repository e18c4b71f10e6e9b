"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.schemas import (
    ReadingPayload,
    RouteResponse,
    SensorListResponse,
    SensorReadingsResponse,
    SensorResponse,
)
from datastore.registry import SensorRegistry, UnknownSensor, build_default_registry
from models.records import InvalidDirection

router = APIRouter()


def get_registry() -> SensorRegistry:
    return build_default_registry()


@router.get(
    "/sensors",
    response_model=SensorListResponse,
    summary="List registered sensor identifiers.",
)
async def list_sensors(
    registry: SensorRegistry = Depends(get_registry),
) -> SensorListResponse:
    return SensorListResponse(sensor_ids=registry.sensor_ids())


@router.put(
    "/sensors/{sensor_id}",
    status_code=status.HTTP_201_CREATED,
    response_model=SensorResponse,
    summary="Register a sensor, replacing any readings it already holds.",
)
async def register_sensor(
    sensor_id: str,
    registry: SensorRegistry = Depends(get_registry),
) -> SensorResponse:
    registry.register_sensor(sensor_id)
    return SensorResponse(sensor_id=sensor_id)


@router.post(
    "/sensors/{sensor_id}/readings",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=RouteResponse,
    summary="Append a reading to a sensor's buffer.",
)
async def route_reading(
    sensor_id: str,
    payload: ReadingPayload,
    registry: SensorRegistry = Depends(get_registry),
) -> RouteResponse:
    try:
        reading = payload.to_reading()
        accepted = registry.route(sensor_id, reading)
    except InvalidDirection as exc:
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc
    except UnknownSensor as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return RouteResponse(sensor_id=sensor_id, accepted=accepted)


@router.get(
    "/sensors/{sensor_id}/readings",
    response_model=SensorReadingsResponse,
    summary="Fetch all buffered readings for a sensor in arrival order.",
)
async def get_readings(
    sensor_id: str,
    registry: SensorRegistry = Depends(get_registry),
) -> SensorReadingsResponse:
    try:
        readings = registry.readings_of(sensor_id)
    except UnknownSensor as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return SensorReadingsResponse(
        sensor_id=sensor_id,
        readings=[ReadingPayload.from_reading(reading) for reading in readings],
    )


@router.delete(
    "/readings",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear every sensor buffer; sensors stay registered.",
)
async def clear_readings(
    registry: SensorRegistry = Depends(get_registry),
) -> Response:
    registry.clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
