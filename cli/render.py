from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence

import typer

from models.records import Direction


def _direction_name(value: Any) -> Any:
    try:
        return Direction(value).name.lower()
    except ValueError:
        return value


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_readings(sensor_id: str, readings: Sequence[Dict[str, Any]]) -> None:
    echo_heading(f"Readings for {sensor_id}")
    if not readings:
        typer.echo("No readings buffered.")
        return
    for index, reading in enumerate(readings, start=1):
        typer.echo(
            f"  {index}. id={reading.get('id')} volume={reading.get('volume')} "
            f"speed={reading.get('speed')} queue_length={reading.get('queue_length')} "
            f"direction={_direction_name(reading.get('direction'))}"
        )


def render_sensors(sensor_ids: Sequence[str]) -> None:
    echo_heading("Registered sensors")
    if not sensor_ids:
        typer.echo("No sensors registered.")
        return
    for sensor_id in sensor_ids:
        typer.echo(f"  - {sensor_id}")
