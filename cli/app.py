from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import echo_key_values, render_readings, render_sensors
from models.records import InvalidDirection, validate_direction


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the traffic sensor buffer service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="HTTP request timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("register")
def register_command(
    ctx: typer.Context,
    sensor_id: str = typer.Argument(..., help="Identifier of the sensor to register."),
) -> None:
    """Register a sensor. Re-registering discards its buffered readings."""
    state = _get_state(ctx)
    state.client.register_sensor(sensor_id)
    typer.secho(f"Sensor registered. sensor_id={sensor_id}", fg=typer.colors.GREEN)


@app.command("push")
def push_command(
    ctx: typer.Context,
    sensor_id: str = typer.Argument(..., help="Sensor receiving the reading."),
    reading_id: str = typer.Option(..., "--id", help="Reading identifier."),
    volume: int = typer.Option(..., "--volume", help="Vehicle count."),
    speed: float = typer.Option(..., "--speed", help="Observed speed."),
    queue_length: int = typer.Option(..., "--queue-length", help="Queue length."),
    direction: int = typer.Option(
        ..., "--direction", help="0 = left, 1 = straight, 2 = right."
    ),
) -> None:
    """Send one reading to a sensor's buffer."""
    try:
        validate_direction(direction)
    except InvalidDirection as exc:
        raise typer.BadParameter(str(exc), param_hint="--direction") from exc

    state = _get_state(ctx)
    accepted = state.client.push_reading(
        sensor_id,
        {
            "id": reading_id,
            "volume": volume,
            "speed": speed,
            "queue_length": queue_length,
            "direction": direction,
        },
    )
    if accepted:
        typer.secho(f"Reading accepted. sensor_id={sensor_id}", fg=typer.colors.GREEN)
    else:
        typer.secho(
            f"Reading dropped: sensor {sensor_id} is not registered.",
            fg=typer.colors.YELLOW,
        )


@app.command("show")
def show_command(
    ctx: typer.Context,
    sensor_id: str = typer.Argument(..., help="Sensor whose readings to display."),
) -> None:
    """Display buffered readings for a sensor in arrival order."""
    state = _get_state(ctx)
    readings = state.client.get_readings(sensor_id)
    render_readings(sensor_id, readings)
    typer.echo()
    echo_key_values([("reading_count", len(readings))])


@app.command("sensors")
def sensors_command(ctx: typer.Context) -> None:
    """List registered sensors."""
    state = _get_state(ctx)
    render_sensors(state.client.list_sensors())


@app.command("clear")
def clear_command(ctx: typer.Context) -> None:
    """Clear every sensor buffer; sensors stay registered."""
    state = _get_state(ctx)
    state.client.clear_all()
    typer.secho("All sensor buffers cleared.", fg=typer.colors.GREEN)
