from __future__ import annotations

from typing import Any, Dict, List, NoReturn
from urllib.parse import quote

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the sensor buffer service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def register_sensor(self, sensor_id: str) -> None:
        self._request("PUT", f"/sensors/{_segment(sensor_id)}")

    def push_reading(self, sensor_id: str, reading: Dict[str, Any]) -> bool:
        response = self._request(
            "POST", f"/sensors/{_segment(sensor_id)}/readings", json=reading
        )
        payload = response.json()
        accepted = payload.get("accepted")
        if not isinstance(accepted, bool):
            raise typer.BadParameter("Unexpected response payload when pushing reading.")
        return accepted

    def get_readings(self, sensor_id: str) -> List[Dict[str, Any]]:
        response = self._request("GET", f"/sensors/{_segment(sensor_id)}/readings")
        return list(response.json().get("readings") or [])

    def list_sensors(self) -> List[str]:
        response = self._request("GET", "/sensors")
        return list(response.json().get("sensor_ids") or [])

    def clear_all(self) -> None:
        self._request("DELETE", "/readings")

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
            if response.status_code == 404:
                raise typer.BadParameter(_detail(response) or f"{url} was not found.")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> NoReturn:
        detail = _detail(exc.response)
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _segment(sensor_id: str) -> str:
    return quote(sensor_id, safe="")


def _detail(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or None
    if isinstance(data, dict):
        detail = data.get("detail")
        if detail:
            return str(detail)
    return None
