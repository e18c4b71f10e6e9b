from __future__ import annotations

from typing import Any, Dict, List

import httpx
import pytest
import typer
from typer.testing import CliRunner

from cli.app import app
from cli.client import ApiClient
from cli.config import CLIConfig, load_config


class StubClient:
    def __init__(self, config, accepted: bool = True) -> None:
        self.config = config
        self.accepted = accepted
        self.registered: List[str] = []
        self.pushed: List[tuple[str, Dict[str, Any]]] = []
        self.readings: List[Dict[str, Any]] = [
            {"id": "a", "volume": 10, "speed": 30.5, "queue_length": 5, "direction": 1},
            {"id": "b", "volume": 20, "speed": 40.5, "queue_length": 10, "direction": 2},
        ]
        self.cleared = False
        self.closed = False

    def register_sensor(self, sensor_id: str) -> None:
        self.registered.append(sensor_id)

    def push_reading(self, sensor_id: str, reading: Dict[str, Any]) -> bool:
        self.pushed.append((sensor_id, reading))
        return self.accepted

    def get_readings(self, sensor_id: str) -> List[Dict[str, Any]]:
        return list(self.readings)

    def list_sensors(self) -> List[str]:
        return ["s1", "s2"]

    def clear_all(self) -> None:
        self.cleared = True

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _install_stub(monkeypatch, stub: StubClient) -> None:
    def factory(config):
        stub.config = config
        return stub

    monkeypatch.setattr("cli.app.ApiClient", factory)


def test_register_command(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["--base-url", "http://example.test/", "register", "s1"])

    assert result.exit_code == 0
    assert "Sensor registered" in result.stdout
    assert stub.registered == ["s1"]
    assert stub.config.base_url == "http://example.test"
    assert stub.closed is True


def test_push_command_sends_reading(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(
        app,
        [
            "push", "s1",
            "--id", "a",
            "--volume", "10",
            "--speed", "30.5",
            "--queue-length", "5",
            "--direction", "1",
        ],
    )

    assert result.exit_code == 0
    assert "Reading accepted" in result.stdout
    assert stub.pushed == [
        ("s1", {"id": "a", "volume": 10, "speed": 30.5, "queue_length": 5, "direction": 1})
    ]


def test_push_command_reports_dropped_reading(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None, accepted=False)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(
        app,
        ["push", "ghost", "--id", "a", "--volume", "1", "--speed", "1",
         "--queue-length", "1", "--direction", "0"],
    )

    assert result.exit_code == 0
    assert "not registered" in result.stdout


def test_push_command_rejects_invalid_direction(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(
        app,
        ["push", "s1", "--id", "a", "--volume", "1", "--speed", "1",
         "--queue-length", "1", "--direction", "5"],
    )

    assert result.exit_code != 0
    assert stub.pushed == []


def test_show_command(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["show", "s1"])

    assert result.exit_code == 0
    assert "Readings for s1" in result.stdout
    assert "id=a" in result.stdout
    assert "direction=right" in result.stdout
    assert "reading_count: 2" in result.stdout


def test_sensors_and_clear_commands(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    listed = runner.invoke(app, ["sensors"])
    cleared = runner.invoke(app, ["clear"])

    assert listed.exit_code == 0
    assert "- s1" in listed.stdout
    assert cleared.exit_code == 0
    assert stub.cleared is True


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://sensors.local:9000/")
    monkeypatch.setenv("CLI_HTTP_TIMEOUT", "-3")

    config = load_config()

    assert config == CLIConfig(base_url="http://sensors.local:9000", timeout=30.0)


def test_api_client_round_trip_with_mock_transport() -> None:
    seen: List[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        if request.method == "POST":
            return httpx.Response(202, json={"sensor_id": "s 1", "accepted": True})
        if request.url.path == "/sensors":
            return httpx.Response(200, json={"sensor_ids": ["s 1"]})
        return httpx.Response(200, json={"sensor_id": "s 1", "readings": []})

    client = ApiClient(CLIConfig(base_url="http://test"))
    client._client.close()
    client._client = httpx.Client(
        base_url="http://test", transport=httpx.MockTransport(handler)
    )
    try:
        assert client.push_reading("s 1", {"id": "a"}) is True
        assert client.get_readings("s 1") == []
        assert client.list_sensors() == ["s 1"]
    finally:
        client.close()

    assert seen[0] == ("POST", "/sensors/s 1/readings")


def test_api_client_exits_on_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"detail": "boom"})

    client = ApiClient(CLIConfig(base_url="http://test"))
    client._client.close()
    client._client = httpx.Client(
        base_url="http://test", transport=httpx.MockTransport(handler)
    )
    try:
        with pytest.raises(typer.Exit):
            client.clear_all()
    finally:
        client.close()


def test_show_command_keeps_unknown_direction_codes(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    stub.readings = [
        {"id": "a", "volume": 1, "speed": 1.0, "queue_length": 0, "direction": 0},
        {"id": "b", "volume": 1, "speed": 1.0, "queue_length": 0, "direction": 9},
    ]
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["show", "s1"])

    assert result.exit_code == 0
    assert "direction=left" in result.stdout
    assert "direction=9" in result.stdout
