from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from proxybase_mcp import cli
from proxybase_mcp.app.core.config import get_settings


@pytest.fixture(autouse=True)
def isolated(monkeypatch):
    for name in ("PROXYBASE_API_URL", "PROXYBASE_LOG_LEVEL", "PROXYBASE_HTTP_TIMEOUT", "PROXYBASE_METRICS_PORT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    calls = {"logging": [], "exporter": []}
    monkeypatch.setattr(cli, "setup_logging", lambda level: calls["logging"].append(level))
    monkeypatch.setattr(cli, "start_exporter", lambda port: calls["exporter"].append(port))
    yield calls
    get_settings.cache_clear()


def test_build_settings_overrides_env(monkeypatch) -> None:
    monkeypatch.setenv("PROXYBASE_API_URL", "http://from-env")
    monkeypatch.setenv("PROXYBASE_LOG_LEVEL", "WARNING")
    s = cli.build_settings(api_url="http://from-cli/", http_timeout=3.0)
    assert s.api_url == "http://from-cli"
    assert s.log_level == "WARNING"
    assert s.http_timeout == 3.0


def test_build_server_uses_settings() -> None:
    server = cli.build_server(cli.build_settings(api_url="http://local:8080", http_timeout=1.5))
    assert server.client.base_url == "http://local:8080"
    assert server.client.timeout == 1.5


def test_main_serves_stdin(isolated) -> None:
    lines = "\n".join(
        [
            '{"jsonrpc":"2.0","id":1,"method":"initialize"}',
            '{"jsonrpc":"2.0","method":"notifications/initialized"}',
            '{"jsonrpc":"2.0","id":2,"method":"tools/list"}',
        ]
    )
    result = CliRunner().invoke(cli.main, ["--log-level", "DEBUG"], input=lines + "\n")
    assert result.exit_code == 0, result.output
    responses = [json.loads(x) for x in result.output.splitlines()]
    assert [r["id"] for r in responses] == [1, 2]
    assert isolated["logging"] == ["DEBUG"]
    assert isolated["exporter"] == []


def test_metrics_port_starts_exporter(isolated) -> None:
    result = CliRunner().invoke(cli.main, ["--metrics-port", "9464"], input="")
    assert result.exit_code == 0, result.output
    assert isolated["exporter"] == [9464]
