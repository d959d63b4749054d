"""Integration tests for the specmcp command line.

Drives the real Typer app through CliRunner: query commands against the
sample documents, exit codes for load and pattern failures, the config
sub-commands and the hand-off from ``serve`` to the MCP server.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from specmcp import __version__
from specmcp.app import _write_crash_log, app


@pytest.fixture
def invoke(cli_runner, isolated_config: Path):
    """Invoke the app in an isolated config environment."""

    def _invoke(*args: str, **kwargs: Any):
        return cli_runner.invoke(app, list(args), **kwargs)

    return _invoke


class TestRoot:
    def test_version(self, invoke) -> None:
        result = invoke("--version")
        assert result.exit_code == 0
        assert f"specmcp {__version__}" in result.output

    def test_help_lists_groups(self, invoke) -> None:
        result = invoke("--help")
        assert result.exit_code == 0
        for name in ("serve", "query", "config"):
            assert name in result.output


class TestQueryCommands:
    def test_list_endpoints(self, invoke, petstore_path: Path) -> None:
        result = invoke("query", "list-endpoints", "--spec", str(petstore_path))
        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout)["/pets"] == {
            "GET": "List all pets",
            "POST": "Create a pet",
        }

    def test_get_endpoint(self, invoke, petstore_path: Path) -> None:
        result = invoke("query", "get-endpoint", "/pets", "post", "-s", str(petstore_path))
        assert result.exit_code == 0
        record = yaml.safe_load(result.stdout)
        assert record["method"] == "POST"
        assert record["summary"] == "Create a pet"
        assert set(record["responses"]) == {"201", "400"}

    def test_get_response_schema_fallback(self, invoke, edge_cases_path: Path) -> None:
        result = invoke(
            "query", "get-response-schema", "/orders/{orderId}", "GET",
            "-c", "418", "-s", str(edge_cases_path),
        )
        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout) == {"description": "Unexpected error"}

    def test_get_path_parameters_with_method(self, invoke, edge_cases_path: Path) -> None:
        result = invoke(
            "query", "get-path-parameters", "/orders/{orderId}",
            "-m", "get", "-s", str(edge_cases_path),
        )
        assert result.exit_code == 0
        names = [p["name"] for p in yaml.safe_load(result.stdout)]
        assert names == ["orderId", "X-Trace", "orderId", "expand"]

    def test_get_component(self, invoke, petstore_path: Path) -> None:
        result = invoke("query", "get-component", "schemas", "NewPet", "-s", str(petstore_path))
        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout)["required"] == ["name"]

    def test_get_examples_component(self, invoke, edge_cases_path: Path) -> None:
        result = invoke(
            "query", "get-examples", "component",
            "--component-type", "schemas", "--component-name", "Order",
            "-s", str(edge_cases_path),
        )
        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout) == {"default": {"id": "o-1"}}

    def test_get_examples_rejects_unknown_type(self, invoke, petstore_path: Path) -> None:
        result = invoke("query", "get-examples", "header", "-s", str(petstore_path))
        assert result.exit_code == 2

    def test_search_json(self, invoke, petstore_path: Path) -> None:
        result = invoke("--json", "query", "search-schema", "pet", "-s", str(petstore_path))
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["paths"] == ["/pets", "/pets/{petId}"]
        assert "securitySchemes" not in data

    def test_not_found_exits_zero(self, invoke, petstore_path: Path) -> None:
        result = invoke("query", "get-request-body", "/pets", "get", "-s", str(petstore_path))
        assert result.exit_code == 0
        assert result.stdout.strip() == "No request body defined for GET /pets"

    def test_default_document_from_env(
        self, invoke, petstore_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SPECMCP_SPEC", str(petstore_path))
        result = invoke("query", "list-security-schemes")
        assert result.exit_code == 0
        assert "ApiKeyAuth" in yaml.safe_load(result.stdout)


class TestQueryFailures:
    def test_missing_document_exits_7(self, invoke, tmp_path: Path) -> None:
        result = invoke("query", "list-endpoints", "-s", str(tmp_path / "none.yaml"))
        assert result.exit_code == 7
        assert "Spec file not found" in result.output

    def test_default_document_missing(self, invoke) -> None:
        result = invoke("query", "list-components")
        assert result.exit_code == 7
        assert "Spec file not found" in result.output

    def test_invalid_pattern_exits_8(self, invoke, petstore_path: Path) -> None:
        result = invoke("query", "search-schema", "(", "-s", str(petstore_path))
        assert result.exit_code == 8
        assert "Invalid search pattern" in result.output


class TestConfigCommands:
    def test_set_and_show(self, invoke, tmp_path: Path) -> None:
        result = invoke("config", "set", "default_spec", "api/openapi.yaml")
        assert result.exit_code == 0

        result = invoke("config", "set", "output.line_width", "80")
        assert result.exit_code == 0

        result = invoke("--quiet", "--json", "config", "show")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["default_spec"] == "api/openapi.yaml"
        assert data["output"]["line_width"] == 80

    def test_clear_default_spec(self, invoke) -> None:
        invoke("config", "set", "default_spec", "api.yaml")
        result = invoke("config", "set", "default_spec", "none")
        assert result.exit_code == 0

        result = invoke("--quiet", "--json", "config", "show")
        assert json.loads(result.stdout)["default_spec"] is None

    def test_cannot_clear_required_setting(self, invoke) -> None:
        result = invoke("config", "set", "server.transport", "none")
        assert result.exit_code == 2
        assert "Validation error" in result.output

    def test_set_unknown_key(self, invoke) -> None:
        result = invoke("config", "set", "output.colour", "red")
        assert result.exit_code == 2
        assert "Unknown config key" in result.output

    def test_set_non_integer(self, invoke) -> None:
        result = invoke("config", "set", "output.line_width", "wide")
        assert result.exit_code == 2

    def test_reset_with_force(self, invoke) -> None:
        invoke("config", "set", "server.transport", "sse")
        result = invoke("--force", "config", "reset")
        assert result.exit_code == 0

        result = invoke("--quiet", "--json", "config", "show")
        assert json.loads(result.stdout)["server"]["transport"] == "stdio"

    def test_reset_cancelled(self, invoke) -> None:
        invoke("config", "set", "server.transport", "sse")
        result = invoke("config", "reset", input="n\n")
        assert result.exit_code == 0

        result = invoke("--quiet", "--json", "config", "show")
        assert json.loads(result.stdout)["server"]["transport"] == "sse"

    def test_broken_config_falls_back_to_defaults(self, invoke, isolated_config: Path) -> None:
        config_file = isolated_config / "config" / "specmcp" / "config.json"
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text("{broken", encoding="utf-8")

        result = invoke("query", "list-components", "-s", str(isolated_config / "x.yaml"))
        assert "Invalid global config" in result.output


class TestCrashLog:
    def test_non_xdg_crash_log_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("specmcp.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        try:
            raise RuntimeError("boom")
        except RuntimeError:
            log_file = Path(_write_crash_log())

        assert log_file.parent == tmp_path / ".specmcp" / "logs"
        text = log_file.read_text(encoding="utf-8")
        assert text.startswith(f"specmcp {__version__}\n")
        assert "RuntimeError: boom" in text

    def test_xdg_crash_log_location(self, isolated_config: Path) -> None:
        try:
            raise ValueError("bad")
        except ValueError:
            log_file = Path(_write_crash_log())

        assert log_file.parent == isolated_config / "data" / "specmcp" / "logs"


class TestServeCommand:
    @pytest.fixture
    def captured(self, monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
        calls: dict[str, Any] = {}
        monkeypatch.setattr(
            "specmcp.server.configure_logging",
            lambda level: calls.__setitem__("log_level", level),
        )
        monkeypatch.setattr(
            "specmcp.server.run_server",
            lambda **kwargs: calls.update(kwargs),
        )
        return calls

    def test_defaults_from_config(self, invoke, captured: dict[str, Any]) -> None:
        result = invoke("serve", "petstore.yaml")
        assert result.exit_code == 0
        assert captured == {
            "log_level": "WARNING",
            "default_spec": "petstore.yaml",
            "transport": "stdio",
            "line_width": 100,
        }

    def test_options_override_config(self, invoke, captured: dict[str, Any]) -> None:
        invoke("config", "set", "server.transport", "sse")
        result = invoke("serve", "--transport", "streamable-http", "--log-level", "INFO")
        assert result.exit_code == 0
        assert captured["transport"] == "streamable-http"
        assert captured["log_level"] == "INFO"
        assert captured["default_spec"] is None

    def test_verbose_logs_debug(self, invoke, captured: dict[str, Any]) -> None:
        result = invoke("--verbose", "serve")
        assert result.exit_code == 0
        assert captured["log_level"] == "DEBUG"
