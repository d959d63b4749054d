"""Shared test fixtures for specmcp.

Provides the sample documents, loaded document trees, an isolated config
environment, output-state management and a CLI runner.  These fixtures are
discovered by pytest automatically and available to every test module.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from specmcp.output import OutputFormat, OutputManager, reset_output, set_output
from specmcp.parser.loader import load_spec


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test, the cached references go stale once the test finishes.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_path() -> Path:
    """Path to the two-path pet-store document."""
    return FIXTURES_DIR / "petstore.yaml"


@pytest.fixture
def edge_cases_path() -> Path:
    """Path to the document exercising unusual but legal shapes."""
    return FIXTURES_DIR / "edge_cases.yaml"


@pytest.fixture
def petstore(petstore_path: Path) -> dict[str, Any]:
    """Loaded pet-store document."""
    return load_spec(str(petstore_path))


@pytest.fixture
def edge_cases(edge_cases_path: Path) -> dict[str, Any]:
    """Loaded edge-case document."""
    return load_spec(str(edge_cases_path))


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME at subdirectories of tmp_path,
    clears SPECMCP_* environment variables, forces the XDG layout and
    changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("specmcp.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("SPECMCP_SPEC", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def yaml_output() -> OutputManager:
    """Install a plain YAML OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.YAML, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
