"""Shared test fixtures for nodepath.

Provides isolated config environments, output state management, a small
hand-built tree, and a CLI runner. Fixtures are discovered by pytest
automatically.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from nodepath.nodes import SimpleNode
from nodepath.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager binds sys.stdout/sys.stderr when created. CliRunner
    swaps those streams per invocation, so a manager left over from one
    test would write to a closed stream in the next.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Trees
# ---------------------------------------------------------------------------


@pytest.fixture
def document_tree() -> SimpleNode:
    """``document -> section -> paragraph`` plus a sibling ``heading``."""
    root = SimpleNode("document")
    section = root.add_child("section")
    section.add_child("heading")
    section.add_child("paragraph")
    return root


@pytest.fixture
def paragraph(document_tree: SimpleNode) -> SimpleNode:
    node = document_tree.find(["section", "paragraph"])
    assert node is not None
    return node


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME into tmp_path, clears all
    NODEPATH_* environment variables, and changes the working directory to
    tmp_path so no project config leaks in.
    """
    monkeypatch.setattr("nodepath.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["NODEPATH_SEPARATOR", "NODEPATH_CONFIG", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a PLAIN-format, colourless OutputManager."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
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
