"""Shared pytest fixtures for bitctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from bitctl.config.settings import BitSettings
from bitctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test in an empty directory with no BITCTL_* variables.

    Keeps a developer's own ``bitctl.toml`` or environment from leaking
    into the defaults the tests assert on.
    """
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("BITCTL_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``-v`` invocations enable telemetry; switch it off again."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """CLI invocations reconfigure the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    bit = logging.getLogger("bitctl")
    bit_level = bit.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    bit.setLevel(bit_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> BitSettings:
    """Default settings with no config file."""
    return BitSettings.from_cli(start=tmp_path)
