"""Tests for the --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from bitctl.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["encode", "--examples"], ["bitctl encode -1 --type Int8"]),
    (["decode", "--examples"], ["bitctl decode 11111111 -t Int8"]),
    (["hex", "--examples"], ["bitctl hex 3F800000"]),
    (["layouts", "--examples"], ["bitctl layouts list", "bitctl layouts show Float32"]),
    (["layouts", "list", "--examples"], ["bitctl -q layouts list"]),
    (["layouts", "show", "--examples"], ["bitctl layouts show uint8"]),
    (["shell", "--examples"], ["bitctl shell -t Int16"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--examples")


@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert result.output.startswith("Examples for 'cli ")
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


@pytest.mark.parametrize("args", [item[0][:-1] for item in EXAMPLES_COMMANDS])
def test_examples_listed_in_help(cli_runner: CliRunner, args: list[str]) -> None:
    result = cli_runner.invoke(cli, [*args, "--help"])
    assert result.exit_code == 0
    assert "--examples" in result.output
