"""Command-line entry point."""

from __future__ import annotations

from typer.testing import CliRunner

from main import app

runner = CliRunner()


def test_describe_lists_presets() -> None:
    result = runner.invoke(app, ["--describe"])

    assert result.exit_code == 0, result.output
    assert "Easy" in result.output
    assert "7x7 grid  24 pairs  180s" in result.output


def test_unknown_difficulty_rejected() -> None:
    result = runner.invoke(app, ["--describe", "-d", "extreme"])
    assert result.exit_code != 0
