"""Tests for the dazzle-test-utils command line interface."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from dazzle_test_utils import SIMULATED_EVENTS, __version__
from dazzle_test_utils.cli import app

runner = CliRunner()


class TestEventsCommand:
    def test_json_lists_every_event(self) -> None:
        result = runner.invoke(app, ["events", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert len(data) == len(SIMULATED_EVENTS)
        double_click = next(item for item in data if item["name"] == "doubleClick")
        assert double_click == {
            "name": "doubleClick",
            "native_type": "dblclick",
            "category": "mouse",
            "bubbles": True,
            "cancelable": True,
        }

    def test_json_filtered_by_category(self) -> None:
        result = runner.invoke(app, ["events", "--category", "keyboard", "--json"])

        assert result.exit_code == 0, result.output
        assert [item["native_type"] for item in json.loads(result.output)] == [
            "keydown",
            "keypress",
            "keyup",
        ]

    def test_table_output(self) -> None:
        result = runner.invoke(app, ["events", "-c", "focus"])

        assert result.exit_code == 0, result.output
        assert "blur" in result.output
        assert "focus" in result.output
        assert "click" not in result.output

    def test_unknown_category(self) -> None:
        result = runner.invoke(app, ["events", "--category", "telepathy"])
        assert result.exit_code != 0


class TestVersionCommand:
    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert result.output.strip() == f"dazzle-test-utils {__version__}"

    def test_log_level_option(self) -> None:
        result = runner.invoke(app, ["--log-level", "debug", "version"])
        assert result.exit_code == 0
