"""Tests for the command-line driver."""

import pytest
from typer.testing import CliRunner

from connect4_minimax import cli
from connect4_minimax.engine import BoardState
from connect4_minimax.game import MatchConfig, MatchResult

runner = CliRunner()


@pytest.mark.parametrize(
    "args,expected,ok",
    [
        (["3", "5"], MatchConfig(3, 5), True),
        (None, MatchConfig(9, 9), False),
        (["4"], MatchConfig(9, 9), False),
        (["1", "2", "3"], MatchConfig(9, 9), False),
        (["a", "2"], MatchConfig(9, 9), False),
        (["0", "2"], MatchConfig(9, 9), False),
    ],
)
def test_parse_limits(args, expected, ok):
    assert cli.parse_limits(args) == (expected, ok)


def test_play_prints_boards_and_summary():
    result = runner.invoke(cli.app, ["2", "1", "--opponent", "random", "--seed", "1"])
    assert result.exit_code == 0, result.output
    out = result.stdout
    assert cli.USAGE not in out
    assert out.startswith("limit_min: 2\nlimit_max: 1\n")
    assert "nodes explored" in out
    assert "Utility: " in out
    assert out.rstrip().splitlines()[-3:-1] == ["limit_min: 2", "limit_max: 1"]
    assert "Result: " in out


def test_wrong_argument_count_falls_back_to_defaults(monkeypatch):
    captured = {}

    def fake_play_match(max_agent, min_agent, on_state=None):
        captured["depths"] = (min_agent.search.depth, max_agent.max_depth)
        return MatchResult(state=BoardState.from_columns([[1], [1], [1], [1]]), moves=())

    monkeypatch.setattr(cli, "play_match", fake_play_match)
    result = runner.invoke(cli.app, ["7"])
    assert result.exit_code == 0, result.output
    assert cli.USAGE in result.stdout
    assert "limit_min: 9" in result.stdout
    assert "limit_max: 9" in result.stdout
    assert captured["depths"] == (9, 9)
    assert "Utility: 1000" in result.stdout


def test_unknown_opponent_is_rejected():
    result = runner.invoke(cli.app, ["1", "1", "--opponent", "oracle"])
    assert result.exit_code != 0


def test_show_values_prints_table():
    result = runner.invoke(cli.app, ["1", "1", "--opponent", "random", "--seed", "0", "--show-values"])
    assert result.exit_code == 0, result.output
    assert "Min column values" in result.stdout


def test_parse_column():
    assert cli._parse_column(" 3 ") == 3
    assert cli._parse_column("7") is None
    assert cli._parse_column("x") is None
    assert cli._parse_column("") is None
