"""Tests for the match driver."""

import pytest

from connect4_minimax.agents import Agent, AlphaBetaAgent, MinimaxAgent, RandomAgent
from connect4_minimax.constants import DIMX, DIMY, WINNER, Cell
from connect4_minimax.engine import BoardState, State
from connect4_minimax.game import IllegalMoveError, MatchConfig, play_match, played_column
from connect4_minimax.search import NodeCounter

X, O = Cell.MAX, Cell.MIN


class ScriptedAgent(Agent):
    """Plays a fixed list of columns."""

    def __init__(self, side, columns):
        self.name = f"scripted {side.name}"
        self.side = side
        self.columns = list(columns)

    def select_successor(self, s):
        return s.successor(self.columns.pop(0), self.side is Cell.MAX)


class CheatingAgent(Agent):
    name = "cheat"
    side = Cell.MAX

    def select_successor(self, s):
        return BoardState.from_columns([[X], [X]])


def test_match_config_validation():
    MatchConfig().validate()
    assert MatchConfig() == MatchConfig(9, 9)
    with pytest.raises(ValueError):
        MatchConfig(limit_min=0).validate()
    with pytest.raises(ValueError):
        MatchConfig(limit_max=-2).validate()


def test_scripted_match_ends_on_max_win():
    seen = []
    result = play_match(
        ScriptedAgent(X, [0, 1, 2, 3]),
        ScriptedAgent(O, [6, 6, 6]),
        on_state=lambda agent, s: seen.append(agent.side),
    )
    assert result.moves == (0, 6, 1, 6, 2, 6, 3)
    assert result.plies == 7
    assert result.winner is X
    assert result.state.utility() == WINNER
    assert seen == [X, O, X, O, X, O, X]


def test_minimax_wins_against_random():
    counter = NodeCounter()
    result = play_match(
        RandomAgent("r", X, seed=3),
        MinimaxAgent("m", O, depth=3, counter=counter),
    )
    assert result.state.is_terminal()
    assert result.winner is not X
    assert counter.count > 0


def test_alphabeta_against_minimax_terminates():
    result = play_match(
        AlphaBetaAgent("ab", X, max_depth=2),
        MinimaxAgent("m", O, depth=2),
    )
    assert result.state.is_terminal()
    assert result.plies == sum(result.state.column_height(c) for c in range(7))


def test_states_are_rebased_to_board_states():
    states = []
    play_match(
        ScriptedAgent(X, [3, 3, 3, 3]),
        ScriptedAgent(O, [0, 1, 2]),
        on_state=lambda agent, s: states.append(s),
    )
    assert all(type(s) is BoardState for s in states)


def test_match_starting_from_terminal_state_plays_nothing():
    won = BoardState.from_columns([[O], [O], [O], [O]])
    result = play_match(RandomAgent("a", X), RandomAgent("b", O), start=won)
    assert result.moves == ()
    assert result.winner is O


def test_agents_must_play_their_sides():
    with pytest.raises(ValueError):
        play_match(RandomAgent("a", O), RandomAgent("b", O))


def test_cheating_agent_is_rejected():
    with pytest.raises(IllegalMoveError):
        play_match(CheatingAgent(), RandomAgent("b", O))


def test_played_column_checks_piece_owner():
    before = BoardState.from_moves([2])
    after = before.successor(4, True)
    assert played_column(before, after, X) == 4
    with pytest.raises(IllegalMoveError):
        played_column(before, after, O)
    with pytest.raises(IllegalMoveError):
        played_column(before, before, X)


class PieceState(State):
    """Any piece layout at all, gravity not enforced; heights are the top piece."""

    def __init__(self, pieces):
        self.pieces = dict(pieces)

    def piece_at(self, col, row):
        return self.pieces.get((col, row), Cell.EMPTY)

    def column_height(self, col):
        rows = [y for (x, y) in self.pieces if x == col]
        return max(rows) + 1 if rows else 0

    def utility(self):
        return 0

    def successor(self, col, is_max):
        return None


def pieces_of(s):
    return {
        (x, y): s.piece_at(x, y)
        for x in range(DIMX)
        for y in range(DIMY)
        if s.piece_at(x, y) != Cell.EMPTY
    }


def test_played_column_rejects_extra_floating_piece():
    before = BoardState.from_moves([3])
    pieces = pieces_of(before.successor(3, True))
    pieces[(5, 2)] = X  # column 5 is otherwise empty
    after = PieceState(pieces)
    assert after.column_height(5) == 3

    with pytest.raises(IllegalMoveError):
        played_column(before, after, X)


def test_played_column_rejects_single_floating_piece():
    before = BoardState.from_moves([3])
    pieces = pieces_of(before)
    pieces[(5, 2)] = X
    with pytest.raises(IllegalMoveError):
        played_column(before, PieceState(pieces), X)


def test_played_column_rejects_overwritten_cell():
    before = BoardState.from_moves([3, 2])
    pieces = pieces_of(before)
    pieces[(2, 0)] = X
    with pytest.raises(IllegalMoveError):
        played_column(before, PieceState(pieces), X)


def test_played_column_accepts_legal_drop_from_any_state():
    before = BoardState.from_moves([3, 2])
    pieces = pieces_of(before)
    pieces[(3, 1)] = X
    assert played_column(before, PieceState(pieces), X) == 3
