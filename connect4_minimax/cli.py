"""Command-line driver: an opponent plays Max, the minimax searcher plays Min."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from connect4_minimax.agents import Agent, AlphaBetaAgent, HumanAgent, MinimaxAgent, RandomAgent
from connect4_minimax.constants import DIMX, Cell
from connect4_minimax.engine import BoardState, State, render_state
from connect4_minimax.evaluation import winning_window
from connect4_minimax.game import MatchConfig, MatchResult, play_match
from connect4_minimax.search import MinimaxSearch, NodeCounter

console = Console()
app = typer.Typer(add_completion=False)

USAGE = "Arguments:  limit_min  limit_max"
OPPONENTS = ("alphabeta", "minimax", "random", "human")


def parse_limits(args: Optional[Sequence[str]]) -> Tuple[MatchConfig, bool]:
    """
    Depth limits from the positional arguments.

    Anything but exactly two positive integers falls back to the defaults;
    the flag tells the caller to print the usage line.
    """
    if not args or len(args) != 2:
        return MatchConfig(), False
    try:
        cfg = MatchConfig(limit_min=int(args[0]), limit_max=int(args[1]))
        cfg.validate()
    except ValueError:
        return MatchConfig(), False
    return cfg, True


def _parse_column(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        col = int(raw)
    except ValueError:
        return None

    if 0 <= col < DIMX:
        return col
    return None


def prompt_for_human_move(s: State, name: str) -> int:
    legal = s.legal_columns()
    while True:
        raw = typer.prompt(f"{name} (X) to move. Column {legal}")
        col = _parse_column(raw)
        if col is None or col not in legal:
            console.print("Illegal move: column full or out of range.")
            continue
        return col


def build_opponent(choice: str, depth: int, seed: Optional[int]) -> Agent:
    if choice == "alphabeta":
        return AlphaBetaAgent("AlphaBeta X", Cell.MAX, max_depth=depth)
    if choice == "minimax":
        return MinimaxAgent("Minimax X", Cell.MAX, depth=depth)
    if choice == "random":
        return RandomAgent("Random X", Cell.MAX, seed=seed)
    if choice == "human":
        return HumanAgent("Player X", prompt_for_human_move, Cell.MAX)
    raise ValueError(f"unsupported opponent: {choice}")


def print_column_values(s: State, depth: int) -> None:
    values = MinimaxSearch(depth).column_values(s, maximizing=False)
    table = Table(title=f"Min column values (depth {depth})")
    table.add_column("col", justify="right")
    table.add_column("minimax", justify="right")
    best = min(values.values()) if values else None
    for col, value in values.items():
        mark = " *" if value == best else ""
        table.add_row(str(col), f"{value}{mark}")
    console.print(table)


def print_summary(result: MatchResult, nodes: int, cfg: MatchConfig) -> None:
    console.out(f" {nodes} nodes explored")
    console.out(f"Utility: {result.state.utility()}")
    console.out(f"limit_min: {cfg.limit_min}")
    console.out(f"limit_max: {cfg.limit_max}")

    decided = winning_window(result.state.grid)
    if decided is None:
        console.out("Result: draw")
    else:
        owner, cells = decided
        console.out(f"Result: {'X' if owner is Cell.MAX else 'O'} wins at {cells}")


def _configure_logging(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"unknown log level: {level}")
    logging.basicConfig(
        level=numeric,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command(context_settings={"ignore_unknown_options": True})
def play(
    args: Optional[List[str]] = typer.Argument(None, help="limit_min limit_max (search depth of each side)."),
    opponent: str = typer.Option("alphabeta", help="Engine playing Max: alphabeta|minimax|random|human."),
    seed: Optional[int] = typer.Option(None, help="Seed for the random opponent."),
    show_values: bool = typer.Option(
        False, "--show-values", help="Print Min's per-column minimax values before each Min move.", is_flag=True
    ),
    log_level: str = typer.Option("WARNING", help="Logging level for search diagnostics."),
) -> None:
    """
    Play one game: the opponent moves for Max with depth limit_max, the
    minimax search moves for Min with depth limit_min.
    """
    if opponent not in OPPONENTS:
        raise typer.BadParameter(f"opponent must be one of {'|'.join(OPPONENTS)}")
    _configure_logging(log_level)

    cfg, ok = parse_limits(args)
    if not ok:
        console.out(USAGE)

    console.out(f"limit_min: {cfg.limit_min}")
    console.out(f"limit_max: {cfg.limit_max}")

    counter = NodeCounter()
    max_agent = build_opponent(opponent, cfg.limit_max, seed)
    min_agent = MinimaxAgent("Minimax O", Cell.MIN, depth=cfg.limit_min, counter=counter)

    def on_state(agent: Agent, s: BoardState) -> None:
        console.out(render_state(s))
        if show_values and agent.side is Cell.MAX and not s.is_terminal():
            print_column_values(s, cfg.limit_min)

    result = play_match(max_agent, min_agent, on_state=on_state)
    print_summary(result, counter.count, cfg)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
