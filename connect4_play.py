#!/usr/bin/env python3
"""Entry point for a Connect-4 game against the minimax searcher."""

from connect4_minimax.cli import main


if __name__ == "__main__":
    main()
