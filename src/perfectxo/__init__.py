"""PerfectXO package exposing board logic, the minimax engine, and the web application."""

from .ai import MinimaxAI, evaluate, select_move
from .game import Board, Outcome, TicTacToeGame, classify
from .ui import app

__all__ = [
    "Board",
    "MinimaxAI",
    "Outcome",
    "TicTacToeGame",
    "app",
    "classify",
    "evaluate",
    "select_move",
]
