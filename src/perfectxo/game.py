"""Board state, outcome classification and turn keeping for PerfectXO."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

Player = str  # "X" or "O"

X: Player = "X"
O: Player = "O"
EMPTY = " "

# The human always plays X and moves first; the engine plays O.
HUMAN: Player = X
COMPUTER: Player = O

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class Outcome(str, Enum):
    X_WIN = "x_win"
    O_WIN = "o_win"
    DRAW = "draw"
    ONGOING = "ongoing"


def opponent(player: Player) -> Player:
    return O if player == X else X


# ---------- Board ----------


@dataclass
class Board:
    # Row-major: index = row * 3 + col
    cells: List[str] = field(default_factory=lambda: [EMPTY] * 9)

    def __getitem__(self, idx: int) -> str:
        return self.cells[idx]

    def __setitem__(self, idx: int, value: str) -> None:
        self.cells[idx] = value

    def empty_cells(self) -> List[int]:
        return [i for i, c in enumerate(self.cells) if c == EMPTY]

    def is_full(self) -> bool:
        return all(c != EMPTY for c in self.cells)

    def reset(self) -> None:
        for i in range(9):
            self.cells[i] = EMPTY

    def copy(self) -> "Board":
        return Board(cells=self.cells.copy())

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """Build a board from 9 characters, ``X``/``O`` and ``.`` or space for empty."""
        if len(text) != 9:
            raise ValueError("Board string must be exactly 9 characters")
        cells: List[str] = []
        for ch in text.upper():
            if ch in (X, O):
                cells.append(ch)
            elif ch in (".", EMPTY, "*"):
                cells.append(EMPTY)
            else:
                raise ValueError(f"Unexpected board character {ch!r}")
        return cls(cells=cells)


def _has_line(board: Board, player: Player) -> bool:
    cells = board.cells
    for a, b, c in WINNING_LINES:
        if cells[a] == player and cells[b] == player and cells[c] == player:
            return True
    return False


def classify(board: Board) -> Outcome:
    """Classify a board purely from its contents.

    X lines are checked before O lines, so a (never reachable) double win
    reports ``X_WIN``.
    """
    if _has_line(board, X):
        return Outcome.X_WIN
    if _has_line(board, O):
        return Outcome.O_WIN
    if board.is_full():
        return Outcome.DRAW
    return Outcome.ONGOING


# ---------- Game ----------


@dataclass
class TicTacToeGame:
    board: Board = field(default_factory=Board)
    current_player: Player = HUMAN

    # ---- API used by the console, the web UI & the AI ----

    @property
    def outcome(self) -> Outcome:
        return classify(self.board)

    @property
    def finished(self) -> bool:
        return self.outcome is not Outcome.ONGOING

    @property
    def winner(self) -> Optional[Player]:
        result = self.outcome
        if result is Outcome.X_WIN:
            return X
        if result is Outcome.O_WIN:
            return O
        return None

    def available_moves(self) -> List[int]:
        if self.finished:
            return []
        return self.board.empty_cells()

    def play_move(self, idx: int) -> None:
        """Apply a legal move for the current player and pass the turn."""
        if self.finished:
            raise ValueError("Game already finished")
        if not 0 <= idx <= 8:
            raise ValueError("Cell index must be between 0 and 8")
        if self.board[idx] != EMPTY:
            raise ValueError("Cell already occupied")
        self.board[idx] = self.current_player
        self.current_player = opponent(self.current_player)

    def reset(self) -> None:
        self.board.reset()
        self.current_player = HUMAN
