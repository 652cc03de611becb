"""Exhaustive minimax search for PerfectXO.

The search always walks the full game tree from the given position. Scores
are fixed per symbol: a win for the engine's mark is ``+1``, a win for the
other mark ``-1`` and a draw ``0``, whatever the depth at which the game
ends. The board handed in is mutated while searching and is always restored
before the call returns.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from .game import (
    COMPUTER,
    EMPTY,
    O,
    Board,
    Outcome,
    Player,
    TicTacToeGame,
    X,
    classify,
    opponent,
)

logger = logging.getLogger(__name__)


def _terminal_score(outcome: Outcome, me: Player) -> int:
    if outcome is Outcome.DRAW:
        return 0
    winner = X if outcome is Outcome.X_WIN else O
    return 1 if winner == me else -1


def evaluate(
    board: Board, piece: Player, maximizing: bool, me: Player = COMPUTER
) -> int:
    """Score ``board`` with ``piece`` to move, from ``me``'s point of view."""
    outcome = classify(board)
    if outcome is not Outcome.ONGOING:
        return _terminal_score(outcome, me)

    best = -1 if maximizing else 1
    cells = board.cells
    other = opponent(piece)
    for i in range(9):
        if cells[i] != EMPTY:
            continue
        cells[i] = piece
        try:
            score = evaluate(board, other, not maximizing, me)
        finally:
            cells[i] = EMPTY
        best = max(best, score) if maximizing else min(best, score)
    return best


def select_move(board: Board, me: Player = COMPUTER) -> int:
    """Pick the cell for ``me`` with the best guaranteed score.

    The first cell reaching the best score is kept; a later cell only
    replaces it when strictly better. The board must have an empty cell.
    """
    cells = board.cells
    move = None
    move_score = -1
    for i in range(9):
        if cells[i] != EMPTY:
            continue
        if move is None:
            move = i
        cells[i] = me
        try:
            score = evaluate(board, opponent(me), False, me)
        finally:
            cells[i] = EMPTY
        if score > move_score:
            move_score, move = score, i

    if move is None:
        raise RuntimeError("No valid moves available")
    logger.debug("%s selects cell %d (score %d)", me, move, move_score)
    return move


@dataclass
class MinimaxAI:
    """Engine player for the console and the web UI.

      - MinimaxAI(player="O")
      - choose(game) -> cell_index
    """

    player: Player = COMPUTER

    def choose(self, game: TicTacToeGame) -> int:
        if game.current_player != self.player:
            raise ValueError("It is not this AI player's turn")
        return select_move(game.board, self.player)

    def score(self, game: TicTacToeGame) -> int:
        """Value of the current position for this player under perfect play."""
        board = game.board
        maximizing = game.current_player == self.player
        return evaluate(board, game.current_player, maximizing, self.player)
