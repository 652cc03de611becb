"""Terminal front end: render the grid, read moves and replay games."""

from __future__ import annotations

from typing import Callable, Optional
import logging

from colorama import Fore, Style, just_fix_windows_console

from .ai import MinimaxAI
from .game import COMPUTER, EMPTY, HUMAN, X, Board, Outcome, TicTacToeGame

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

RESULT_MESSAGES = {
    Outcome.X_WIN: "X Wins!",
    Outcome.O_WIN: "O Wins!",
    Outcome.DRAW: "Its a draw.",
}


def _cell(value: str, color: bool) -> str:
    if value == EMPTY:
        return "*"
    if not color:
        return value
    tint = Fore.RED if value == X else Fore.BLUE
    return f"{tint}{Style.BRIGHT}{value}{Style.RESET_ALL}"


def render_board(board: Board, color: bool = True) -> str:
    """Three rows of marks, each followed by the indices it covers."""
    rows = []
    for r in range(3):
        base = r * 3
        marks = "".join(_cell(board[base + c], color) for c in range(3))
        rows.append(f"{marks} {base}{base + 1}{base + 2}")
    return "\n".join(rows)


def read_move(board: Board, input_fn: InputFn = input) -> int:
    """Prompt until the player names an empty cell in range."""
    while True:
        raw = input_fn("Enter move: ")
        try:
            move = int(raw.strip())
        except ValueError:
            logger.debug("Ignoring non-numeric move %r", raw)
            continue
        if 0 <= move <= 8 and board[move] == EMPTY:
            return move
        logger.debug("Ignoring illegal move %d", move)


def play_game(
    game: TicTacToeGame,
    ai: Optional[MinimaxAI] = None,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
    color: bool = True,
) -> Outcome:
    ai = ai or MinimaxAI(player=COMPUTER)
    game.reset()
    output_fn(render_board(game.board, color))

    while not game.finished:
        output_fn(f"Turn {HUMAN}")
        game.play_move(read_move(game.board, input_fn))
        output_fn(render_board(game.board, color))

        if game.finished:
            break

        output_fn(f"Turn {ai.player}")
        game.play_move(ai.choose(game))
        output_fn(render_board(game.board, color))

    outcome = game.outcome
    output_fn(RESULT_MESSAGES[outcome])
    return outcome


def _wants_another(input_fn: InputFn) -> bool:
    answer = input_fn("Play again? [y/n]: ")
    return answer.strip().lower() in ("y", "yes")


def run(
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
    color: bool = True,
) -> int:
    """Play games until the player declines or input ends; returns games played."""
    if color:
        just_fix_windows_console()
    game = TicTacToeGame()
    ai = MinimaxAI(player=COMPUTER)
    played = 0
    try:
        while True:
            outcome = play_game(game, ai, input_fn, output_fn, color)
            played += 1
            logger.debug("Game %d finished: %s", played, outcome.value)
            if not _wants_another(input_fn):
                break
    except (EOFError, KeyboardInterrupt):
        output_fn("")
    return played
