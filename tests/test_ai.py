"""Tests for the PerfectXO minimax engine."""

import pytest

from perfectxo.ai import MinimaxAI, evaluate, select_move
from perfectxo.game import Board, Outcome, TicTacToeGame, classify


def test_ai_blocks_immediate_threat():
    board = Board.from_string("XX..O....")
    assert select_move(board) == 2


def test_ai_keeps_first_best_move_over_immediate_win():
    # Blocking at 2 also forces a win through the 2-4-6 diagonal, and 2 is
    # tried before the direct win at 5.
    board = Board.from_string("XX.OO....")
    assert select_move(board) == 2


def test_ai_takes_immediate_win():
    board = Board.from_string("XX.OO.X..")
    assert select_move(board) == 5


def test_ai_answers_corner_opening_with_center():
    board = Board.from_string("X........")
    assert select_move(board) == 4


def test_ai_answers_center_opening_with_first_corner():
    board = Board.from_string("....X....")
    assert select_move(board) == 0


def test_select_move_returns_empty_cell_when_every_move_loses():
    # X threatens both 2 and 6; O cannot stop both.
    board = Board.from_string("XX.XO...O")
    move = select_move(board)
    assert move == 2
    assert board[move] == " "


def test_search_restores_board():
    board = Board.from_string("X...O...X")
    before = list(board.cells)
    select_move(board)
    assert board.cells == before
    evaluate(board, "O", True)
    assert board.cells == before


def test_evaluate_terminal_scores_are_symbol_relative():
    x_wins = Board.from_string("XXXOO....")
    o_wins = Board.from_string("OOOXX.X..")
    draw = Board.from_string("XOXXOOOXX")
    for maximizing in (True, False):
        assert evaluate(x_wins, "O", maximizing) == -1
        assert evaluate(o_wins, "X", maximizing) == 1
        assert evaluate(draw, "X", maximizing) == 0


def test_empty_board_is_a_draw_under_perfect_play():
    assert evaluate(Board(), "X", False) == 0


def test_two_perfect_players_draw():
    board = Board()
    piece = "X"
    while classify(board) is Outcome.ONGOING:
        move = select_move(board, me=piece)
        assert board[move] == " "
        board[move] = piece
        piece = "O" if piece == "X" else "X"
    assert classify(board) is Outcome.DRAW


def _never_loses(game: TicTacToeGame, ai: MinimaxAI) -> bool:
    if game.finished:
        return game.outcome is not Outcome.X_WIN
    for move in game.available_moves():
        child = TicTacToeGame(board=game.board.copy(), current_player="X")
        child.play_move(move)
        if not child.finished:
            child.play_move(ai.choose(child))
        if not _never_loses(child, ai):
            return False
    return True


def test_ai_never_loses_against_any_human_line():
    assert _never_loses(TicTacToeGame(), MinimaxAI(player="O"))


def test_ai_punishes_a_suboptimal_human():
    game = TicTacToeGame()
    ai = MinimaxAI(player="O")
    game.play_move(0)
    game.play_move(ai.choose(game))  # center
    game.play_move(1)
    game.play_move(ai.choose(game))  # forced block at 2
    game.play_move(8)  # ignores the 2-4-6 threat
    assert ai.score(game) == 1
    while not game.finished:
        if game.current_player == "X":
            game.play_move(game.available_moves()[0])
        else:
            game.play_move(ai.choose(game))
    assert game.outcome is Outcome.O_WIN


def test_ai_refuses_to_move_out_of_turn():
    game = TicTacToeGame()
    ai = MinimaxAI(player="O")
    with pytest.raises(ValueError):
        ai.choose(game)
