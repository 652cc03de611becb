"""FastAPI-powered web UI for playing PerfectXO in the browser."""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from .ai import MinimaxAI
from .game import COMPUTER, Outcome, TicTacToeGame

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for an active PerfectXO game and its AI opponent."""

    game: TicTacToeGame
    ai: MinimaxAI
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    ai_pending: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(
    title="PerfectXO", description="Tic-tac-toe against a perfect minimax opponent"
)


AI_THINK_DELAY: Tuple[float, float] = (0.3, 0.8)


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    cell_index: int = Field(alias="cellIndex", ge=0, le=8)


def _create_session() -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    session = GameSession(game=TicTacToeGame(), ai=MinimaxAI(player=COMPUTER))
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created game %s", session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _log_if_finished(game_id: str, game: TicTacToeGame) -> None:
    if game.finished:
        logger.info("Game %s finished: %s", game_id, game.outcome.value)


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, random.uniform(*AI_THINK_DELAY)))

    with session.lock:
        try:
            game = session.game
            if game.finished:
                return
            if game.current_player != session.ai.player:
                return
            cell_index = session.ai.choose(game)
            game.play_move(cell_index)
            session.move_log.append(
                {"player": session.ai.player, "cellIndex": cell_index}
            )
            _log_if_finished(game_id, game)
        finally:
            session.ai_pending = False


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        game = session.game
        state: Dict[str, object] = {
            "id": game_id,
            "cells": [c if c in ("X", "O") else "" for c in game.board.cells],
            "currentPlayer": game.current_player,
            "outcome": game.outcome.value,
            "winner": game.winner,
            "drawn": game.outcome is Outcome.DRAW,
            "availableMoves": game.available_moves(),
            "moveLog": list(session.move_log),
            "aiPending": session.ai_pending,
        }
        if session.move_log:
            state["lastMove"] = session.move_log[-1]
        return state


def _apply_player_move(
    game_id: str,
    session: GameSession,
    cell_index: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    should_schedule_ai = False
    with session.lock:
        game = session.game
        if game.finished:
            raise HTTPException(status_code=400, detail="Game already finished")

        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")

        if game.current_player == session.ai.player:
            raise HTTPException(status_code=400, detail="It is not your turn")

        player = game.current_player
        try:
            game.play_move(cell_index)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        session.move_log.append({"player": player, "cellIndex": cell_index})
        _log_if_finished(game_id, game)

        should_schedule_ai = (
            not game.finished and game.current_player == session.ai.player
        )
        if should_schedule_ai:
            session.ai_pending = True

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


@app.post("/api/game")
def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.cell_index, background_tasks)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")
        session.game.reset()
        session.move_log.clear()
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>PerfectXO</title>
    <style>
      :root {
        color-scheme: light;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        background: radial-gradient(circle at top, #f2f5ff, #dbe0ff 40%, #cfd8ff 70%);
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem 3rem;
        color: #13203a;
      }
      main {
        background: rgba(255, 255, 255, 0.92);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(34, 47, 79, 0.16);
        padding: clamp(1.5rem, 4vw, 2.5rem);
        width: min(420px, 100%);
        text-align: center;
      }
      h1 {
        margin: 0 0 0.5rem;
        letter-spacing: 0.06em;
      }
      .status {
        min-height: 1.5rem;
        margin: 0 0 1.25rem;
        font-weight: 600;
      }
      .grid {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 0.5rem;
        margin: 0 auto 1.5rem;
        width: min(300px, 100%);
      }
      .cell {
        aspect-ratio: 1;
        font-size: 2.5rem;
        font-weight: 700;
        border-radius: 12px;
        border: 1px solid rgba(60, 70, 120, 0.25);
        background: white;
        cursor: pointer;
      }
      .cell:disabled {
        cursor: default;
      }
      .cell.x {
        color: #d7263d;
      }
      .cell.o {
        color: #1b4dff;
      }
      .cell.last {
        box-shadow: 0 0 0 3px rgba(27, 77, 255, 0.35);
      }
      button.new-game {
        font-size: 1rem;
        padding: 0.55rem 1.2rem;
        border-radius: 999px;
        border: 1px solid rgba(60, 70, 120, 0.25);
        background: rgba(226, 232, 255, 0.9);
        cursor: pointer;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>PerfectXO</h1>
      <p class=\"status\" id=\"status\"></p>
      <div class=\"grid\" id=\"grid\"></div>
      <button class=\"new-game\" id=\"new-game\">New game</button>
    </main>
    <script>
      const grid = document.getElementById('grid');
      const statusLine = document.getElementById('status');
      let gameId = null;
      let pollTimer = null;

      const cells = [];
      for (let i = 0; i < 9; i += 1) {
        const cell = document.createElement('button');
        cell.className = 'cell';
        cell.addEventListener('click', () => play(i));
        grid.appendChild(cell);
        cells.push(cell);
      }

      function describe(state) {
        if (state.outcome === 'x_win') return 'You win!';
        if (state.outcome === 'o_win') return 'The computer wins.';
        if (state.outcome === 'draw') return "It's a draw.";
        if (state.aiPending) return 'Computer is thinking...';
        return 'Your turn (X)';
      }

      function render(state) {
        const open = new Set(state.availableMoves);
        const last = state.lastMove ? state.lastMove.cellIndex : null;
        state.cells.forEach((value, index) => {
          const cell = cells[index];
          cell.textContent = value;
          cell.className = 'cell' + (value ? ' ' + value.toLowerCase() : '');
          if (index === last) cell.classList.add('last');
          cell.disabled = state.aiPending || !open.has(index);
        });
        statusLine.textContent = describe(state);
        clearTimeout(pollTimer);
        if (state.aiPending) {
          pollTimer = setTimeout(refresh, 300);
        }
      }

      async function refresh() {
        const response = await fetch(`/api/game/${gameId}`);
        if (response.ok) render(await response.json());
      }

      async function play(index) {
        const response = await fetch(`/api/game/${gameId}/move`, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ cellIndex: index }),
        });
        const payload = await response.json();
        if (!response.ok) {
          statusLine.textContent = payload.detail || 'Move rejected';
          return;
        }
        render(payload);
      }

      async function newGame() {
        const url = gameId ? `/api/game/${gameId}/reset` : '/api/game';
        let response = await fetch(url, { method: 'POST' });
        if (response.status === 404) {
          response = await fetch('/api/game', { method: 'POST' });
        }
        const payload = await response.json();
        if (!response.ok) {
          statusLine.textContent = payload.detail || 'Unable to start a game';
          return;
        }
        gameId = payload.id;
        render(payload);
      }

      document.getElementById('new-game').addEventListener('click', newGame);
      newGame();
    </script>
  </body>
</html>
"""
