"""Tests for the ``python -m perfectxo`` entry point."""

from perfectxo import __main__ as entry
from perfectxo import console


def test_console_command_runs_terminal_game(monkeypatch):
    calls = []
    monkeypatch.setattr(console, "run", lambda color: calls.append(color))
    assert entry.main(["console", "--no-color"]) == 0
    assert calls == [False]


def test_default_command_starts_server(monkeypatch):
    calls = []
    monkeypatch.setenv("PERFECTXO_HOST", "127.0.0.1")
    monkeypatch.setenv("PERFECTXO_PORT", "9000")
    monkeypatch.setattr(
        entry.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs))
    )
    assert entry.main([]) == 0
    assert calls == [
        ("perfectxo.ui:app", {"host": "127.0.0.1", "port": 9000, "reload": False})
    ]
