"""
Session Module - Headless control of a running game.

The controller holds the authoritative snapshot, turns player input
into state-changers and advances phases and turns. Nothing is
persisted; restart() returns to the initial snapshot.
"""

from .controller import GameController, ChangeResult

__all__ = [
    "GameController",
    "ChangeResult",
]
