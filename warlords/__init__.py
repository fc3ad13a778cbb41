"""
Warlords - Rule-driven card game engine

A two-player trading-card game engine. Players deploy minions, draw
and attack; the game ends when a warlord dies. The package provides:
- Immutable-per-step game state snapshots
- Shuffle, Move and Attack state-changers
- Simultaneous-damage combat resolution
- A small rule language for pile edge validation
"""

__version__ = "0.1.0"
