"""Game management layer — engine, players, clocks, settings.

Quick start::

    from rookery.core import Coord
    from rookery.game import Engine, GameSettings

    engine = Engine.from_settings(GameSettings.blitz_5m())
    engine.initialize_standard_positions()
    if engine.move(Coord.parse("e2"), Coord.parse("e4")).ok:
        engine.complete_turn()
"""

from rookery.game.clock import PlayerClock
from rookery.game.engine import Engine
from rookery.game.player import Player
from rookery.game.settings import (
    DEFAULT_MAX_TURNS,
    DEFAULT_TICK_INTERVAL_MS,
    GameSettings,
)

__all__ = [
    "DEFAULT_MAX_TURNS",
    "DEFAULT_TICK_INTERVAL_MS",
    "Engine",
    "GameSettings",
    "Player",
    "PlayerClock",
]
