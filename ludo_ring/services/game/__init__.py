"""Game service module.

Provides:
- Game initialization (start_game.py)
- Running-game registry for the HTTP host (registry.py)
- Game engine processing (engine/)
"""

# Re-export from engine for convenience
from .engine import (
    GameAction,
    GameController,
    ProcessResult,
    build_action_from_payload,
    build_game_view,
    process_action,
)
from .registry import GameLimitReachedError, GameRegistry, GameSession, get_game_registry
from .start_game import initialize_game, validate_board_setup

__all__ = [
    # Initialization
    "initialize_game",
    "validate_board_setup",
    # Registry
    "GameRegistry",
    "GameSession",
    "GameLimitReachedError",
    "get_game_registry",
    # Engine
    "GameAction",
    "GameController",
    "ProcessResult",
    "process_action",
    "build_action_from_payload",
    "build_game_view",
]
