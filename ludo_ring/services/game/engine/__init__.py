"""Game engine module - the rules of ring Ludo.

This module provides the core game engine with:
- A stateful turn controller driven one command at a time
- Pure movement, capture and legal-move rules
- Action types for hosts that receive commands as data
- Event types describing every state transition
- ProcessResult pattern for error handling

Usage:
    from ludo_ring.services.game.engine import (
        GameController,
        RollAction,
        process_action,
    )

    controller = GameController()
    result = process_action(controller, RollAction())

    if result.success:
        events = result.events  # Redraw from these
    else:
        print(f"Error: {result.error_code} - {result.error_message}")
"""

# Actions - explicit user inputs
from .actions import (
    DeselectPieceAction,
    EndTurnAction,
    GameAction,
    MoveAction,
    PassTurnAction,
    RollAction,
    SelectPieceAction,
    build_action_from_payload,
)

# Board arithmetic
from .board import crosses_final_entry, distance_to_final_entry, progress

# Turn controller
from .controller import GameController, GameInvariantError

# Dice
from .dice import Dice, DiceExhaustedError, DiceSource, ScriptedDice

# Events
from .events import (
    AnyGameEvent,
    DiceRolled,
    GameEvent,
    GameWon,
    PieceCaptured,
    PieceDeselected,
    PieceEnteredFinalPath,
    PieceEnteredRing,
    PieceFinished,
    PieceMoved,
    PieceSelected,
    TurnEnded,
)

# Legal moves
from .legal_moves import get_legal_pieces, has_any_legal_move
from .movement import compute_destination

# Main processing
from .process import process_action
from .queries import build_game_view

# Result types
from .validation import ErrorCode, ProcessResult, ValidationResult, validate_action

__all__ = [
    # Actions
    "GameAction",
    "RollAction",
    "SelectPieceAction",
    "DeselectPieceAction",
    "MoveAction",
    "EndTurnAction",
    "PassTurnAction",
    "build_action_from_payload",
    # Board
    "crosses_final_entry",
    "distance_to_final_entry",
    "progress",
    # Controller
    "GameController",
    "GameInvariantError",
    # Dice
    "Dice",
    "DiceSource",
    "DiceExhaustedError",
    "ScriptedDice",
    # Events
    "GameEvent",
    "AnyGameEvent",
    "DiceRolled",
    "PieceSelected",
    "PieceDeselected",
    "PieceEnteredRing",
    "PieceMoved",
    "PieceEnteredFinalPath",
    "PieceFinished",
    "PieceCaptured",
    "TurnEnded",
    "GameWon",
    # Movement / legal moves
    "compute_destination",
    "get_legal_pieces",
    "has_any_legal_move",
    # Processing
    "process_action",
    "build_game_view",
    # Validation
    "ErrorCode",
    "ProcessResult",
    "ValidationResult",
    "validate_action",
]
