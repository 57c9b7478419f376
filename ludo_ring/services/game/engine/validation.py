"""Validation layer for controller commands and the ProcessResult pattern.

Separates phase checks from rule processing:
- validate_*() check whether a command is allowed in the current phase
- ValidationResult / ProcessResult replace exceptions for control flow
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from ludo_ring.schemas.game_engine import BoardSetup, GameState, PieceRef

from .actions import (
    DeselectPieceAction,
    EndTurnAction,
    GameAction,
    MoveAction,
    PassTurnAction,
    RollAction,
    SelectPieceAction,
)
from .events import AnyGameEvent
from .legal_moves import has_any_legal_move

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    PHASE_VIOLATION = "PHASE_VIOLATION"
    ILLEGAL_MOVE = "ILLEGAL_MOVE"
    WRONG_OWNER = "WRONG_OWNER"
    NO_SELECTION = "NO_SELECTION"
    MOVES_AVAILABLE = "MOVES_AVAILABLE"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"


@dataclass
class ProcessResult:
    """Result of processing a game action.

    Replaces exceptions for control flow, providing explicit success/failure
    with error codes suitable for client localization.
    """

    state: GameState | None = None
    events: list[AnyGameEvent] = field(default_factory=list)
    success: bool = True
    error_code: ErrorCode | None = None
    error_message: str | None = None

    @classmethod
    def ok(
        cls,
        state: GameState,
        events: list[AnyGameEvent] | None = None,
    ) -> "ProcessResult":
        """Create a successful result with new state and events."""
        return cls(
            state=state,
            events=events or [],
            success=True,
        )

    @classmethod
    def failure(cls, code: ErrorCode, message: str) -> "ProcessResult":
        """Create a failure result with error details."""
        return cls(
            state=None,
            events=[],
            success=False,
            error_code=code,
            error_message=message,
        )


@dataclass
class ValidationResult:
    """Result of validating a command before applying it."""

    is_valid: bool = True
    error_code: ErrorCode | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(is_valid=True)

    @classmethod
    def error(cls, code: ErrorCode, message: str) -> "ValidationResult":
        """Create a validation failure with error details."""
        return cls(
            is_valid=False,
            error_code=code,
            error_message=message,
        )


def validate_roll(state: GameState) -> ValidationResult:
    if state.has_rolled:
        return ValidationResult.error(
            ErrorCode.PHASE_VIOLATION,
            "Dice already rolled this turn",
        )
    return ValidationResult.ok()


def validate_select(state: GameState, ref: PieceRef) -> ValidationResult:
    if not state.has_rolled:
        return ValidationResult.error(
            ErrorCode.PHASE_VIOLATION,
            "Roll the dice before selecting a piece",
        )
    if ref.player != state.current_player:
        return ValidationResult.error(
            ErrorCode.WRONG_OWNER,
            f"Piece belongs to player {ref.player}, not player {state.current_player}",
        )
    return ValidationResult.ok()


def validate_move(state: GameState) -> ValidationResult:
    if state.selected is None:
        return ValidationResult.error(
            ErrorCode.NO_SELECTION,
            "No piece selected",
        )
    if not state.has_rolled:
        return ValidationResult.error(
            ErrorCode.PHASE_VIOLATION,
            "Cannot move before rolling",
        )
    if state.has_moved:
        return ValidationResult.error(
            ErrorCode.PHASE_VIOLATION,
            "Already moved with this roll",
        )
    return ValidationResult.ok()


def validate_end_turn(state: GameState) -> ValidationResult:
    if not state.has_moved:
        return ValidationResult.error(
            ErrorCode.PHASE_VIOLATION,
            "Cannot end turn before moving",
        )
    return ValidationResult.ok()


def validate_pass(state: GameState, board: BoardSetup) -> ValidationResult:
    if not state.has_rolled or state.has_moved:
        return ValidationResult.error(
            ErrorCode.PHASE_VIOLATION,
            "Can only pass after rolling and before moving",
        )
    if has_any_legal_move(state, board):
        return ValidationResult.error(
            ErrorCode.MOVES_AVAILABLE,
            "A legal move is available, cannot pass",
        )
    return ValidationResult.ok()


def validate_action(
    state: GameState,
    action: GameAction,
    board: BoardSetup,
) -> ValidationResult:
    """Validate an action before processing.

    Checks that the turn phase allows the action, that a selected piece
    belongs to the current player, and that a pass is only taken when no
    legal move exists. Whether the selected piece can actually cover the
    rolled distance is decided by the movement rules afterwards.

    Args:
        state: Current game state.
        action: The action to validate.
        board: Board configuration.

    Returns:
        ValidationResult indicating success or failure with error details.
    """
    action_type = type(action).__name__
    logger.debug(
        "Validating action: type=%s, player=%d, has_rolled=%s, has_moved=%s",
        action_type,
        state.current_player,
        state.has_rolled,
        state.has_moved,
    )

    if isinstance(action, RollAction):
        result = validate_roll(state)
    elif isinstance(action, SelectPieceAction):
        result = validate_select(state, action.ref)
    elif isinstance(action, DeselectPieceAction):
        result = ValidationResult.ok()
    elif isinstance(action, MoveAction):
        result = validate_move(state)
    elif isinstance(action, EndTurnAction):
        result = validate_end_turn(state)
    elif isinstance(action, PassTurnAction):
        result = validate_pass(state, board)
    else:
        result = ValidationResult.error(
            ErrorCode.UNKNOWN_ACTION,
            f"Unknown action type: {action_type}",
        )

    if not result.is_valid:
        logger.debug(
            "Validation failed: type=%s, code=%s, message=%s",
            action_type,
            result.error_code.value,
            result.error_message,
        )
    return result
