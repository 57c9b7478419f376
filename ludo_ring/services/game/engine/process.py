"""Main entry point for game action processing.

This module provides the primary interface for processing typed actions:
- process_action(): Validates and processes any game action
- Dispatches to the turn controller's commands
- Returns ProcessResult with a state snapshot and the events produced
"""

import logging

from .actions import (
    DeselectPieceAction,
    EndTurnAction,
    GameAction,
    MoveAction,
    PassTurnAction,
    RollAction,
    SelectPieceAction,
)
from .controller import GameController
from .validation import ErrorCode, ProcessResult, validate_action

logger = logging.getLogger(__name__)


def process_action(controller: GameController, action: GameAction) -> ProcessResult:
    """Process a game action and return the result.

    This is the main entry point for hosts that receive actions as data. It:
    1. Validates the action is allowed in the current phase
    2. Dispatches to the matching controller command
    3. Resolves captures right after a successful move
    4. Returns ProcessResult with a state snapshot and the new events

    Args:
        controller: The game to act on.
        action: The action to process.

    Returns:
        ProcessResult containing:
        - success: Whether the action was applied
        - state: A deep copy of the new game state (if successful)
        - events: Events the action produced, with seq numbers
        - error_code/error_message: Error details (if rejected)

    Example:
        >>> result = process_action(controller, RollAction())
        >>> if result.success:
        ...     for event in result.events:
        ...         redraw(event)
        ... else:
        ...     show_error(result.error_code, result.error_message)
    """
    action_type = type(action).__name__
    logger.debug(
        "Processing action: type=%s, player=%d, phase=%s",
        action_type,
        controller.current_player,
        controller.phase.value,
    )

    validation = validate_action(controller.state, action, controller.board)
    if not validation.is_valid:
        return ProcessResult.failure(
            validation.error_code or ErrorCode.PHASE_VIOLATION,
            validation.error_message or "Invalid action",
        )

    first_event = len(controller.event_log)

    if isinstance(action, RollAction):
        applied = controller.roll_dice()

    elif isinstance(action, SelectPieceAction):
        applied = controller.select_piece(action.ref)

    elif isinstance(action, DeselectPieceAction):
        controller.deselect_piece()
        applied = True

    elif isinstance(action, MoveAction):
        applied = controller.move_selected_piece()
        if applied:
            captured = controller.check_and_remove_opponent_piece()
            logger.debug("Move resolved with %d capture(s)", len(captured))

    elif isinstance(action, EndTurnAction):
        applied = controller.end_turn()

    elif isinstance(action, PassTurnAction):
        applied = controller.pass_turn()

    else:
        logger.error("Unknown action type received: %s", action_type)
        return ProcessResult.failure(
            ErrorCode.UNKNOWN_ACTION,
            f"Unknown action type: {action_type}",
        )

    if not applied:
        rejection = controller.last_rejection
        return ProcessResult.failure(
            rejection.error_code if rejection else ErrorCode.ILLEGAL_MOVE,
            rejection.error_message if rejection else "Action rejected",
        )

    events = controller.event_log[first_event:]
    logger.debug(
        "Action processed: type=%s, events_generated=%d",
        action_type,
        len(events),
    )
    return ProcessResult.ok(controller.state.model_copy(deep=True), list(events))
