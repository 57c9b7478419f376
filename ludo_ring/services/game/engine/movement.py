"""Movement rules: where a piece ends up for a given roll.

Pure functions over a single piece. They never mutate state; the turn
controller applies the returned placement.
"""

import logging

from ludo_ring.schemas.game_engine import (
    AtHome,
    BoardSetup,
    Finished,
    OnFinalPath,
    OnRing,
    Piece,
    Placement,
)

from .board import crosses_final_entry, distance_to_final_entry

logger = logging.getLogger(__name__)


def can_leave_home(dice1: int, dice2: int, board: BoardSetup) -> bool:
    return board.get_out_value in (dice1, dice2)


def _stretch_destination(stretch_index: int, board: BoardSetup) -> Placement | None:
    """Placement for a stretch index, FINISHED one past the end, None beyond that."""
    if stretch_index < board.stretch_length:
        return OnFinalPath(stretch_index=stretch_index)
    if stretch_index == board.stretch_length:
        return Finished()
    return None


def compute_destination(
    piece: Piece,
    dice1: int,
    dice2: int,
    board: BoardSetup,
) -> Placement | None:
    """Determine where a piece lands for the rolled dice.

    - HOME: leaves onto its entry cell if either die shows the get-out value.
      The pip sum is not spent.
    - ACTIVE: moves dice1 + dice2 around the ring, turning into the home
      stretch once it passes its final-path entry.
    - FINAL_PATH: moves along the stretch; must land exactly on the finish.
    - FINISHED: never moves.

    Args:
        piece: The piece to move.
        dice1: First die value.
        dice2: Second die value.
        board: Board geometry.

    Returns:
        The new placement, or None if the move is illegal.
    """
    steps = dice1 + dice2
    placement = piece.placement

    if isinstance(placement, AtHome):
        if can_leave_home(dice1, dice2, board):
            return OnRing(ring_index=board.entry_cell(piece.owner))
        return None

    if isinstance(placement, OnRing):
        pos = placement.ring_index
        if not crosses_final_entry(pos, piece.owner, steps, board):
            return OnRing(ring_index=(pos + steps) % board.ring_size)

        steps_in_final = steps - distance_to_final_entry(pos, piece.owner, board) - 1
        destination = _stretch_destination(steps_in_final, board)
        if destination is None:
            logger.debug(
                "Overshoot from ring: piece=%d/%d, pos=%d, steps=%d, steps_in_final=%d",
                piece.owner,
                piece.index,
                pos,
                steps,
                steps_in_final,
            )
        return destination

    if isinstance(placement, OnFinalPath):
        destination = _stretch_destination(placement.stretch_index + steps, board)
        if destination is None:
            logger.debug(
                "Overshoot on stretch: piece=%d/%d, stretch_index=%d, steps=%d",
                piece.owner,
                piece.index,
                placement.stretch_index,
                steps,
            )
        return destination

    # Finished pieces have no moves
    return None
