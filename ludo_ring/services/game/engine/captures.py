"""Capture detection and resolution logic."""

import logging

from ludo_ring.schemas.game_engine import (
    AtHome,
    GameState,
    OnRing,
    Piece,
)

logger = logging.getLogger(__name__)


def detect_captures(state: GameState, mover: Piece) -> list[Piece]:
    """Find every opponent piece sharing the mover's ring cell.

    Only ring cells are contested: a mover on its stretch, at home or finished
    never captures. Pieces of the mover's own player are never returned, so
    friendly pieces may stack freely.

    Args:
        state: Current game state.
        mover: The piece that just moved.

    Returns:
        The opponent pieces that must go back home.
    """
    if not isinstance(mover.placement, OnRing):
        return []

    ring_index = mover.placement.ring_index
    victims = [
        piece
        for player in state.players
        if player.index != mover.owner
        for piece in player.pieces
        if isinstance(piece.placement, OnRing) and piece.placement.ring_index == ring_index
    ]
    logger.debug(
        "Capture check: mover=%d/%d, ring_index=%d, victims=%d",
        mover.owner,
        mover.index,
        ring_index,
        len(victims),
    )
    return victims


def send_home(piece: Piece) -> None:
    """Return a captured piece to its player's home pool."""
    logger.info(
        "Piece captured: piece=%d/%d, ring_index=%s",
        piece.owner,
        piece.index,
        piece.position,
    )
    piece.placement = AtHome()
