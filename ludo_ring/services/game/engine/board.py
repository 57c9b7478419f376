"""Ring and home-stretch arithmetic."""

from ludo_ring.schemas.game_engine import (
    BoardSetup,
    Finished,
    OnFinalPath,
    OnRing,
    Piece,
)


def distance_to_final_entry(ring_index: int, player_index: int, board: BoardSetup) -> int:
    """Steps a piece at ring_index still needs to reach its player's final-path entry.

    Counts forward around the ring, so a piece sitting on the exit cell is 0
    away and a piece that just left home is ring_size - 1 away.
    """
    final_entry = board.final_entry(player_index)
    return (final_entry - ring_index + board.ring_size) % board.ring_size


def crosses_final_entry(ring_index: int, player_index: int, steps: int, board: BoardSetup) -> bool:
    """True if moving `steps` from ring_index goes past the exit cell into the stretch."""
    return steps > distance_to_final_entry(ring_index, player_index, board)


def progress(piece: Piece, board: BoardSetup) -> int:
    """Traversal index of a piece along its own route.

    -1 at home, 0..ring_size-1 on the ring counted from the entry cell,
    ring_size + stretch index on the final path, and
    ring_size + stretch_length once finished.
    """
    placement = piece.placement
    if isinstance(placement, OnRing):
        return (placement.ring_index - board.entry_cell(piece.owner)) % board.ring_size
    if isinstance(placement, OnFinalPath):
        return board.ring_size + placement.stretch_index
    if isinstance(placement, Finished):
        return board.ring_size + board.stretch_length
    return -1
