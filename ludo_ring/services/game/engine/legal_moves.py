"""Legal move calculation for the current player's pieces."""

from ludo_ring.schemas.game_engine import BoardSetup, GameState, PieceRef

from .movement import compute_destination


def get_legal_pieces(state: GameState, board: BoardSetup) -> list[PieceRef]:
    """Determine which of the current player's pieces can move with the rolled dice.

    Returns an empty list before the dice are rolled or once the player has
    already moved this roll.

    Args:
        state: Current game state.
        board: Board configuration.

    Returns:
        References of the pieces that have a legal move.
    """
    if not state.has_rolled or state.has_moved:
        return []

    player = state.players[state.current_player]
    return [
        piece.ref
        for piece in player.pieces
        if compute_destination(piece, state.dice1, state.dice2, board) is not None
    ]


def has_any_legal_move(state: GameState, board: BoardSetup) -> bool:
    """Quick check if the current player has any legal move.

    Stops at the first movable piece.
    """
    if not state.has_rolled or state.has_moved:
        return False

    player = state.players[state.current_player]
    return any(
        compute_destination(piece, state.dice1, state.dice2, board) is not None
        for piece in player.pieces
    )
