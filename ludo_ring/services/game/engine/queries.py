"""Query surface: a pure projection of the controller for UIs."""

from ludo_ring.schemas.game_engine import PieceState
from ludo_ring.schemas.game_view import GameView, PieceView, PlayerView

from .board import progress
from .controller import GameController
from .validation import validate_pass


def build_game_view(controller: GameController) -> GameView:
    """Project the controller's state into a serializable view.

    Does not mutate the controller.
    """
    state = controller.state
    board = controller.board

    players = [
        PlayerView(
            index=player.index,
            name=player.name,
            color=player.color,
            entry_cell=player.entry_cell,
            final_entry=board.final_entry(player.index),
            finished_pieces=sum(1 for p in player.pieces if p.state == PieceState.FINISHED),
        )
        for player in state.players
    ]
    pieces = [
        PieceView(
            owner=piece.owner,
            index=piece.index,
            state=piece.state,
            position=piece.position,
            progress=progress(piece, board),
        )
        for piece in state.all_pieces()
    ]

    return GameView(
        current_player=controller.current_player,
        current_player_name=controller.current_player_name,
        current_player_color=controller.current_player_color,
        phase=controller.phase,
        dice1=controller.dice1,
        dice2=controller.dice2,
        has_rolled=controller.has_rolled,
        has_moved=controller.has_moved,
        has_bonus_roll=controller.has_bonus_roll,
        selected_piece=state.selected,
        legal_pieces=controller.legal_pieces(),
        can_pass=validate_pass(state, board).is_valid,
        winner=controller.winner(),
        players=players,
        pieces=pieces,
        event_seq=state.event_seq,
    )
