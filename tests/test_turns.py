"""Tests for selection, turn hand-off, bonus rolls and passing.

Critical scenarios tested:
- Only the current player's pieces can be selected, and only after rolling
- end_turn requires a move and advances to the next player
- Doubles keep the turn with the same player
- pass_turn is only available when no piece can move
"""

import pytest

from ludo_ring.schemas.game_engine import TurnPhase
from ludo_ring.services.game.engine import ErrorCode

from .conftest import create_controller, ring, stretch


class TestSelection:
    """Test select_piece and deselect_piece."""

    def test_select_own_piece(self):
        controller = create_controller(rolls=[(1, 2)])
        controller.roll_dice()

        assert controller.select_piece((0, 2))
        assert controller.selected_piece.ref.piece == 2

    def test_select_accepts_piece_object_and_ref(self):
        controller = create_controller(rolls=[(1, 2)])
        controller.roll_dice()
        piece = controller.get_piece(0, 3)

        assert controller.select_piece(piece)
        assert controller.state.selected == piece.ref
        assert controller.select_piece(controller.get_piece(0, 1).ref)
        assert controller.state.selected.piece == 1

    def test_opponent_piece_ignored(self):
        """Selecting another player's piece leaves the selection unchanged."""
        controller = create_controller(rolls=[(1, 2)])
        controller.roll_dice()
        controller.select_piece((0, 0))

        assert not controller.select_piece((2, 0))

        assert controller.last_rejection.error_code == ErrorCode.WRONG_OWNER
        assert controller.state.selected.player == 0

    def test_select_before_roll_ignored(self):
        controller = create_controller()

        assert not controller.select_piece((0, 0))
        assert controller.selected_piece is None
        assert controller.last_rejection.error_code == ErrorCode.PHASE_VIOLATION

    def test_selection_replaced(self):
        controller = create_controller(rolls=[(1, 2)])
        controller.roll_dice()
        controller.select_piece((0, 0))
        controller.select_piece((0, 1))
        assert controller.state.selected.piece == 1

    def test_deselect(self):
        controller = create_controller(rolls=[(1, 2)])
        controller.roll_dice()
        controller.select_piece((0, 0))

        controller.deselect_piece()

        assert controller.selected_piece is None
        assert not controller.move_selected_piece()


class TestEndTurn:
    """Test the turn hand-off after a move."""

    def test_end_turn_requires_move(self):
        controller = create_controller(rolls=[(3, 4)])
        assert not controller.end_turn()
        controller.roll_dice()
        assert not controller.end_turn()
        assert controller.current_player == 0
        assert controller.last_rejection.error_code == ErrorCode.PHASE_VIOLATION

    @pytest.mark.parametrize(("player", "next_player"), [(0, 1), (1, 2), (2, 3), (3, 0)])
    def test_end_turn_advances_one_player(self, player, next_player):
        controller = create_controller(
            rolls=[(2, 3)],
            placements={(player, 0): ring((player * 10 + 5) % 40)},
            current_player=player,
        )
        controller.roll_dice()
        controller.select_piece((player, 0))
        assert controller.move_selected_piece()

        assert controller.end_turn()

        assert controller.current_player == next_player

    def test_end_turn_resets_flags(self):
        controller = create_controller(rolls=[(2, 3)], placements={(0, 0): ring(5)})
        controller.roll_dice()
        controller.select_piece((0, 0))
        controller.move_selected_piece()

        controller.end_turn()

        assert not controller.has_rolled
        assert not controller.has_moved
        assert not controller.has_bonus_roll
        assert controller.selected_piece is None
        assert controller.dice1 is None
        assert controller.dice2 is None
        assert controller.phase == TurnPhase.AWAITING_ROLL
        assert controller.state.turn_number == 2

    def test_bonus_roll_keeps_player(self):
        """Doubles: same player rolls again after ending the turn."""
        controller = create_controller(
            rolls=[(4, 4), (1, 2)],
            placements={(2, 0): ring(25)},
            current_player=2,
        )
        controller.roll_dice()
        controller.select_piece((2, 0))
        controller.move_selected_piece()

        assert controller.end_turn()

        assert controller.current_player == 2
        assert not controller.has_rolled
        assert not controller.has_bonus_roll
        assert controller.state.turn_number == 1
        assert controller.roll_dice()
        assert not controller.has_bonus_roll

    def test_bonus_rolls_chain_without_limit(self):
        """No three-doubles penalty: doubles keep coming back to the same player."""
        rolls = [(1, 1), (2, 2), (3, 3), (1, 1)]
        controller = create_controller(rolls=rolls, placements={(1, 0): ring(11)}, current_player=1)
        for _ in rolls:
            controller.roll_dice()
            controller.select_piece((1, 0))
            assert controller.move_selected_piece()
            assert controller.end_turn()
            assert controller.current_player == 1
        assert controller.get_piece(1, 0).position == 11 + 2 + 4 + 6 + 2


class TestPassTurn:
    """Test giving up a roll with no legal move."""

    def test_pass_when_all_home_without_six(self):
        controller = create_controller(rolls=[(3, 4)])
        controller.roll_dice()

        assert controller.legal_pieces() == []
        assert controller.pass_turn()

        assert controller.current_player == 1
        assert not controller.has_rolled

    def test_pass_rejected_when_move_exists(self):
        controller = create_controller(rolls=[(3, 4)], placements={(0, 0): ring(5)})
        controller.roll_dice()

        assert not controller.pass_turn()
        assert controller.last_rejection.error_code == ErrorCode.MOVES_AVAILABLE
        assert controller.current_player == 0

    def test_pass_before_roll_rejected(self):
        controller = create_controller()
        assert not controller.pass_turn()
        assert controller.last_rejection.error_code == ErrorCode.PHASE_VIOLATION

    def test_pass_after_move_rejected(self):
        controller = create_controller(rolls=[(6, 1)])
        controller.roll_dice()
        controller.select_piece((0, 0))
        controller.move_selected_piece()

        assert not controller.pass_turn()
        assert controller.last_rejection.error_code == ErrorCode.PHASE_VIOLATION

    def test_pass_with_doubles_keeps_turn(self):
        controller = create_controller(rolls=[(2, 2)])
        controller.roll_dice()

        assert controller.pass_turn()

        assert controller.current_player == 0
        assert not controller.has_rolled

    def test_pass_when_only_overshoots_remain(self):
        controller = create_controller(
            rolls=[(4, 5)],
            placements={(0, 0): stretch(1), (0, 1): stretch(3)},
        )
        controller.roll_dice()

        assert controller.pass_turn()
        assert controller.current_player == 1
