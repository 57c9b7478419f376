"""Tests for finishing pieces and winning the game.

Critical scenarios tested:
- Exact roll required to finish; overshoot rejected
- All four pieces finished wins the game
- Play is not blocked after a win
"""

from ludo_ring.schemas.game_engine import PieceState
from ludo_ring.services.game.engine import GameWon, PieceFinished

from .conftest import create_controller, finished, ring, stretch


class TestPieceFinishing:
    """Test pieces reaching the finish."""

    def test_exact_roll_finishes(self):
        controller = create_controller(rolls=[(1, 1)], placements={(0, 0): stretch(2)})
        controller.roll_dice()
        controller.select_piece((0, 0))

        assert controller.move_selected_piece()

        assert controller.get_piece(0, 0).state == PieceState.FINISHED
        assert isinstance(controller.event_log[-1], PieceFinished)

    def test_overshoot_rejected(self):
        controller = create_controller(rolls=[(2, 3)], placements={(0, 0): stretch(2)})
        controller.roll_dice()
        controller.select_piece((0, 0))

        assert not controller.move_selected_piece()

        piece = controller.get_piece(0, 0)
        assert piece.state == PieceState.FINAL_PATH
        assert piece.position == 2

    def test_last_stretch_cell_is_stuck(self):
        """Two dice never sum to 1, so stretch index 3 has no legal move."""
        for d1 in range(1, 7):
            for d2 in range(1, 7):
                controller = create_controller(rolls=[(d1, d2)], placements={(0, 0): stretch(3)})
                controller.roll_dice()
                controller.select_piece((0, 0))
                assert not controller.move_selected_piece()


class TestWinning:
    """Test the win condition."""

    def test_no_winner_at_start(self, new_controller):
        assert new_controller.winner() is None

    def test_three_finished_is_not_a_win(self):
        controller = create_controller(
            placements={(1, 0): finished(), (1, 1): finished(), (1, 2): finished()},
        )
        assert controller.winner() is None

    def test_last_piece_finishing_wins(self):
        controller = create_controller(
            rolls=[(1, 1)],
            placements={
                (2, 0): finished(),
                (2, 1): finished(),
                (2, 2): finished(),
                (2, 3): stretch(2),
            },
            current_player=2,
        )
        controller.roll_dice()
        controller.select_piece((2, 3))
        controller.move_selected_piece()

        assert controller.winner() == 2
        assert isinstance(controller.event_log[-1], GameWon)
        assert controller.event_log[-1].winner == 2

    def test_win_straight_from_ring(self):
        controller = create_controller(
            rolls=[(4, 4)],
            placements={
                (3, 0): ring(27),
                (3, 1): finished(),
                (3, 2): finished(),
                (3, 3): finished(),
            },
            current_player=3,
        )
        controller.roll_dice()
        controller.select_piece((3, 0))
        assert controller.move_selected_piece()
        assert controller.winner() == 3

    def test_play_continues_after_win(self):
        """The engine does not block further moves once someone has won."""
        controller = create_controller(
            rolls=[(1, 1), (6, 2)],
            placements={
                (0, 0): finished(),
                (0, 1): finished(),
                (0, 2): finished(),
                (0, 3): stretch(2),
            },
        )
        controller.roll_dice()
        controller.select_piece((0, 3))
        controller.move_selected_piece()
        assert controller.winner() == 0
        assert controller.end_turn()  # doubles: player 0 again
        assert controller.current_player == 0

        assert controller.roll_dice()
        assert controller.pass_turn()
        assert controller.current_player == 1

    def test_game_won_announced_once(self):
        controller = create_controller(
            rolls=[(1, 1), (1, 1)],
            placements={
                (0, 0): finished(),
                (0, 1): finished(),
                (0, 2): stretch(2),
                (0, 3): stretch(2),
            },
        )
        for piece in (2, 3):
            controller.roll_dice()
            controller.select_piece((0, piece))
            assert controller.move_selected_piece()
            controller.end_turn()

        won = [e for e in controller.event_log if isinstance(e, GameWon)]
        assert len(won) == 1
