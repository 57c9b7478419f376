"""Tests for event generation and sequencing.

Critical scenarios tested:
- Events have sequential seq numbers across commands
- Event payloads describe the transition
- Rejected commands emit nothing
"""

from pydantic import TypeAdapter

from ludo_ring.services.game.engine import (
    AnyGameEvent,
    DiceRolled,
    PieceCaptured,
    PieceEnteredFinalPath,
    PieceEnteredRing,
    PieceMoved,
    PieceSelected,
    TurnEnded,
)

from .conftest import create_controller, ring


class TestEventSequencing:
    """Test that events have proper sequence numbers."""

    def test_seq_numbers_continue_across_commands(self):
        controller = create_controller(rolls=[(6, 1), (3, 4)])
        controller.roll_dice()
        controller.select_piece((0, 0))
        controller.move_selected_piece()
        controller.end_turn()
        controller.roll_dice()

        seqs = [event.seq for event in controller.event_log]
        assert seqs == list(range(len(seqs)))
        assert controller.state.event_seq == len(seqs)

    def test_rejected_commands_emit_nothing(self):
        controller = create_controller(rolls=[(3, 4)])
        controller.roll_dice()
        before = len(controller.event_log)

        controller.roll_dice()
        controller.select_piece((1, 0))
        controller.select_piece((0, 0))
        controller.move_selected_piece()
        controller.end_turn()

        new_events = controller.event_log[before:]
        assert [e.event_type for e in new_events] == ["piece_selected"]


class TestEventTypes:
    """Test event type structures."""

    def test_dice_rolled_structure(self):
        controller = create_controller(rolls=[(5, 5)], current_player=3)
        controller.roll_dice()

        event = controller.event_log[-1]
        assert isinstance(event, DiceRolled)
        assert event.player_index == 3
        assert (event.dice1, event.dice2) == (5, 5)
        assert event.bonus_roll

    def test_entering_ring_event(self):
        controller = create_controller(rolls=[(6, 3)], current_player=2)
        controller.roll_dice()
        controller.select_piece((2, 1))
        controller.move_selected_piece()

        selected, entered = controller.event_log[-2:]
        assert isinstance(selected, PieceSelected)
        assert isinstance(entered, PieceEnteredRing)
        assert entered.piece.player == 2
        assert entered.piece.piece == 1
        assert entered.ring_index == 21

    def test_entering_final_path_events(self):
        controller = create_controller(rolls=[(3, 3)], placements={(0, 0): ring(38)})
        controller.roll_dice()
        controller.select_piece((0, 0))
        controller.move_selected_piece()

        moved, entered = controller.event_log[-2:]
        assert isinstance(moved, PieceMoved)
        assert moved.from_state == "active"
        assert moved.to_state == "final_path"
        assert moved.from_position == 38
        assert moved.to_position == 3
        assert moved.steps == 6
        assert isinstance(entered, PieceEnteredFinalPath)
        assert entered.stretch_index == 3

    def test_capture_event(self):
        controller = create_controller(
            rolls=[(3, 1)],
            placements={(0, 0): ring(15), (1, 2): ring(19)},
        )
        controller.roll_dice()
        controller.select_piece((0, 0))
        controller.move_selected_piece()
        controller.check_and_remove_opponent_piece()

        event = controller.event_log[-1]
        assert isinstance(event, PieceCaptured)
        assert event.capturing_piece.player == 0
        assert event.captured_piece.player == 1
        assert event.captured_piece.piece == 2
        assert event.ring_index == 19

    def test_turn_ended_event(self):
        controller = create_controller(rolls=[(3, 4)])
        controller.roll_dice()
        controller.pass_turn()

        event = controller.event_log[-1]
        assert isinstance(event, TurnEnded)
        assert event.player_index == 0
        assert event.reason == "pass"
        assert not event.bonus_roll
        assert event.next_player == 1

    def test_events_round_trip_through_union(self):
        """Dumped events parse back into the same event class."""
        controller = create_controller(rolls=[(6, 2)])
        controller.roll_dice()
        controller.select_piece((0, 0))
        controller.move_selected_piece()
        controller.end_turn()

        adapter = TypeAdapter(AnyGameEvent)
        for event in controller.event_log:
            parsed = adapter.validate_python(event.model_dump(mode="json"))
            assert type(parsed) is type(event)
            assert parsed == event
