"""Shared fixtures for game engine tests."""

import pytest

from ludo_ring.schemas.game_engine import (
    STANDARD_BOARD,
    AtHome,
    BoardSetup,
    Finished,
    GameState,
    OnFinalPath,
    OnRing,
    Placement,
    new_game_state,
)
from ludo_ring.services.game.engine import GameController, ScriptedDice


def home() -> Placement:
    return AtHome()


def ring(index: int) -> Placement:
    return OnRing(ring_index=index)


def stretch(index: int) -> Placement:
    return OnFinalPath(stretch_index=index)


def finished() -> Placement:
    return Finished()


def create_state(
    placements: dict[tuple[int, int], Placement] | None = None,
    current_player: int = 0,
) -> GameState:
    """Fresh game state with selected pieces moved to the given placements."""
    state = new_game_state()
    state.current_player = current_player
    for (player, piece), placement in (placements or {}).items():
        state.players[player].pieces[piece].placement = placement
    return state


def create_controller(
    rolls: list[tuple[int, int]] | None = None,
    placements: dict[tuple[int, int], Placement] | None = None,
    current_player: int = 0,
) -> GameController:
    """Controller with scripted dice and pieces at the given placements."""
    return GameController(
        dice=ScriptedDice(rolls or []),
        state=create_state(placements, current_player),
    )


def roll_and_move(controller: GameController, player: int, piece: int) -> bool:
    """Roll, select, move and resolve captures the way a UI would."""
    assert controller.roll_dice()
    assert controller.select_piece((player, piece))
    moved = controller.move_selected_piece()
    if moved:
        controller.check_and_remove_opponent_piece()
    return moved


@pytest.fixture
def standard_board() -> BoardSetup:
    """Standard 40-cell ring board."""
    return STANDARD_BOARD


@pytest.fixture
def new_controller() -> GameController:
    """Controller at game start with an empty dice script (push rolls as needed)."""
    return create_controller()
