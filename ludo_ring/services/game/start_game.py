import logging
import random

from ludo_ring.schemas.game_engine import (
    RING_SIZE,
    STANDARD_BOARD,
    STRETCH_LENGTH,
    BoardSetup,
    new_game_state,
)

from .engine import Dice, DiceSource, GameController

logger = logging.getLogger(__name__)


def validate_board_setup(board: BoardSetup) -> None:
    """Validate board geometry before starting a game.

    Ring and stretch sizes are fixed; only the entry cells and the get-out
    value may vary.
    """
    if board.ring_size != RING_SIZE:
        raise ValueError(f"Ring must have {RING_SIZE} cells, got {board.ring_size}.")
    if board.stretch_length != STRETCH_LENGTH:
        raise ValueError(
            f"Home stretch must have {STRETCH_LENGTH} cells, got {board.stretch_length}."
        )
    if len(board.entry_cells) != 4:
        raise ValueError("Exactly four entry cells are required.")
    if len(set(board.entry_cells)) != len(board.entry_cells):
        raise ValueError(f"Duplicate entry cells: {board.entry_cells}")
    for cell in board.entry_cells:
        if not 0 <= cell < board.ring_size:
            raise ValueError(f"Entry cell {cell} is outside the ring (0-{board.ring_size - 1}).")
    if not 1 <= board.get_out_value <= 6:
        raise ValueError("Get-out value must be a die face (1-6).")


def initialize_game(
    seed: int | None = None,
    dice: DiceSource | None = None,
    board: BoardSetup = STANDARD_BOARD,
) -> GameController:
    """Create a controller for a fresh game.

    Args:
        seed: Seed for fair dice. Ignored when `dice` is given.
        dice: Explicit dice source, e.g. ScriptedDice for replays.
        board: Board geometry.

    Returns:
        A controller with every piece at home and player 0 to roll.
    """
    validate_board_setup(board)
    if dice is None:
        dice = Dice(random.Random(seed))
    controller = GameController(dice=dice, board=board, state=new_game_state(board))
    logger.info("Game initialized: seed=%s, dice=%s", seed, type(dice).__name__)
    return controller
