from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

RING_SIZE = 40
STRETCH_LENGTH = 4
NUM_PLAYERS = 4
PIECES_PER_PLAYER = 4


# Piece states
class PieceState(str, Enum):
    HOME = "home"
    ACTIVE = "active"
    FINAL_PATH = "final_path"
    FINISHED = "finished"


# Phases of a single turn
class TurnPhase(str, Enum):
    AWAITING_ROLL = "awaiting_roll"
    AWAITING_MOVE = "awaiting_move"
    AWAITING_END_TURN = "awaiting_end_turn"


# Board geometry, fixed for the whole game
class BoardSetup(BaseModel):
    model_config = ConfigDict(frozen=True)

    ring_size: int = RING_SIZE
    stretch_length: int = STRETCH_LENGTH
    entry_cells: tuple[int, ...] = (1, 11, 21, 31)
    get_out_value: int = 6

    def entry_cell(self, player_index: int) -> int:
        return self.entry_cells[player_index]

    def final_entry(self, player_index: int) -> int:
        """Last ring cell a player's piece visits before turning into its stretch."""
        return (self.entry_cells[player_index] + self.ring_size - 1) % self.ring_size


STANDARD_BOARD = BoardSetup()

PLAYER_NAMES = ("Red", "Blue", "Green", "Yellow")
PLAYER_COLORS = ("red", "blue", "green", "yellow")


# Piece placements. HOME and FINISHED carry no position.
class AtHome(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal["home"] = "home"


class OnRing(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal["active"] = "active"
    ring_index: int = Field(..., ge=0, lt=RING_SIZE)


class OnFinalPath(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal["final_path"] = "final_path"
    stretch_index: int = Field(..., ge=0, lt=STRETCH_LENGTH)


class Finished(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal["finished"] = "finished"


Placement = Annotated[
    AtHome | OnRing | OnFinalPath | Finished,
    Field(discriminator="state"),
]


class PieceRef(BaseModel):
    """Stable identity of a piece: (player index, piece index)."""

    model_config = ConfigDict(frozen=True)

    player: int = Field(..., ge=0, lt=NUM_PLAYERS)
    piece: int = Field(..., ge=0, lt=PIECES_PER_PLAYER)


class Piece(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    owner: int = Field(..., ge=0, lt=NUM_PLAYERS)
    index: int = Field(..., ge=0, lt=PIECES_PER_PLAYER)
    placement: Placement = Field(default_factory=AtHome)

    @property
    def ref(self) -> PieceRef:
        return PieceRef(player=self.owner, piece=self.index)

    @property
    def state(self) -> PieceState:
        return PieceState(self.placement.state)

    @property
    def position(self) -> int | None:
        """Ring index when ACTIVE, stretch index on the final path, else None."""
        if isinstance(self.placement, OnRing):
            return self.placement.ring_index
        if isinstance(self.placement, OnFinalPath):
            return self.placement.stretch_index
        return None


class Player(BaseModel):
    index: int = Field(..., ge=0, lt=NUM_PLAYERS)
    name: str
    color: str
    entry_cell: int
    pieces: list[Piece] = Field(..., min_length=PIECES_PER_PLAYER, max_length=PIECES_PER_PLAYER)


# Game state for the turn controller and for broadcasting
class GameState(BaseModel):
    """Core game state.

    Only the turn controller mutates it. Readers may copy it between commands
    with ``model_copy(deep=True)`` or ``model_dump()``.
    """

    players: list[Player]
    current_player: int = Field(0, ge=0, lt=NUM_PLAYERS)
    dice1: int | None = Field(None, ge=1, le=6)
    dice2: int | None = Field(None, ge=1, le=6)
    has_rolled: bool = False
    has_moved: bool = False
    bonus_roll: bool = False
    selected: PieceRef | None = None
    turn_number: int = 1
    event_seq: int = 0  # Next sequence number for events (monotonically increasing)

    @property
    def steps(self) -> int:
        return (self.dice1 or 0) + (self.dice2 or 0)

    def piece(self, ref: PieceRef) -> Piece:
        return self.players[ref.player].pieces[ref.piece]

    def all_pieces(self) -> list[Piece]:
        return [piece for player in self.players for piece in player.pieces]


def new_game_state(board: BoardSetup = STANDARD_BOARD) -> GameState:
    """Build the initial state: four players, every piece at home, player 0 to roll."""
    players = [
        Player(
            index=i,
            name=PLAYER_NAMES[i],
            color=PLAYER_COLORS[i],
            entry_cell=board.entry_cell(i),
            pieces=[Piece(owner=i, index=j) for j in range(PIECES_PER_PLAYER)],
        )
        for i in range(NUM_PLAYERS)
    ]
    return GameState(players=players)
