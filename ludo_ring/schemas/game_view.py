"""Read-only projections of a game for rendering."""

from pydantic import BaseModel, Field

from ludo_ring.schemas.game_engine import PieceRef, PieceState, TurnPhase


class PieceView(BaseModel):
    owner: int
    index: int
    state: PieceState
    position: int | None = Field(
        None, description="Ring index when active, stretch index on the final path, else null"
    )
    progress: int = Field(..., description="Steps travelled along the owner's route (-1 at home)")


class PlayerView(BaseModel):
    index: int
    name: str
    color: str
    entry_cell: int
    final_entry: int
    finished_pieces: int


class GameView(BaseModel):
    """Everything a UI needs to draw the board and enable its controls."""

    current_player: int
    current_player_name: str
    current_player_color: str
    phase: TurnPhase
    dice1: int | None
    dice2: int | None
    has_rolled: bool
    has_moved: bool
    has_bonus_roll: bool
    selected_piece: PieceRef | None
    legal_pieces: list[PieceRef]
    can_pass: bool
    winner: int | None
    players: list[PlayerView]
    pieces: list[PieceView]
    event_seq: int
