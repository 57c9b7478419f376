"""Pydantic schemas for the game HTTP endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from ludo_ring.schemas.game_view import GameView


class CreateGameRequest(BaseModel):
    """Request body for starting a game."""

    seed: int | None = Field(
        None,
        description="Seed for the dice; omit for the server default",
    )


class CreateGameResponse(BaseModel):
    game_id: str = Field(..., description="UUID of the game")
    view: GameView


class GameActionRequest(BaseModel):
    """Request body for a game action."""

    action_type: str = Field(
        ...,
        description="One of 'roll', 'select', 'deselect', 'move', 'end_turn', 'pass'",
    )
    player_index: int | None = Field(None, description="Piece owner, for 'select'")
    piece_index: int | None = Field(None, description="Piece index, for 'select'")


class GameActionResponse(BaseModel):
    success: bool
    events: list[dict[str, Any]] = Field(default_factory=list)
    view: GameView


class GameErrorDetail(BaseModel):
    error_code: str = Field(..., description="Engine ErrorCode or a host code such as GAME_NOT_FOUND")
    message: str


class GameErrorResponse(BaseModel):
    """Error body of the HTTPExceptions raised by the game endpoints."""

    detail: GameErrorDetail
