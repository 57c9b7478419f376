"""Game event types - emitted during state transitions.

Events describe what happened during a command, enabling:
- Efficient UI updates (only redraw what changed)
- Animations (know exactly which piece went where)
- Action replay / audit logging
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from ludo_ring.schemas.game_engine import PieceRef, PieceState


class GameEvent(BaseModel):
    """Base class for all game events."""

    event_type: str
    seq: int = 0  # Sequence number assigned by the controller


class DiceRolled(GameEvent):
    """The current player rolled both dice."""

    event_type: Literal["dice_rolled"] = "dice_rolled"
    player_index: int
    dice1: int = Field(..., ge=1, le=6)
    dice2: int = Field(..., ge=1, le=6)
    bonus_roll: bool = Field(..., description="True if both dice match (another roll after this turn)")


class PieceSelected(GameEvent):
    event_type: Literal["piece_selected"] = "piece_selected"
    piece: PieceRef


class PieceDeselected(GameEvent):
    event_type: Literal["piece_deselected"] = "piece_deselected"
    piece: PieceRef


class PieceEnteredRing(GameEvent):
    """A piece left home onto its entry cell."""

    event_type: Literal["piece_entered_ring"] = "piece_entered_ring"
    piece: PieceRef
    ring_index: int


class PieceMoved(GameEvent):
    """A piece moved along the ring or its home stretch."""

    event_type: Literal["piece_moved"] = "piece_moved"
    piece: PieceRef
    from_state: PieceState
    to_state: PieceState
    from_position: int | None
    to_position: int | None
    steps: int


class PieceEnteredFinalPath(GameEvent):
    """A piece turned off the ring into its private stretch."""

    event_type: Literal["piece_entered_final_path"] = "piece_entered_final_path"
    piece: PieceRef
    stretch_index: int


class PieceFinished(GameEvent):
    """A piece completed its journey."""

    event_type: Literal["piece_finished"] = "piece_finished"
    piece: PieceRef


class PieceCaptured(GameEvent):
    """An opponent piece was sent back home."""

    event_type: Literal["piece_captured"] = "piece_captured"
    capturing_piece: PieceRef
    captured_piece: PieceRef
    ring_index: int = Field(..., description="Ring cell where the capture occurred")


class TurnEnded(GameEvent):
    """A player's turn has ended."""

    event_type: Literal["turn_ended"] = "turn_ended"
    player_index: int
    reason: Literal["end_turn", "pass"]
    bonus_roll: bool = Field(..., description="True if the same player rolls again")
    next_player: int


class GameWon(GameEvent):
    """All four pieces of a player have finished."""

    event_type: Literal["game_won"] = "game_won"
    winner: int


# Union of all event types for type checking
AnyGameEvent = Annotated[
    DiceRolled
    | PieceSelected
    | PieceDeselected
    | PieceEnteredRing
    | PieceMoved
    | PieceEnteredFinalPath
    | PieceFinished
    | PieceCaptured
    | TurnEnded
    | GameWon,
    Field(discriminator="event_type"),
]
