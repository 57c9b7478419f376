"""Game action types - explicit user inputs separated from game state."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from ludo_ring.schemas.game_engine import NUM_PLAYERS, PIECES_PER_PLAYER, PieceRef


class RollAction(BaseModel):
    """Current player rolls both dice."""

    action_type: Literal["roll"] = "roll"


class SelectPieceAction(BaseModel):
    """Current player picks the piece to move."""

    action_type: Literal["select"] = "select"
    player_index: int = Field(..., ge=0, lt=NUM_PLAYERS, description="Owner of the piece")
    piece_index: int = Field(..., ge=0, lt=PIECES_PER_PLAYER, description="Piece within the owner's four")

    @property
    def ref(self) -> PieceRef:
        return PieceRef(player=self.player_index, piece=self.piece_index)


class DeselectPieceAction(BaseModel):
    action_type: Literal["deselect"] = "deselect"


class MoveAction(BaseModel):
    """Move the selected piece by the rolled dice."""

    action_type: Literal["move"] = "move"


class EndTurnAction(BaseModel):
    """Finish the turn after moving."""

    action_type: Literal["end_turn"] = "end_turn"


class PassTurnAction(BaseModel):
    """Give up the roll when no piece can move."""

    action_type: Literal["pass"] = "pass"


# Union type for all game actions
GameAction = Annotated[
    RollAction | SelectPieceAction | DeselectPieceAction | MoveAction | EndTurnAction | PassTurnAction,
    Field(discriminator="action_type"),
]

_ACTION_TYPES: dict[str, type[BaseModel]] = {
    "roll": RollAction,
    "select": SelectPieceAction,
    "deselect": DeselectPieceAction,
    "move": MoveAction,
    "end_turn": EndTurnAction,
    "pass": PassTurnAction,
}


def build_action_from_payload(payload: dict) -> GameAction:
    """Build a typed action from a raw payload dict.

    Args:
        payload: Dict with 'action_type' key and action-specific fields.

    Returns:
        The appropriate GameAction subtype.

    Raises:
        ValueError: If action_type is missing or unknown.
        pydantic.ValidationError: If action-specific fields are invalid.
    """
    action_type = payload.get("action_type")
    action_cls = _ACTION_TYPES.get(action_type)
    if action_cls is None:
        raise ValueError(f"Unknown action type: {action_type}")
    return action_cls.model_validate(payload)
