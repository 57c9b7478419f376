"""REST endpoints for playing a game from a local front-end."""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import ValidationError

from ludo_ring.schemas.game_api import (
    CreateGameRequest,
    CreateGameResponse,
    GameActionRequest,
    GameActionResponse,
    GameErrorResponse,
)
from ludo_ring.schemas.game_view import GameView
from ludo_ring.services.game import (
    GameLimitReachedError,
    GameSession,
    build_action_from_payload,
    build_game_view,
    get_game_registry,
    process_action,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games", tags=["games"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": GameErrorResponse}}


def _get_session(game_id: str) -> GameSession:
    session = get_game_registry().get(game_id)
    if session is None:
        logger.warning("Game not found: %s", game_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error_code": "GAME_NOT_FOUND", "message": f"No game with id {game_id}"},
        )
    return session


@router.post(
    "",
    response_model=CreateGameResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": GameErrorResponse}},
)
def create_game(request: CreateGameRequest | None = None):
    """Start a new four-player game.

    Args:
        request: Optional dice seed.

    Returns:
        CreateGameResponse with the game id and its initial view.

    Raises:
        HTTPException 503: If the server already runs the maximum number of games.
    """
    seed = request.seed if request is not None else None
    logger.info("POST /games - seed: %s", seed)

    try:
        session = get_game_registry().create(seed=seed)
    except GameLimitReachedError as e:
        logger.warning("Game creation refused: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error_code": "GAME_LIMIT_REACHED", "message": str(e)},
        ) from e

    with session.lock:
        view = build_game_view(session.controller)
    return CreateGameResponse(game_id=session.game_id, view=view)


@router.get("/{game_id}", response_model=GameView, responses=_NOT_FOUND)
def get_game(game_id: str):
    """Return the current view of a game."""
    session = _get_session(game_id)
    with session.lock:
        return build_game_view(session.controller)


@router.post(
    "/{game_id}/actions",
    response_model=GameActionResponse,
    responses={
        **_NOT_FOUND,
        status.HTTP_409_CONFLICT: {"model": GameErrorResponse},
        status.HTTP_422_UNPROCESSABLE_CONTENT: {"model": GameErrorResponse},
    },
)
def submit_action(game_id: str, request: GameActionRequest):
    """Apply one action to a game.

    Flow:
    1. Look up the game
    2. Build a typed action from the request
    3. Process it through the game engine
    4. Return the events it produced and the new view

    Raises:
        HTTPException 404: If the game does not exist.
        HTTPException 422: If the action payload is malformed.
        HTTPException 409: If the rules reject the action.
    """
    session = _get_session(game_id)
    logger.info("POST /games/%s/actions - action: %s", game_id, request.action_type)

    try:
        action = build_action_from_payload(request.model_dump(exclude_none=True))
    except (ValueError, ValidationError) as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail={"error_code": "INVALID_ACTION", "message": str(e)},
        ) from e

    with session.lock:
        result = process_action(session.controller, action)
        view = build_game_view(session.controller) if result.success else None

    if not result.success:
        logger.info(
            "Action rejected for game %s: %s - %s",
            game_id,
            result.error_code.value,
            result.error_message,
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error_code": result.error_code.value, "message": result.error_message},
        )

    return GameActionResponse(
        success=True,
        events=[event.model_dump(mode="json") for event in result.events],
        view=view,
    )


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_NOT_FOUND)
def delete_game(game_id: str):
    """Drop a game from the server."""
    if not get_game_registry().remove(game_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error_code": "GAME_NOT_FOUND", "message": f"No game with id {game_id}"},
        )
