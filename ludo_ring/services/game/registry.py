"""In-process registry of running games for the HTTP host."""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ludo_ring.config import get_settings

from .engine import GameController
from .start_game import initialize_game

logger = logging.getLogger(__name__)


class GameLimitReachedError(RuntimeError):
    """The registry already holds the configured maximum number of games."""


@dataclass
class GameSession:
    """A running game and the lock that serialises commands on it."""

    game_id: str
    controller: GameController
    lock: threading.Lock = field(default_factory=threading.Lock)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class GameRegistry:
    """Keeps one GameController per game id.

    Controllers are single-owner objects; callers must hold `session.lock`
    while issuing commands or reading state.
    """

    def __init__(self, max_games: int | None = None, default_seed: int | None = None):
        settings = get_settings()
        self._max_games = max_games if max_games is not None else settings.MAX_GAMES
        self._default_seed = default_seed if default_seed is not None else settings.DICE_SEED
        self._sessions: dict[str, GameSession] = {}
        self._lock = threading.Lock()
        logger.info("GameRegistry initialized: max_games=%d", self._max_games)

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, seed: int | None = None) -> GameSession:
        """Start a new game.

        Raises:
            GameLimitReachedError: If max_games sessions already exist.
        """
        with self._lock:
            if len(self._sessions) >= self._max_games:
                raise GameLimitReachedError(f"At most {self._max_games} games may run at once")
            controller = initialize_game(seed=seed if seed is not None else self._default_seed)
            session = GameSession(game_id=str(uuid.uuid4()), controller=controller)
            self._sessions[session.game_id] = session
        logger.info("Game created: game_id=%s, active_games=%d", session.game_id, len(self._sessions))
        return session

    def get(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def remove(self, game_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(game_id, None) is not None
        if removed:
            logger.info("Game removed: game_id=%s", game_id)
        return removed

    def clear(self) -> None:
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
        logger.info("Registry cleared: %d game(s) dropped", count)


_game_registry: GameRegistry | None = None


def get_game_registry() -> GameRegistry:
    """Get the global GameRegistry instance."""
    global _game_registry
    if _game_registry is None:
        _game_registry = GameRegistry()
    return _game_registry


def set_game_registry(registry: GameRegistry | None) -> None:
    """Set the global GameRegistry instance."""
    global _game_registry
    _game_registry = registry
