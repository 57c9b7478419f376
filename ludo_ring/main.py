import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ludo_ring.config import get_settings
from ludo_ring.routers import games
from ludo_ring.services.game.registry import get_game_registry

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Ludo Ring API")
    logger.debug("Debug mode: %s", settings.DEBUG)

    registry = get_game_registry()
    logger.info("Game registry initialized")

    yield

    logger.info("Shutting down Ludo Ring API")
    registry.clear()
    logger.info("Game registry cleanup complete")


app = FastAPI(
    title="Ludo Ring API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.debug("CORS configured with origins: %s", settings.CORS_ORIGINS)

app.include_router(games.router, prefix="/api/v1")
logger.debug("Routers registered: /api/v1/games")


@app.get("/")
def root():
    return {"message": "Ludo Ring API"}


@app.get("/health")
def health():
    return {"status": "healthy"}


def run() -> None:
    """Serve the API with uvicorn for a local front-end."""
    import uvicorn

    uvicorn.run("ludo_ring.main:app", host="127.0.0.1", port=8000, reload=settings.DEBUG)
