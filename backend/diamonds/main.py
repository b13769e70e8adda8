"""
Diamonds API и WebSocket.
"""
import logging

from fastapi import FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_config
from .models import InvalidDimensions, SessionNotFound
from .registry import SessionRegistry, game_state_payload
from .schemas import CreateGameRequest, CreateGameResponse, GameStateResponse
from .ws_handlers import ws_loop
from .ws_manager import WSManager

config = get_config()

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def create_app(registry: SessionRegistry | None = None) -> FastAPI:
    app = FastAPI(title="Diamonds API")
    app.state.registry = registry or SessionRegistry()
    app.state.ws_manager = WSManager()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidDimensions)
    async def invalid_dimensions_handler(request: Request, exc: InvalidDimensions):
        logger.info("invalid dimensions: %s", exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(SessionNotFound)
    async def session_not_found_handler(request: Request, exc: SessionNotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/game", response_model=CreateGameResponse)
    def create_game(body: CreateGameRequest, request: Request):
        game = request.app.state.registry.create_game(body.size, body.diamonds)
        return CreateGameResponse(id=game.id, size=game.size, diamonds=game.diamond_amount)

    @app.get("/game/{game_id}", response_model=GameStateResponse)
    def get_game(game_id: str, request: Request):
        game = request.app.state.registry.get_game(game_id)
        return game_state_payload(game)

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket):
        logger.info("WS: connection attempt from %s", ws.client)
        await ws_loop(ws, app.state.registry, app.state.ws_manager)

    return app


app = create_app()
