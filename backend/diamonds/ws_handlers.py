"""
Обработка сообщений WebSocket: join, turn.
Результат хода рассылается всем участникам комнаты партии.
"""
import json
import logging

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect

from .constants import EVENTS, GAME_NOT_FOUND, INVALID_MOVE
from .models import CellCoordinate, SessionNotFound
from .registry import SessionRegistry
from .ws_manager import WSManager

logger = logging.getLogger(__name__)


def _coordinate(data: dict) -> CellCoordinate | None:
    x, y = data.get("x"), data.get("y")
    if not isinstance(x, int) or isinstance(x, bool) or not isinstance(y, int) or isinstance(y, bool):
        return None
    return CellCoordinate(x=x, y=y)


async def handle_join(ws: WebSocket, data: dict, registry: SessionRegistry, manager: WSManager) -> None:
    game_id = data.get("gameId")
    player_id = data.get("playerId")
    if not isinstance(game_id, str) or not isinstance(player_id, str) or not player_id:
        await manager.send(ws, EVENTS["error"], {"message": "gameId and playerId are required"})
        return
    try:
        game = registry.register_player(game_id, player_id)
    except SessionNotFound:
        await manager.send(ws, EVENTS["join_error"], {"message": GAME_NOT_FOUND})
        return
    manager.join(ws, game_id)
    await manager.send(ws, EVENTS["join_ok"], {
        "gameId": game.id,
        "size": game.size,
        "diamonds": game.diamond_amount,
        "players": list(game.players),
        "winnerId": game.winner_id,
        "currentPlayerId": game.current_player_id,
    })
    await manager.broadcast(game_id, EVENTS["players"], {
        "gameId": game.id,
        "players": list(game.players),
    })


async def handle_turn(ws: WebSocket, data: dict, registry: SessionRegistry, manager: WSManager) -> None:
    game_id = data.get("gameId")
    player_id = data.get("playerId")
    coordinate = _coordinate(data)
    if not isinstance(game_id, str) or not isinstance(player_id, str) or not player_id or coordinate is None:
        await manager.send(ws, EVENTS["error"], {"message": "gameId, playerId, x and y are required"})
        return
    try:
        result = registry.handle_turn(game_id, player_id, coordinate)
    except SessionNotFound:
        await manager.send(ws, EVENTS["turn_error"], {"message": GAME_NOT_FOUND})
        return
    if result is None:
        await manager.send(ws, EVENTS["turn_error"], {"message": INVALID_MOVE})
        return
    await manager.broadcast(game_id, EVENTS["turn_result"], {
        "gameId": game_id,
        "playerId": player_id,
        "x": coordinate.x,
        "y": coordinate.y,
        **result.to_payload(),
    })


async def handle_ws_message(ws: WebSocket, raw: str, registry: SessionRegistry, manager: WSManager) -> bool:
    """
    Обрабатывает одно сообщение клиента.
    Возвращает False если соединение нужно закрыть.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("WS: invalid JSON: %s", e)
        return True
    if not isinstance(data, dict):
        logger.warning("WS: expected object, got %s", type(data).__name__)
        return True
    t = data.get("type")
    logger.info("WS: msg type=%s game=%s player=%s", t, data.get("gameId"), data.get("playerId"))
    if t == "join":
        await handle_join(ws, data, registry, manager)
        return True
    if t == "turn":
        await handle_turn(ws, data, registry, manager)
        return True
    logger.warning("WS: unknown message type %s", t)
    return True


async def ws_loop(ws: WebSocket, registry: SessionRegistry, manager: WSManager) -> None:
    """Цикл приёма сообщений до отключения клиента."""
    try:
        await ws.accept()
        logger.info("WS: accepted %s", ws.client)
        while True:
            msg = await ws.receive_text()
            if not await handle_ws_message(ws, msg, registry, manager):
                break
    except WebSocketDisconnect as e:
        logger.info("WS: client disconnected code=%s reason=%s", e.code, e.reason or "")
    except Exception as e:
        logger.exception("WS: error: %s", e)
    finally:
        manager.leave_all(ws)
        logger.info("WS: connection closed %s", ws.client)
