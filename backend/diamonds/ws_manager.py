"""
Менеджер WebSocket: подключения по комнатам (game_id) и рассылка событий игры.
"""
import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class WSManager:
    def __init__(self):
        self._rooms: dict[str, list[WebSocket]] = {}

    def join(self, ws: WebSocket, game_id: str) -> None:
        room = self._rooms.setdefault(game_id, [])
        if ws not in room:
            room.append(ws)

    def leave_all(self, ws: WebSocket) -> None:
        for game_id in list(self._rooms):
            room = self._rooms[game_id]
            if ws in room:
                room.remove(ws)
            if not room:
                del self._rooms[game_id]

    def room_size(self, game_id: str) -> int:
        return len(self._rooms.get(game_id, []))

    async def send(self, ws: WebSocket, event: str, payload: dict[str, Any]) -> bool:
        try:
            await ws.send_json({"type": event, **payload})
            return True
        except Exception as e:
            logger.warning("send %s: %s", event, e)
            return False

    async def broadcast(self, game_id: str, event: str, payload: dict[str, Any]) -> None:
        dead = []
        for ws in list(self._rooms.get(game_id, [])):
            if not await self.send(ws, event, payload):
                dead.append(ws)
        for ws in dead:
            self.leave_all(ws)
