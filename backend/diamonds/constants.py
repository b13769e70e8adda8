"""Константы игры и имена событий WebSocket."""
from typing import TypedDict


class EventNames(TypedDict):
    join_ok: str
    join_error: str
    players: str
    turn_result: str
    turn_error: str
    error: str


MIN_PLAYERS = 2

# Окрестность Мура: 8 соседей клетки
NEIGHBOR_OFFSETS: list[tuple[int, int]] = [
    (dx, dy)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    if (dx, dy) != (0, 0)
]

EVENTS: EventNames = {
    "join_ok": "join:ok",
    "join_error": "join:error",
    "players": "game:players",
    "turn_result": "turn:result",
    "turn_error": "turn:error",
    "error": "error",
}

GAME_NOT_FOUND = "Game not found"
INVALID_MOVE = "Invalid move"
