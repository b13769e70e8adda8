"""
Модель данных партии: координаты клеток, состояние партии, результат хода.
"""
import time
from dataclasses import dataclass, field


class DiamondsError(Exception):
    """Базовая ошибка игрового ядра."""


class InvalidDimensions(DiamondsError, ValueError):
    """Недопустимый размер поля или количество алмазов."""


class SessionNotFound(DiamondsError, KeyError):
    """Партия с таким id не найдена в реестре."""

    def __init__(self, game_id: str):
        super().__init__(game_id)
        self.game_id = game_id

    def __str__(self) -> str:
        return f"game {self.game_id} not found"


@dataclass(frozen=True)
class CellCoordinate:
    x: int
    y: int

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass
class GameState:
    id: str
    size: int
    diamond_amount: int
    diamond_positions: frozenset[CellCoordinate]
    players: list[str] = field(default_factory=list)
    current_player_index: int = 0
    opened_diamonds: list[CellCoordinate] = field(default_factory=list)
    winner_id: str | None = None
    created_at: float = field(default_factory=time.monotonic, compare=False)
    updated_at: float = field(default_factory=time.monotonic, compare=False)

    @property
    def is_finished(self) -> bool:
        return self.winner_id is not None

    @property
    def current_player_id(self) -> str | None:
        if not self.players:
            return None
        return self.players[self.current_player_index]

    def touch(self) -> None:
        self.updated_at = time.monotonic()


@dataclass
class TurnResult:
    hit_diamond: bool
    adjacent_diamonds: int
    game_over: bool
    winner_id: str | None = None
    next_player_id: str | None = None

    def to_payload(self) -> dict:
        return {
            "hitDiamond": self.hit_diamond,
            "adjacentDiamonds": self.adjacent_diamonds,
            "winnerId": self.winner_id,
            "gameOver": self.game_over,
            "nextPlayerId": self.next_player_id,
        }
