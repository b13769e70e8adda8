"""
Реестр партий (in-memory): создание, поиск, ходы под блокировкой партии
и вытеснение устаревших партий.
"""
import logging
import threading
import time

from .board import create_game
from .config import get_config
from .models import CellCoordinate, GameState, SessionNotFound, TurnResult
from .turns import apply_turn, register_player

logger = logging.getLogger(__name__)


class _Entry:
    def __init__(self, game: GameState):
        self.game = game
        self.lock = threading.Lock()


class SessionRegistry:
    """
    Хранит живые партии по id. Один ход на партию одновременно:
    чтение, валидация и мутация выполняются под threading.Lock этой партии.
    """

    def __init__(
        self,
        session_ttl_seconds: int | None = None,
        finished_ttl_seconds: int | None = None,
        auto_join_on_turn: bool | None = None,
    ):
        config = get_config()
        self.session_ttl_seconds = (
            config.session_ttl_seconds if session_ttl_seconds is None else session_ttl_seconds
        )
        self.finished_ttl_seconds = (
            config.finished_ttl_seconds if finished_ttl_seconds is None else finished_ttl_seconds
        )
        self.auto_join_on_turn = (
            config.auto_join_on_turn if auto_join_on_turn is None else auto_join_on_turn
        )
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def _entry(self, game_id: str) -> _Entry:
        with self._lock:
            entry = self._entries.get(game_id)
        if entry is None:
            raise SessionNotFound(game_id)
        return entry

    def create_game(self, size: int, diamonds: int, **kwargs) -> GameState:
        self.evict_expired()
        game = create_game(size, diamonds, **kwargs)
        with self._lock:
            if game.id in self._entries:
                raise ValueError(f"game {game.id} already exists")
            self._entries[game.id] = _Entry(game)
        logger.info("game created id=%s size=%s diamonds=%s", game.id, size, diamonds)
        return game

    def get_game(self, game_id: str) -> GameState:
        return self._entry(game_id).game

    def register_player(self, game_id: str, player_id: str) -> GameState:
        entry = self._entry(game_id)
        with entry.lock:
            register_player(entry.game, player_id)
        logger.info("player %s joined game %s", player_id, game_id)
        return entry.game

    def handle_turn(self, game_id: str, player_id: str, coordinate: CellCoordinate) -> TurnResult | None:
        entry = self._entry(game_id)
        with entry.lock:
            return apply_turn(entry.game, player_id, coordinate, auto_join=self.auto_join_on_turn)

    def drop_game(self, game_id: str) -> bool:
        with self._lock:
            return self._entries.pop(game_id, None) is not None

    def list_games(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def evict_expired(self, now: float | None = None) -> list[str]:
        """Удалить партии без активности дольше TTL. Возвращает id удалённых."""
        now = time.monotonic() if now is None else now
        evicted = []
        with self._lock:
            for game_id, entry in list(self._entries.items()):
                game = entry.game
                ttl = self.finished_ttl_seconds if game.is_finished else self.session_ttl_seconds
                if ttl > 0 and now - game.updated_at > ttl:
                    del self._entries[game_id]
                    evicted.append(game_id)
        if evicted:
            logger.info("evicted %d stale games", len(evicted))
        return evicted


def game_state_payload(game: GameState) -> dict:
    """Публичное состояние партии (без расположения алмазов)."""
    return {
        "gameId": game.id,
        "size": game.size,
        "diamonds": game.diamond_amount,
        "players": list(game.players),
        "openedDiamonds": [c.to_dict() for c in game.opened_diamonds],
        "winnerId": game.winner_id,
        "gameOver": game.is_finished,
        "currentPlayerId": game.current_player_id,
    }
