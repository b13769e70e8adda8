"""
Применение ходов: валидация, открытие клетки, подсчёт соседних алмазов,
определение победителя и передача хода.
Функции мутируют GameState на месте; вызывающий держит блокировку партии.
"""
import logging

from .config import get_config
from .constants import MIN_PLAYERS, NEIGHBOR_OFFSETS
from .models import CellCoordinate, GameState, TurnResult

logger = logging.getLogger(__name__)


def register_player(game: GameState, player_id: str) -> GameState:
    """Добавить игрока в конец очереди ходов, если его там ещё нет."""
    if player_id not in game.players:
        game.players.append(player_id)
        game.touch()
    return game


def validate_turn(game: GameState, player_id: str, coordinate: CellCoordinate, auto_join: bool = True) -> bool:
    if game.is_finished:
        return False
    if len(game.players) < MIN_PLAYERS:
        return False
    if not coordinate.in_bounds(game.size):
        return False
    if not auto_join and player_id not in game.players:
        return False
    return True


def adjacent_diamonds(game: GameState, coordinate: CellCoordinate) -> int:
    """Сколько алмазов в 8 соседних клетках (открытые тоже считаются)."""
    count = 0
    for dx, dy in NEIGHBOR_OFFSETS:
        neighbor = CellCoordinate(coordinate.x + dx, coordinate.y + dy)
        if neighbor.in_bounds(game.size) and neighbor in game.diamond_positions:
            count += 1
    return count


def has_winner(game: GameState) -> bool:
    return len(game.opened_diamonds) == len(game.diamond_positions) and game.winner_id is None


def apply_turn(
    game: GameState,
    player_id: str,
    coordinate: CellCoordinate,
    auto_join: bool | None = None,
) -> TurnResult | None:
    """
    Применить ход. Возвращает TurnResult или None, если ход недопустим.
    При None состояние партии не меняется.
    """
    if auto_join is None:
        auto_join = get_config().auto_join_on_turn
    if not validate_turn(game, player_id, coordinate, auto_join):
        logger.info("turn rejected game=%s player=%s cell=(%s,%s)", game.id, player_id, coordinate.x, coordinate.y)
        return None

    register_player(game, player_id)

    hit_diamond = coordinate in game.diamond_positions
    adjacent = 0
    if hit_diamond:
        if coordinate not in game.opened_diamonds:
            game.opened_diamonds.append(coordinate)
    else:
        adjacent = adjacent_diamonds(game, coordinate)

    if has_winner(game):
        game.winner_id = player_id
        logger.info("game %s won by %s", game.id, player_id)

    index = game.players.index(player_id)
    game.current_player_index = (index + 1) % len(game.players)
    next_player_id = game.players[game.current_player_index]
    game.touch()

    return TurnResult(
        hit_diamond=hit_diamond,
        adjacent_diamonds=adjacent,
        game_over=game.is_finished,
        winner_id=game.winner_id,
        next_player_id=next_player_id,
    )
