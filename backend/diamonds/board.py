"""
Создание партии: проверка размеров поля и случайная расстановка алмазов.
"""
import random
import uuid
from collections.abc import Iterable

from .config import get_config
from .models import CellCoordinate, GameState, InvalidDimensions


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_dimensions(size: int, diamonds: int) -> None:
    """Бросает InvalidDimensions, если поле size x size не вмещает diamonds алмазов."""
    if not _is_int(size) or not _is_int(diamonds):
        raise InvalidDimensions("size and diamonds must be integers")
    if size <= 0:
        raise InvalidDimensions(f"size must be positive, got {size}")
    if size > get_config().max_board_size:
        raise InvalidDimensions(f"size must not exceed {get_config().max_board_size}, got {size}")
    if diamonds <= 0:
        raise InvalidDimensions(f"diamonds must be positive, got {diamonds}")
    if diamonds > size * size:
        raise InvalidDimensions(f"{diamonds} diamonds do not fit on a {size}x{size} board")


def generate_diamonds(size: int, diamonds: int, rng: random.Random | None = None) -> frozenset[CellCoordinate]:
    """Различные клетки, выбранные равномерно из всего поля."""
    rng = rng or random.Random()
    cells = rng.sample(range(size * size), diamonds)
    return frozenset(CellCoordinate(x=i % size, y=i // size) for i in cells)


def _forced_positions(size: int, diamonds: int, positions: Iterable) -> frozenset[CellCoordinate]:
    cells = [p if isinstance(p, CellCoordinate) else CellCoordinate(*p) for p in positions]
    placed = frozenset(cells)
    if len(placed) != len(cells):
        raise InvalidDimensions("diamond positions must be distinct")
    if len(placed) != diamonds:
        raise InvalidDimensions(f"expected {diamonds} diamond positions, got {len(placed)}")
    if not all(c.in_bounds(size) for c in placed):
        raise InvalidDimensions("diamond positions must lie on the board")
    return placed


def create_game(
    size: int,
    diamonds: int,
    *,
    game_id: str | None = None,
    rng: random.Random | None = None,
    positions: Iterable | None = None,
) -> GameState:
    """
    Новая партия без игроков. В реестр не добавляется.
    positions — принудительная расстановка (для тестов), иначе случайная.
    """
    check_dimensions(size, diamonds)
    if positions is not None:
        diamond_positions = _forced_positions(size, diamonds, positions)
    else:
        diamond_positions = generate_diamonds(size, diamonds, rng)
    return GameState(
        id=game_id or str(uuid.uuid4()),
        size=size,
        diamond_amount=diamonds,
        diamond_positions=diamond_positions,
    )
