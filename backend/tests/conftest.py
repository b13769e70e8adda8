"""Общие фикстуры тестов."""
import random

import pytest
from fastapi.testclient import TestClient

from diamonds.board import create_game
from diamonds.main import create_app
from diamonds.models import GameState
from diamonds.registry import SessionRegistry


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def center_game() -> GameState:
    """3x3, один алмаз в центре, двое игроков."""
    game = create_game(3, 1, game_id="center", positions=[(1, 1)])
    game.players.extend(["A", "B"])
    return game


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry(session_ttl_seconds=3600, finished_ttl_seconds=300, auto_join_on_turn=True)


@pytest.fixture
def client(registry: SessionRegistry):
    with TestClient(create_app(registry)) as c:
        yield c
