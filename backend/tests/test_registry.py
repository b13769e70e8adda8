"""Реестр партий: поиск, ходы под блокировкой, вытеснение."""
import threading
import time

import pytest

from diamonds.models import CellCoordinate, SessionNotFound
from diamonds.registry import SessionRegistry, game_state_payload


def test_create_and_get(registry):
    game = registry.create_game(5, 3)
    assert registry.get_game(game.id) is game
    assert game.id in registry.list_games()
    assert len(registry) == 1


def test_unknown_game_raises(registry):
    with pytest.raises(SessionNotFound):
        registry.get_game("nope")
    with pytest.raises(SessionNotFound):
        registry.register_player("nope", "A")
    with pytest.raises(SessionNotFound):
        registry.handle_turn("nope", "A", CellCoordinate(0, 0))


def test_session_not_found_is_key_error(registry):
    with pytest.raises(KeyError):
        registry.get_game("nope")


def test_duplicate_id_rejected(registry):
    registry.create_game(3, 1, game_id="fixed")
    with pytest.raises(ValueError):
        registry.create_game(3, 1, game_id="fixed")


def test_drop_game(registry):
    game = registry.create_game(3, 1)
    assert registry.drop_game(game.id) is True
    assert registry.drop_game(game.id) is False
    with pytest.raises(SessionNotFound):
        registry.get_game(game.id)


def test_join_and_turn(registry):
    game = registry.create_game(3, 1, positions=[(0, 0)])
    registry.register_player(game.id, "A")
    assert registry.handle_turn(game.id, "A", CellCoordinate(1, 1)) is None
    registry.register_player(game.id, "B")
    result = registry.handle_turn(game.id, "A", CellCoordinate(1, 1))
    assert result.adjacent_diamonds == 1
    assert result.next_player_id == "B"


def test_strict_registry_requires_join():
    registry = SessionRegistry(auto_join_on_turn=False)
    game = registry.create_game(3, 1, positions=[(0, 0)])
    registry.register_player(game.id, "A")
    registry.register_player(game.id, "B")
    assert registry.handle_turn(game.id, "C", CellCoordinate(1, 1)) is None
    assert registry.get_game(game.id).players == ["A", "B"]


def test_evict_expired(registry):
    stale = registry.create_game(3, 1)
    fresh = registry.create_game(3, 1)
    now = time.monotonic()
    stale.updated_at = now - 4000
    assert registry.evict_expired(now) == [stale.id]
    assert registry.list_games() == [fresh.id]


def test_finished_games_evicted_sooner(registry):
    game = registry.create_game(1, 1)
    registry.register_player(game.id, "A")
    registry.register_player(game.id, "B")
    registry.handle_turn(game.id, "A", CellCoordinate(0, 0))
    assert game.is_finished
    assert registry.evict_expired(game.updated_at + 301) == [game.id]


def test_zero_ttl_disables_eviction():
    registry = SessionRegistry(session_ttl_seconds=0, finished_ttl_seconds=0)
    game = registry.create_game(3, 1)
    assert registry.evict_expired(game.updated_at + 10**6) == []


def test_concurrent_turns_single_winner():
    registry = SessionRegistry()
    game = registry.create_game(2, 1, positions=[(1, 1)])
    players = [f"p{i}" for i in range(16)]
    for p in players:
        registry.register_player(game.id, p)
    barrier = threading.Barrier(len(players))
    results = {}

    def play(player_id):
        barrier.wait()
        results[player_id] = registry.handle_turn(game.id, player_id, CellCoordinate(1, 1))

    threads = [threading.Thread(target=play, args=(p,)) for p in players]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    accepted = [p for p, r in results.items() if r is not None]
    assert len(accepted) == 1
    assert game.winner_id == accepted[0]
    assert game.opened_diamonds == [CellCoordinate(1, 1)]


def test_public_payload_hides_diamonds(registry):
    game = registry.create_game(3, 2, positions=[(0, 0), (2, 2)])
    registry.register_player(game.id, "A")
    registry.register_player(game.id, "B")
    registry.handle_turn(game.id, "A", CellCoordinate(0, 0))
    payload = game_state_payload(game)
    assert payload == {
        "gameId": game.id,
        "size": 3,
        "diamonds": 2,
        "players": ["A", "B"],
        "openedDiamonds": [{"x": 0, "y": 0}],
        "winnerId": None,
        "gameOver": False,
        "currentPlayerId": "B",
    }
