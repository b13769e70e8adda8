"""Конфигурация приложения."""
import os
from functools import lru_cache


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


@lru_cache
def get_config():
    return type("Config", (), {
        "debug": _flag("DEBUG", "0"),
        "allowed_origins": os.environ.get("ALLOWED_ORIGINS", "*").split(","),
        "log_level": os.environ.get("LOG_LEVEL", "DEBUG" if _flag("DEBUG", "0") else "INFO").upper(),
        "max_board_size": int(os.environ.get("MAX_BOARD_SIZE", "100")),
        "session_ttl_seconds": int(os.environ.get("SESSION_TTL_SECONDS", "3600")),
        "finished_ttl_seconds": int(os.environ.get("FINISHED_TTL_SECONDS", "300")),
        "auto_join_on_turn": _flag("AUTO_JOIN_ON_TURN", "1"),
    })()
