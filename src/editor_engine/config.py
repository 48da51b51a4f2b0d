"""Engine settings sourced from ``EDITOR_ENGINE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "EDITOR_ENGINE_"


def env_value(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env_value(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = env_value(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Tunables shared by the catalog, history and session layers."""

    catalog_path: Optional[str] = None
    history_limit: int = 100
    debounce_ms: int = 500
    min_char_delta: int = 3
    idle_ms: int = 2000
    default_language: str = "kotlin"

    @classmethod
    def from_env(cls) -> "EngineSettings":
        defaults = cls()
        return cls(
            catalog_path=env_value("CATALOG") or None,
            history_limit=env_int("HISTORY_LIMIT", defaults.history_limit, minimum=1),
            debounce_ms=env_int("DEBOUNCE_MS", defaults.debounce_ms),
            min_char_delta=env_int(
                "MIN_CHAR_DELTA", defaults.min_char_delta, minimum=1
            ),
            idle_ms=env_int("IDLE_MS", defaults.idle_ms),
            default_language=(
                env_value("DEFAULT_LANGUAGE") or defaults.default_language
            ).lower(),
        )


__all__ = ["ENV_PREFIX", "EngineSettings", "env_flag", "env_int", "env_value"]
