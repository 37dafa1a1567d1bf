"""
Runtime settings.

Defaults can be overridden with environment variables:
  TRIFOLD_VIEW_EXTENT  pixels the board is fitted into (float)
  TRIFOLD_TICK_MS      game loop interval in milliseconds (int)
  TRIFOLD_ECHO         0/1, live echo of typed text and hovered cell
  TRIFOLD_LOG_LEVEL    logging level name
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{name}: expected a boolean, got {raw!r}")


@dataclass(frozen=True)
class GameConfig:
    view_extent: float = 600.0
    tick_interval_ms: int = 16
    echo: bool = True
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.view_extent <= 0:
            raise ValueError(f"view_extent must be positive, got {self.view_extent}")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be positive, got {self.tick_interval_ms}")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "GameConfig":
        getenv = os.getenv if env is None else env.get
        kwargs: Dict[str, Any] = {}

        raw = getenv("TRIFOLD_VIEW_EXTENT")
        if raw:
            kwargs["view_extent"] = float(raw)
        raw = getenv("TRIFOLD_TICK_MS")
        if raw:
            kwargs["tick_interval_ms"] = int(raw)
        raw = getenv("TRIFOLD_ECHO")
        if raw:
            kwargs["echo"] = _parse_bool("TRIFOLD_ECHO", raw)
        raw = getenv("TRIFOLD_LOG_LEVEL")
        if raw:
            kwargs["log_level"] = raw.upper()
        return cls(**kwargs)
