"""Editor configuration and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

ENV_PREFIX = "AIR_EDITOR_"


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Tunables shared by the buffer, viewport, and chat layers."""

    tab_stop: int = 4
    undo_limit: int = 100
    chat_timeout: float = 30.0
    tick_interval: float = 0.1
    chat_panel_width: int = 40
    model: str = "gemini-1.5-flash-latest"
    api_key_env: str = "GEMINI_API_KEY"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        """Build a config, applying ``AIR_EDITOR_*`` overrides.

        Malformed numeric values are ignored and the default is kept.
        """

        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}
        for item in fields(cls):
            raw = env.get(f"{ENV_PREFIX}{item.name.upper()}")
            if raw is None:
                continue
            value = _coerce(raw, item.default)
            if value is not None:
                overrides[item.name] = value
        return cls(**overrides)


def _coerce(raw: str, default: object) -> object | None:
    try:
        if isinstance(default, int):
            value = int(raw)
            return value if value > 0 else None
        if isinstance(default, float):
            number = float(raw)
            return number if number > 0 else None
    except ValueError:
        return None
    return raw.strip() or None


__all__ = ["EditorConfig", "ENV_PREFIX"]
