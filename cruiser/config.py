from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class WebConfig:
    host: str = "0.0.0.0"
    port: int = 9090
    debug: bool = False


def _get_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def web_config_from_env() -> WebConfig:
    return WebConfig(
        host=os.getenv("CRUISER_WEB_HOST", "0.0.0.0"),
        port=int(os.getenv("CRUISER_WEB_PORT", "9090")),
        debug=_get_bool("CRUISER_WEB_DEBUG"),
    )


def log_level_from_env() -> str:
    return os.getenv("CRUISER_LOG_LEVEL", "INFO").strip().upper() or "INFO"


def pin_table_from_env() -> Optional[List[Tuple[str, str]]]:
    """
    Parse the optional `CRUISER_PINS` override.

    Format: ``"15=Roof Bar;16=Roof (Right)"``. Returns None when the variable is
    unset so callers fall back to the built-in table. A malformed value raises
    ValueError; wiring mistakes should stop the process, not be guessed at.
    """
    raw = os.getenv("CRUISER_PINS")
    if raw is None or raw.strip() == "":
        return None

    entries = []
    for chunk in raw.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        pin_id, sep, name = chunk.partition("=")
        pin_id, name = pin_id.strip(), name.strip()
        if not sep or not pin_id or not name:
            raise ValueError(f"Invalid CRUISER_PINS entry {chunk!r} (expected '<pin>=<name>')")
        entries.append((pin_id, name))

    if not entries:
        raise ValueError("CRUISER_PINS is set but lists no pins")
    return entries
