"""Environment-backed runtime settings.

Rule sets themselves are YAML data; these settings only pick where that data
lives and how the command line behaves by default. The CLI loads a ``.env``
file before the first call to :func:`get_settings`.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    config_dir: Path | None
    default_format: str
    log_verbosity: str


def _env_path(name: str) -> Path | None:
    val = os.getenv(name)
    if val is None or not val.strip():
        return None
    return Path(val.strip()).expanduser()


def _env_choice(name: str, default: str, *, allowed: set[str]) -> str:
    val = os.getenv(name)
    if val is None:
        return default
    normalized = val.strip().lower()
    if normalized in allowed:
        return normalized
    return default


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        config_dir=_env_path("PREFLIGHT_CONFIG_DIR"),
        default_format=os.getenv("PREFLIGHT_DEFAULT_FORMAT", "shopify").strip() or "shopify",
        log_verbosity=_env_choice(
            "PREFLIGHT_LOG_VERBOSITY",
            default="normal",
            allowed={"quiet", "normal", "verbose"},
        ),
    )


__all__ = ["Settings", "get_settings"]
