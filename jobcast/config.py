"""Load settings, credentials and posting limits."""
from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobcast.log import get_logger

log = get_logger(__name__)

load_dotenv()

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = PROJECT_ROOT / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"

X_CHAR_LIMIT = 280
X_THREAD_LIMIT = 270  # leaves room for the " (i/n)" suffix
X_PREMIUM_CHAR_LIMIT = 25000
X_PREMIUM_THREAD_LIMIT = 24990

DEFAULT_SETTINGS: dict[str, Any] = {
    "scrape": {
        "limit": 30,
        "request_delay": 0.5,
    },
    "posting": {
        "per_run": 2,
        "delay_seconds": 2.0,
    },
    "excluded_titles": ["Driver", "Cleaner", "Nanny", "Cook", "Security"],
}


@dataclass(frozen=True)
class PostingLimits:
    """Character budget of one post and the chunk size used to estimate threads."""

    char_limit: int = X_CHAR_LIMIT
    thread_chunk_target: int = X_THREAD_LIMIT

    @classmethod
    def standard(cls) -> "PostingLimits":
        return cls(X_CHAR_LIMIT, X_THREAD_LIMIT)

    @classmethod
    def premium(cls) -> "PostingLimits":
        return cls(X_PREMIUM_CHAR_LIMIT, X_PREMIUM_THREAD_LIMIT)


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def env_flag(key: str) -> bool:
    return get_env(key).lower() in ("1", "true", "yes", "on")


def get_posting_limits() -> PostingLimits:
    """Premium accounts (TWITTER_PREMIUM=true) get long-post limits."""
    if env_flag("TWITTER_PREMIUM"):
        return PostingLimits.premium()
    return PostingLimits.standard()


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """Operator settings from YAML merged over the built-in defaults."""
    path = path or SETTINGS_PATH
    if not path.exists():
        log.debug("No settings file at %s — using defaults", path)
        return copy.deepcopy(DEFAULT_SETTINGS)

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        log.warning("Ignoring %s: top level must be a mapping", path.name)
        return copy.deepcopy(DEFAULT_SETTINGS)

    # Older settings files used a flat excluded_jobs key
    if "excluded_jobs" in data and "excluded_titles" not in data:
        data["excluded_titles"] = data.pop("excluded_jobs")

    return _merge(DEFAULT_SETTINGS, data)
