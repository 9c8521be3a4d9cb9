"""Centralized logging configuration — stdlib only.

LOG_LEVEL sets the console level. A daily file under ``logs/`` (or LOG_DIR)
records everything at DEBUG unless JOBCAST_NO_FILE_LOG is set.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

_DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"

# oauthlib logs signed request headers at DEBUG
_QUIET_LOGGERS: tuple[str, ...] = ("urllib3", "oauthlib", "requests_oauthlib")

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures root handlers on first call."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _log_file() -> Path:
    log_dir = Path(os.environ.get("LOG_DIR") or _DEFAULT_LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"jobcast_{datetime.now().strftime('%Y-%m-%d')}.log"


def _configure() -> None:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if os.environ.get("JOBCAST_NO_FILE_LOG"):
        root.setLevel(level)
        return

    try:
        fh = logging.FileHandler(_log_file(), encoding="utf-8")
    except OSError as exc:
        root.setLevel(level)
        root.warning("File logging disabled: %s", exc)
        return
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(formatter)
    root.addHandler(fh)
    root.setLevel(logging.DEBUG)
