"""Job titles that are never posted."""
from __future__ import annotations

from typing import Iterable

from jobcast.config import DEFAULT_SETTINGS


def is_job_excluded(title: str, keywords: Iterable[str] | None = None) -> bool:
    """True when *title* contains any excluded keyword (case-insensitive)."""
    if keywords is None:
        keywords = DEFAULT_SETTINGS["excluded_titles"]
    lower = title.lower().strip()
    return any(k.lower().strip() and k.lower().strip() in lower for k in keywords)
