from .base import JobSource
from .mock import MockSource
from .myjobmag import MyJobMagSource

from jobcast.log import get_logger

log = get_logger(__name__)

__all__ = ["JobSource", "MockSource", "MyJobMagSource", "get_source"]


def get_source(env_getter, settings: dict | None = None) -> JobSource:
    """JOB_SOURCE=mock selects the offline source; MyJobMag otherwise."""
    if env_getter("JOB_SOURCE").lower() == "mock":
        log.info("Using source: MockSource")
        return MockSource(env_getter)

    delay = float(((settings or {}).get("scrape") or {}).get("request_delay", 0.5))
    log.info("Using source: MyJobMag")
    return MyJobMagSource(env_getter, request_delay=delay)
