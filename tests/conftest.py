import os
import random

os.environ.setdefault("JOBCAST_NO_FILE_LOG", "1")

import pytest

from jobcast.job_queue import JobQueue, MemoryStore
from jobcast.models import JobRecord

CREDENTIAL_VARS = (
    "TWITTER_API_KEY", "TWITTER_API_SECRET", "TWITTER_ACCESS_TOKEN", "TWITTER_ACCESS_TOKEN_SECRET",
    "TWITTER_PREMIUM", "TELEGRAM_BOT_TOKEN", "TELEGRAM_CHANNEL_ID",
    "UPSTASH_REDIS_REST_URL", "UPSTASH_REDIS_REST_TOKEN", "JOB_SOURCE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in CREDENTIAL_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def no_sleep(monkeypatch):
    calls: list[float] = []
    monkeypatch.setattr("time.sleep", calls.append)
    return calls


class Clock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def store(clock):
    return MemoryStore(clock=clock, rng=random.Random(7))


@pytest.fixture
def queue(store):
    return JobQueue(store, today=lambda: "2025-01-15", now=lambda: "2025-01-15T09:00:00+00:00")


@pytest.fixture
def backend_job() -> JobRecord:
    return JobRecord(
        title="Backend Engineer",
        company="Acme",
        location="Lagos",
        job_type="Full-time",
        description="About the role: Build APIs.\n\nRequirements: Node, SQL.",
        apply_link="https://acme.com/careers/42",
        hashtags=("hiring",),
    )