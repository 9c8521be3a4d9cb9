"""Test doubles for sources, publishers and HTTP sessions."""
from __future__ import annotations

import requests

from jobcast.models import PostResult, ScrapedJob
from jobcast.publishers.base import Publisher
from jobcast.sources.base import JobSource


def make_scraped(n: int = 1, **overrides) -> ScrapedJob:
    data = dict(
        id=f"job-{n}",
        title="Backend Engineer",
        company="Paystack",
        location="Lagos",
        job_type="Full Time",
        description="We are building payment infrastructure for Africa.",
        apply_url=f"https://paystack.com/careers/{n}",
        source_url=f"https://www.myjobmag.com/job/backend-engineer-{n}",
    )
    data.update(overrides)
    return ScrapedJob(**data)


class FakeSource(JobSource):
    def __init__(self, jobs: list[ScrapedJob]) -> None:
        self.jobs = jobs

    def fetch(self, limit: int = 30) -> list[ScrapedJob]:
        return self.jobs[:limit]


class FakePublisher(Publisher):
    def __init__(self, name: str, succeed: bool = True) -> None:
        self.name = name
        self.succeed = succeed
        self.posts: list[tuple[str, bytes | None]] = []

    def post(self, message: str, image: bytes | None = None) -> PostResult:
        self.posts.append((message, image))
        if self.succeed:
            return PostResult(success=True, ids=[str(len(self.posts))])
        return PostResult(success=False, error=f"{self.name} is down")


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200, text: str = "") -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Records requests and answers from a list of responses (or a callable)."""

    def __init__(self, responses=None) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, str, dict]] = []
        self.responses = responses if responses is not None else []

    def _answer(self, method: str, url: str, kwargs: dict):
        self.calls.append((method, url, kwargs))
        if callable(self.responses):
            result = self.responses(method, url, kwargs)
        else:
            result = self.responses.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    def get(self, url, **kwargs):
        return self._answer("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._answer("POST", url, kwargs)
