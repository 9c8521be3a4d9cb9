"""Daily posting queue on top of a Redis-style key-value store.

Keys:
  jobs:posted:all            set of every job id ever posted
  jobs:today:pending:<date>  set of job ids waiting to be posted today (24h TTL)
  job:<id>                   JSON job record (7 day TTL)
  history:<date>             hash job id -> ISO timestamp posted (30 day TTL)
"""
from __future__ import annotations

import json
import random
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Iterable

import requests

from jobcast.log import get_logger
from jobcast.models import QueueStats, ScrapedJob
from jobcast.retry import retry

log = get_logger(__name__)

POSTED_ALL_KEY = "jobs:posted:all"
JOB_TTL = 60 * 60 * 24 * 7
PENDING_TTL = 60 * 60 * 24
HISTORY_TTL = 60 * 60 * 24 * 30


def pending_key(date: str) -> str:
    return f"jobs:today:pending:{date}"


def job_key(job_id: str) -> str:
    return f"job:{job_id}"


def history_key(date: str) -> str:
    return f"history:{date}"


class QueueError(RuntimeError):
    """The store rejected a command."""


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str, ex: int | None = None) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> int: ...

    @abstractmethod
    def expire(self, key: str, seconds: int) -> None: ...

    @abstractmethod
    def sadd(self, key: str, *members: str) -> int: ...

    @abstractmethod
    def srem(self, key: str, *members: str) -> int: ...

    @abstractmethod
    def sismember(self, key: str, member: str) -> bool: ...

    @abstractmethod
    def smembers(self, key: str) -> list[str]: ...

    @abstractmethod
    def srandmember(self, key: str, count: int) -> list[str]: ...

    @abstractmethod
    def scard(self, key: str) -> int: ...

    @abstractmethod
    def hset(self, key: str, mapping: dict[str, str]) -> None: ...

    @abstractmethod
    def hgetall(self, key: str) -> dict[str, str]: ...


# ── Upstash Redis (REST) ─────────────────────────────────────────────────


class UpstashStore(KeyValueStore):
    """Redis commands sent as JSON arrays to the Upstash REST endpoint."""

    def __init__(self, url: str, token: str, *, session: requests.Session | None = None) -> None:
        self.url = url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {token}"})

    @retry(max_attempts=3, base_delay=1.0, retryable=(requests.RequestException, OSError))
    def _send(self, command: list[str]) -> dict:
        r = self.session.post(self.url, json=command, timeout=10)
        if r.status_code >= 500:
            r.raise_for_status()
        return r.json()

    def command(self, *args: object) -> object:
        payload = self._send([str(a) for a in args])
        if "error" in payload:
            raise QueueError(f"{args[0]} failed: {payload['error']}")
        return payload.get("result")

    def get(self, key: str) -> str | None:
        result = self.command("GET", key)
        return None if result is None else str(result)

    def set(self, key: str, value: str, ex: int | None = None) -> None:
        if ex:
            self.command("SET", key, value, "EX", ex)
        else:
            self.command("SET", key, value)

    def delete(self, key: str) -> int:
        return int(self.command("DEL", key) or 0)

    def expire(self, key: str, seconds: int) -> None:
        self.command("EXPIRE", key, seconds)

    def sadd(self, key: str, *members: str) -> int:
        return int(self.command("SADD", key, *members) or 0)

    def srem(self, key: str, *members: str) -> int:
        return int(self.command("SREM", key, *members) or 0)

    def sismember(self, key: str, member: str) -> bool:
        return int(self.command("SISMEMBER", key, member) or 0) == 1

    def smembers(self, key: str) -> list[str]:
        return [str(m) for m in (self.command("SMEMBERS", key) or [])]

    def srandmember(self, key: str, count: int) -> list[str]:
        return [str(m) for m in (self.command("SRANDMEMBER", key, count) or [])]

    def scard(self, key: str) -> int:
        return int(self.command("SCARD", key) or 0)

    def hset(self, key: str, mapping: dict[str, str]) -> None:
        args: list[str] = []
        for field, value in mapping.items():
            args.extend([field, value])
        self.command("HSET", key, *args)

    def hgetall(self, key: str) -> dict[str, str]:
        flat = self.command("HGETALL", key) or []
        if isinstance(flat, dict):
            return {str(k): str(v) for k, v in flat.items()}
        return {str(flat[i]): str(flat[i + 1]) for i in range(0, len(flat) - 1, 2)}


# ── In-process store ─────────────────────────────────────────────────────


class MemoryStore(KeyValueStore):
    """Dict-backed store with key expiry; state lives only as long as the process."""

    def __init__(self, *, clock: Callable[[], float] = time.monotonic, rng: random.Random | None = None) -> None:
        self._data: dict[str, object] = {}
        self._expires: dict[str, float] = {}
        self._clock = clock
        self._rng = rng or random.Random()

    def _live(self, key: str) -> object | None:
        deadline = self._expires.get(key)
        if deadline is not None and self._clock() >= deadline:
            self._data.pop(key, None)
            self._expires.pop(key, None)
        return self._data.get(key)

    def _typed(self, key: str, kind: type, create: bool) -> object:
        value = self._live(key)
        if value is None:
            value = kind()
            if create:
                self._data[key] = value
        if not isinstance(value, kind):
            raise QueueError(f"{key} does not hold a {kind.__name__}")
        return value

    def _set_of(self, key: str, create: bool = False) -> set[str]:
        return self._typed(key, set, create)  # type: ignore[return-value]

    def _hash_of(self, key: str, create: bool = False) -> dict[str, str]:
        return self._typed(key, dict, create)  # type: ignore[return-value]

    def get(self, key: str) -> str | None:
        value = self._live(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str, ex: int | None = None) -> None:
        self._data[key] = value
        self._expires.pop(key, None)
        if ex:
            self._expires[key] = self._clock() + ex

    def delete(self, key: str) -> int:
        existed = self._live(key) is not None
        self._data.pop(key, None)
        self._expires.pop(key, None)
        return int(existed)

    def expire(self, key: str, seconds: int) -> None:
        if self._live(key) is not None:
            self._expires[key] = self._clock() + seconds

    def sadd(self, key: str, *members: str) -> int:
        s = self._set_of(key, create=True)
        added = [m for m in members if m not in s]
        s.update(added)
        return len(added)

    def srem(self, key: str, *members: str) -> int:
        s = self._set_of(key)
        removed = [m for m in members if m in s]
        s.difference_update(removed)
        if not s:
            self.delete(key)
        return len(removed)

    def sismember(self, key: str, member: str) -> bool:
        return member in self._set_of(key)

    def smembers(self, key: str) -> list[str]:
        return sorted(self._set_of(key))

    def srandmember(self, key: str, count: int) -> list[str]:
        members = sorted(self._set_of(key))
        return self._rng.sample(members, min(count, len(members)))

    def scard(self, key: str) -> int:
        return len(self._set_of(key))

    def hset(self, key: str, mapping: dict[str, str]) -> None:
        self._hash_of(key, create=True).update(mapping)

    def hgetall(self, key: str) -> dict[str, str]:
        return dict(self._hash_of(key))


# ── Queue ────────────────────────────────────────────────────────────────


def _utc_today() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _page(items: list, page: int, limit: int) -> list:
    page = max(page, 1)
    start = (page - 1) * limit
    return items[start:start + limit]


class JobQueue:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        today: Callable[[], str] = _utc_today,
        now: Callable[[], str] = _utc_now_iso,
    ) -> None:
        self.store = store
        self._today = today
        self._now = now

    def is_posted(self, job_id: str) -> bool:
        return self.store.sismember(POSTED_ALL_KEY, job_id)

    def add_jobs_for_today(self, jobs: Iterable[ScrapedJob]) -> int:
        """Queue jobs never posted and not already pending; returns how many were added."""
        key = pending_key(self._today())
        added = 0
        for job in jobs:
            if self.is_posted(job.id) or self.store.sismember(key, job.id):
                continue
            self.store.set(job_key(job.id), json.dumps(job.to_dict()), ex=JOB_TTL)
            self.store.sadd(key, job.id)
            self.store.expire(key, PENDING_TTL)
            added += 1
        log.debug("Queued %d new job(s) under %s", added, key)
        return added

    def get_job(self, job_id: str) -> ScrapedJob | None:
        raw = self.store.get(job_key(job_id))
        if not raw:
            return None
        try:
            return ScrapedJob.from_dict(json.loads(raw))
        except (ValueError, TypeError) as exc:
            log.warning("Unreadable job record %s: %s", job_id, exc)
            return None

    def _jobs(self, ids: Iterable[str]) -> list[ScrapedJob]:
        return [job for job in (self.get_job(i) for i in ids) if job]

    def get_todays_unposted(self, limit: int = 2) -> list[ScrapedJob]:
        """Up to *limit* random pending jobs from today's queue."""
        ids = self.store.srandmember(pending_key(self._today()), limit)
        return self._jobs(ids)

    def mark_as_posted(self, job_ids: Iterable[str]) -> None:
        date = self._today()
        ids = list(job_ids)
        if not ids:
            return
        for job_id in ids:
            self.store.sadd(POSTED_ALL_KEY, job_id)
            self.store.srem(pending_key(date), job_id)
            self.store.hset(history_key(date), {job_id: self._now()})
        self.store.expire(history_key(date), HISTORY_TTL)
        log.info("Marked %d job(s) as posted", len(ids))

    def clear_pending(self) -> int:
        """Drop today's pending set; job records expire on their own TTL."""
        key = pending_key(self._today())
        count = self.store.scard(key)
        self.store.delete(key)
        log.info("Cleared %d pending job(s)", count)
        return count

    def get_stats(
        self,
        *,
        pending_page: int = 1,
        pending_limit: int = 10,
        history_page: int = 1,
        history_limit: int = 10,
    ) -> QueueStats:
        date = self._today()
        pending_ids = sorted(self.store.smembers(pending_key(date)))
        history = self.store.hgetall(history_key(date))
        entries = sorted(history.items(), key=lambda kv: kv[1], reverse=True)

        recent: list[dict[str, str]] = []
        for job_id, posted_at in _page(entries, history_page, history_limit):
            job = self.get_job(job_id)
            recent.append({
                "id": job_id,
                "posted_at": posted_at,
                "title": job.title if job else "Unknown",
                "company": job.company if job else "Unknown",
            })

        return QueueStats(
            pending_today=len(pending_ids),
            posted_today=len(history),
            total_posted=self.store.scard(POSTED_ALL_KEY),
            pending_jobs=self._jobs(_page(pending_ids, pending_page, pending_limit)),
            pending_total=len(pending_ids),
            recent_history=recent,
            history_total=len(entries),
        )


def get_queue(env_getter) -> JobQueue:
    url = env_getter("UPSTASH_REDIS_REST_URL")
    token = env_getter("UPSTASH_REDIS_REST_TOKEN")
    if url and token:
        return JobQueue(UpstashStore(url, token))
    log.warning("UPSTASH_REDIS_REST_URL/TOKEN not set — queue is in-memory and will not persist")
    return JobQueue(MemoryStore())
