"""Data models for jobs, posting results and queue statistics."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class JobRecord:
    """A job as entered by an operator (or built from pasted text)."""

    title: str
    company: str = ""
    location: str = ""
    job_type: str = ""
    description: str = ""
    apply_link: str = ""
    hashtags: tuple[str, ...] = ()
    image: bytes | None = None


@dataclass
class ScrapedJob:
    id: str
    title: str
    company: str
    location: str
    job_type: str
    description: str
    apply_url: str
    source_url: str
    scraped_at: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScrapedJob":
        # camelCase keys are accepted for records queued by other writers
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title", ""),
            company=data.get("company", ""),
            location=data.get("location", ""),
            job_type=data.get("job_type", data.get("jobType", "")),
            description=data.get("description", ""),
            apply_url=data.get("apply_url", data.get("applyUrl", "")),
            source_url=data.get("source_url", data.get("sourceUrl", "")),
            scraped_at=data.get("scraped_at", data.get("scrapedAt", "")),
        )


@dataclass
class ExtractedJobFields:
    title: str = ""
    company: str = ""
    location: str = ""
    job_type: str = ""
    description: str = ""
    apply_link: str = ""
    suggested_hashtags: list[str] = field(default_factory=list)

    def to_job_record(self, hashtags: list[str] | None = None) -> JobRecord:
        tags = self.suggested_hashtags if hashtags is None else hashtags
        return JobRecord(
            title=self.title,
            company=self.company,
            location=self.location,
            job_type=self.job_type,
            description=self.description,
            apply_link=self.apply_link,
            hashtags=tuple(tags),
        )


@dataclass(frozen=True)
class CharacterStatus:
    count: int
    remaining: int
    is_over_limit: bool
    needs_thread: bool
    thread_chunk_count: int
    char_limit: int


@dataclass
class PostResult:
    success: bool
    ids: list[str] = field(default_factory=list)
    error: str | None = None


@dataclass
class QueueStats:
    pending_today: int
    posted_today: int
    total_posted: int
    pending_jobs: list[ScrapedJob]
    pending_total: int
    recent_history: list[dict[str, str]]
    history_total: int
