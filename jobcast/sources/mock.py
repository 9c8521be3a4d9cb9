"""Offline job source for local runs and tests."""
from __future__ import annotations

from datetime import datetime, timezone

from jobcast.log import get_logger
from jobcast.models import ScrapedJob
from jobcast.sources.base import JobSource

log = get_logger(__name__)


def _mock_id(suffix: str) -> str:
    """Date-based ID so sample jobs queue afresh each day."""
    return f"mock-{datetime.now(timezone.utc).strftime('%Y-%m-%d')}-{suffix}"


class MockSource(JobSource):
    def __init__(self, env_getter=None) -> None:
        pass

    def fetch(self, limit: int = 30) -> list[ScrapedJob]:
        log.info("MockSource generating sample jobs")
        now = datetime.now(timezone.utc).isoformat()
        jobs = [
            ScrapedJob(
                id=_mock_id("1"),
                title="Backend Engineer",
                company="Paystack",
                location="Lagos",
                job_type="Full Time",
                description=(
                    "Posted: 2 days ago\n"
                    "We are building payment infrastructure for Africa. "
                    "You will design and run APIs used by thousands of merchants.\n"
                    "Requirements: 3+ years with Python or Go, PostgreSQL."
                ),
                apply_url="https://paystack.com/careers/backend-engineer",
                source_url="https://www.myjobmag.com/job/backend-engineer-paystack",
                scraped_at=now,
            ),
            ScrapedJob(
                id=_mock_id("2"),
                title="Marketing Manager",
                company="Flutterwave",
                location="Remote",
                job_type="Remote | Full Time",
                description=(
                    "Flutterwave is looking for a Marketing Manager to lead brand campaigns "
                    "across West Africa."
                ),
                apply_url="careers@flutterwave.com",
                source_url="https://www.myjobmag.com/job/marketing-manager-flutterwave",
                scraped_at=now,
            ),
            ScrapedJob(
                id=_mock_id("3"),
                title="Data Analyst",
                company="Kuda Bank",
                location="Abuja",
                job_type="Contract",
                description="Kuda is hiring a Data Analyst to own reporting for the lending team.",
                apply_url="https://www.myjobmag.com/job/data-analyst-kuda",
                source_url="https://www.myjobmag.com/job/data-analyst-kuda",
                scraped_at=now,
            ),
        ]
        return jobs[:limit]
