"""
Job posting pipeline.

Runs: scrape → queue → (per run) pick pending jobs → compose → post → mark posted.
Operator posts (a filled-in job or a free-form message) skip the queue.
"""
from __future__ import annotations

import time
from typing import Any, Iterable

from jobcast.config import PostingLimits, get_env, get_posting_limits, load_settings
from jobcast.excluded import is_job_excluded
from jobcast.formatting import (
    Channel,
    compose_concise_chat,
    compose_concise_twitter,
    compose_message,
    validate_job,
)
from jobcast.job_queue import JobQueue, get_queue
from jobcast.log import get_logger
from jobcast.models import JobRecord, PostResult
from jobcast.publishers import Publisher, get_publishers, tweet_url
from jobcast.sources import JobSource, get_source

log = get_logger(__name__)

PLATFORMS: tuple[str, ...] = ("twitter", "telegram")
_CHANNELS = {"twitter": Channel.TWITTER, "telegram": Channel.TELEGRAM}


def _post(publishers: dict[str, Publisher], platform: str, message: str, image: bytes | None = None) -> PostResult:
    publisher = publishers.get(platform)
    if publisher is None:
        return PostResult(success=False, error=f"{platform} is not configured")
    return publisher.post(message, image)


def _result_dict(platform: str, result: PostResult) -> dict[str, Any]:
    out: dict[str, Any] = {"success": result.success, "ids": list(result.ids), "error": result.error}
    if platform == "twitter":
        out["urls"] = [tweet_url(i) for i in result.ids]
    return out


def scrape_and_queue(
    limit: int | None = None,
    *,
    source: JobSource | None = None,
    queue: JobQueue | None = None,
    settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Scrape the latest jobs and add unseen, non-excluded ones to today's queue."""
    settings = settings or load_settings()
    source = source or get_source(get_env, settings)
    queue = queue or get_queue(get_env)
    limit = limit or int(settings["scrape"]["limit"])

    log.info("Starting job scrape (limit=%d)...", limit)
    jobs = source.fetch(limit=limit)
    if not jobs:
        log.info("No jobs found to scrape")
        return {"scraped": 0, "excluded": 0, "added": 0, "pending_today": queue.get_stats().pending_today}

    keywords = settings.get("excluded_titles")
    kept = [j for j in jobs if not is_job_excluded(j.title, keywords)]
    excluded = len(jobs) - len(kept)
    if excluded:
        log.info("Skipped %d excluded job(s)", excluded)

    added = queue.add_jobs_for_today(kept)
    stats = queue.get_stats()
    log.info("Scrape complete — scraped=%d, added=%d, pending=%d", len(jobs), added, stats.pending_today)
    return {
        "scraped": len(jobs),
        "excluded": excluded,
        "added": added,
        "pending_today": stats.pending_today,
        "total_posted": stats.total_posted,
    }


def auto_post(
    limit: int | None = None,
    *,
    queue: JobQueue | None = None,
    publishers: dict[str, Publisher] | None = None,
    limits: PostingLimits | None = None,
    settings: dict[str, Any] | None = None,
    delay: float | None = None,
) -> dict[str, Any]:
    """Post up to *limit* pending jobs to every platform in concise form.

    A job counts as posted when at least one platform accepted it.
    """
    settings = settings or load_settings()
    queue = queue or get_queue(get_env)
    limits = limits or get_posting_limits()
    publishers = publishers if publishers is not None else get_publishers(get_env, limits)
    limit = limit or int(settings["posting"]["per_run"])
    delay = float(settings["posting"]["delay_seconds"]) if delay is None else delay

    jobs = queue.get_todays_unposted(limit)
    if not jobs:
        log.info("No unposted jobs available, skipping this cycle")
        return {"posted": 0, "results": []}

    results: list[dict[str, Any]] = []
    posted_ids: list[str] = []
    for i, job in enumerate(jobs):
        if i and delay:
            time.sleep(delay)
        log.info("Posting job: %s at %s", job.title, job.company)
        twitter = _post(publishers, "twitter", compose_concise_twitter(job, limits))
        telegram = _post(publishers, "telegram", compose_concise_chat(job))
        results.append({
            "job_id": job.id,
            "title": f"{job.title} at {job.company}",
            "twitter": _result_dict("twitter", twitter),
            "telegram": _result_dict("telegram", telegram),
        })
        if twitter.success or telegram.success:
            posted_ids.append(job.id)

    queue.mark_as_posted(posted_ids)
    log.info("Auto-post complete — posted=%d of %d", len(posted_ids), len(jobs))
    return {"posted": len(posted_ids), "results": results}


def post_job(
    job: JobRecord,
    platforms: Iterable[str] = PLATFORMS,
    *,
    publishers: dict[str, Publisher] | None = None,
    limits: PostingLimits | None = None,
    settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Post an operator-entered job in full form to the chosen platforms."""
    errors = validate_job(job)
    if errors:
        return {"success": False, "results": {}, "errors": errors}

    settings = settings or load_settings()
    if is_job_excluded(job.title, settings.get("excluded_titles")):
        log.info("Refusing excluded job: %s", job.title)
        return {"success": False, "results": {}, "errors": ["This job type is excluded from posting"]}

    limits = limits or get_posting_limits()
    publishers = publishers if publishers is not None else get_publishers(get_env, limits)

    results: dict[str, Any] = {}
    for platform in PLATFORMS:
        if platform not in platforms:
            continue
        message = compose_message(job, _CHANNELS[platform], limits=limits)
        results[platform] = _result_dict(platform, _post(publishers, platform, message, job.image))

    return {"success": any(r["success"] for r in results.values()), "results": results, "errors": []}


def quick_post(
    message: str,
    platforms: Iterable[str],
    image: bytes | None = None,
    *,
    publishers: dict[str, Publisher] | None = None,
    limits: PostingLimits | None = None,
) -> dict[str, Any]:
    """Post a free-form message verbatim."""
    platforms = [p for p in platforms if p in PLATFORMS]
    errors: list[str] = []
    if not (message or "").strip():
        errors.append("Message is required")
    if not platforms:
        errors.append("Select at least one platform")
    if errors:
        return {"success": False, "results": {}, "errors": errors}

    limits = limits or get_posting_limits()
    publishers = publishers if publishers is not None else get_publishers(get_env, limits)

    results = {p: _result_dict(p, _post(publishers, p, message, image)) for p in platforms}
    return {"success": any(r["success"] for r in results.values()), "results": results, "errors": []}
