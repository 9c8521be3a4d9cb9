"""Pre-post checks for operator-entered jobs."""
from __future__ import annotations

from urllib.parse import urlparse

from jobcast.formatting.apply import is_email
from jobcast.models import JobRecord


def _is_valid_url(value: str) -> bool:
    parsed = urlparse(value)
    if parsed.scheme == "mailto":
        return is_email(parsed.path)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_job(job: JobRecord) -> list[str]:
    """Human-readable problems with *job*; empty when it can be posted."""
    errors: list[str] = []
    if not job.title.strip():
        errors.append("Job title is required")
    if not job.description.strip():
        errors.append("Description is required")

    link = job.apply_link.strip()
    if not link:
        errors.append("Apply link or email is required")
    elif is_email(link):
        pass
    elif link.startswith(("http://", "https://", "mailto:")):
        if not _is_valid_url(link):
            errors.append("Apply link must be a valid URL or email address")
    else:
        errors.append("Apply link must be a valid URL (include https://) or email address")
    return errors
