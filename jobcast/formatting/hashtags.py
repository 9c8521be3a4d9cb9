"""Hashtag selection for job posts."""
from __future__ import annotations

import re
from typing import Iterable, Protocol, Sequence

MAX_HASHTAGS = 5
MAX_TRENDING = 3

# (substring of the lower-cased location, tag)
LOCATION_TAGS: tuple[tuple[str, str], ...] = (
    ("lagos", "Lagos"),
    ("abuja", "Abuja"),
    ("port harcourt", "PortHarcourt"),
    ("remote", "RemoteJobs"),
)

# (substring of the lower-cased job type, tag)
JOB_TYPE_TAGS: tuple[tuple[str, str], ...] = (
    ("full", "FullTime"),
    ("part", "PartTime"),
    ("intern", "Internship"),
    ("contract", "Contract"),
)

TITLE_TAGS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"engineer|developer|programmer|software", re.I), "TechJobs"),
    (re.compile(r"manager|management", re.I), "Management"),
    (re.compile(r"sales|business\s+development", re.I), "Sales"),
    (re.compile(r"marketing|brand", re.I), "Marketing"),
    (re.compile(r"finance|accountant|accounting", re.I), "Finance"),
    (re.compile(r"\bhr\b|human\s+resource", re.I), "HR"),
    (re.compile(r"design|creative", re.I), "Design"),
    (re.compile(r"data|analyst", re.I), "DataJobs"),
)

JOB_RELEVANT_RE = re.compile(r"job|hire|career|lagos|nigeria|remote|tech|work|recruit", re.I)


class _Taggable(Protocol):
    title: str
    location: str
    job_type: str


def normalize_tag(tag: str) -> str:
    return tag.strip().lstrip("#").strip()


def _dedupe_key(tag: str) -> str:
    return normalize_tag(tag).lower()


def job_specific_tags(job: _Taggable) -> list[str]:
    """Candidate tags derived from location, job type and title, in derivation order."""
    tags: list[str] = []

    location = (job.location or "").lower()
    tags.extend(tag for needle, tag in LOCATION_TAGS if needle in location)

    job_type = (job.job_type or "").lower()
    tags.extend(tag for needle, tag in JOB_TYPE_TAGS if needle in job_type)

    title = job.title or ""
    tags.extend(tag for pattern, tag in TITLE_TAGS if pattern.search(title))

    if not any("nigeriajobs" in t.lower() for t in tags):
        tags.insert(0, "NigeriaJobs")
    if not any("hiring" in t.lower() for t in tags):
        tags.insert(0, "Hiring")
    return tags


def pick_trending(trending: Sequence[str], limit: int = MAX_TRENDING) -> list[str]:
    """Up to *limit* trending tags, job-relevant ones first, otherwise in given order."""
    relevant = [t for t in trending if JOB_RELEVANT_RE.search(t)]
    rest = [t for t in trending if t not in relevant]
    return (relevant + rest)[:limit]


def merge_hashtags(*groups: Iterable[str], limit: int = MAX_HASHTAGS) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for group in groups:
        for tag in group:
            if len(result) >= limit:
                return result
            normalized = normalize_tag(tag)
            key = normalized.lower()
            if not normalized or key in seen:
                continue
            seen.add(key)
            result.append(normalized)
    return result


def generate_hashtags(job: _Taggable, trending: Sequence[str] | None = None) -> list[str]:
    """At most five deduplicated tags: trending picks first, then job-specific ones."""
    picked = pick_trending(trending) if trending else []
    return merge_hashtags(picked, job_specific_tags(job))


def suggest_hashtags(
    *,
    title: str = "",
    job_type: str = "",
    company: str = "",
) -> list[str]:
    """Lower-case tag suggestions for a manually entered or pasted job."""
    tags: list[str] = ["hiring", "jobopening", "jobs"]

    t = title.lower()
    if t:
        if re.search(r"engineer|developer|dev", t):
            tags.append("techjobs")
        if re.search(r"software|swe|sde", t):
            tags.append("softwareengineering")
        if re.search(r"designer|design", t):
            tags.append("design")
        if re.search(r"manager|lead|director", t):
            tags.append("leadership")
        if re.search(r"data|analyst|scientist", t):
            tags.append("data")
        if "product" in t:
            tags.append("productmanagement")
        if "remote" in t:
            tags.append("remotework")

    if job_type == "Remote":
        tags.extend(["remote", "remotework", "workfromhome"])
    elif job_type == "Hybrid":
        tags.append("hybrid")
    elif job_type == "Internship":
        tags.append("internship")
    elif job_type == "Contract":
        tags.append("contract")
    elif job_type == "Freelance":
        tags.append("freelance")

    if company:
        tags.append("careers")

    return list(dict.fromkeys(tags))


def as_hashtag_string(tags: Iterable[str]) -> str:
    return " ".join(f"#{normalize_tag(t)}" for t in tags if normalize_tag(t))
