"""Pull structured job fields out of a pasted job posting.

Heuristic and best-effort: every field falls back to an empty string (the
location to ``"Not specified"``) and ``extract_job`` never raises on any input.
The labeled-field patterns are ordered tables, tried first to last.
"""
from __future__ import annotations

import re

from jobcast.formatting.hashtags import suggest_hashtags
from jobcast.formatting.sections import parse_sections
from jobcast.log import get_logger
from jobcast.models import ExtractedJobFields

log = get_logger(__name__)

DEFAULT_LOCATION = "Not specified"

URL_RE = re.compile(
    r"https?://(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"(?:[-a-zA-Z0-9()@:%_+.~#?&/=]*)"
)
APPLY_URL_HINT_RE = re.compile(r"apply|career|job|position|recruit", re.IGNORECASE)
APPLY_EMAIL_RE = re.compile(
    r"(?:apply|send|email|contact)\s*(?:to|at)?\s*:?\s*([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})",
    re.IGNORECASE,
)
STANDALONE_EMAIL_RE = re.compile(r"\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b")

JOB_TYPES: tuple[str, ...] = (
    "Full-time",
    "Part-time",
    "Contract",
    "Freelance",
    "Internship",
    "Remote",
    "Hybrid",
)
JOB_TYPE_RE = re.compile(
    r"\b(" + "|".join(t.replace("-", "[- ]?") for t in JOB_TYPES) + r")\b",
    re.IGNORECASE,
)
# (substring of the lower-cased match, canonical job type)
_JOB_TYPE_CANON: tuple[tuple[str, str], ...] = (
    ("full", "Full-time"),
    ("part", "Part-time"),
    ("contract", "Contract"),
    ("freelance", "Freelance"),
    ("intern", "Internship"),
    ("remote", "Remote"),
    ("hybrid", "Hybrid"),
)

_M = re.MULTILINE
_IM = re.IGNORECASE | re.MULTILINE

LABEL_PATTERNS: tuple[tuple[str, tuple[re.Pattern[str], ...]], ...] = (
    (
        "title",
        (
            re.compile(r"^[^\S\n]*(?:job\s+title|position|role|title)[^\S\n]*:[^\S\n]*([^\n]+)", _IM),
            re.compile(r"we(?:'re|\s+are)\s+hiring(?:\s+an?\b)?[^\S\n]*([^\n.!?]+)", re.IGNORECASE),
            re.compile(
                r"^(?:#\s*)?([A-Z][a-zA-Z ]+(?:Engineer|Developer|Manager|Designer|Analyst|Specialist"
                r"|Lead|Director)[^\n]*)",
                _M,
            ),
        ),
    ),
    (
        "company",
        (
            re.compile(r"^[^\S\n]*(?:company|organi[sz]ation|employer)[^\S\n]*:[^\S\n]*([^\n]+)", _IM),
            re.compile(r"(?:\bat|@)[^\S\n]+([A-Z0-9][A-Za-z0-9 &.,'-]*?)(?:[^\S\n]*[|\-–][^\S\n]|$)", _M),
            re.compile(r"\b(?i:join|work\s+with)[^\S\n]+([A-Z][A-Za-z0-9 &.'-]+)"),
        ),
    ),
    (
        "location",
        (
            re.compile(r"(?:^[^\S\n]*(?:location|office)[^\S\n]*:|\bbased\s+in\b)[^\S\n]*([^\n]+)", _IM),
            re.compile(r"\b(?:remote|hybrid|onsite|in-office)[^\S\n]*[-–][^\S\n]*([^\n]+)", re.IGNORECASE),
        ),
    ),
)

AT_SPLIT_RE = re.compile(r"^(.+?)\s+at\s+(.+)$", re.IGNORECASE)
WORK_ARRANGEMENT_RE = re.compile(r"remote|hybrid|distributed", re.IGNORECASE)
APPLY_PHRASE_RE = re.compile(r"\bapply\s*(?:to|at|here)\b[^\S\n]*:?[^\S\n]*|\bapply[^\S\n]*:[^\S\n]*", re.IGNORECASE)
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")


def find_apply_url(text: str) -> str:
    urls = URL_RE.findall(text)
    for url in urls:
        if APPLY_URL_HINT_RE.search(url) or "linkedin.com/jobs" in url:
            return url
    return urls[0] if urls else ""


def detect_job_type(text: str) -> str:
    m = JOB_TYPE_RE.search(text)
    if not m:
        return ""
    found = m.group(1).lower()
    for needle, canonical in _JOB_TYPE_CANON:
        if needle in found:
            return canonical
    return ""


def _split_at_company(value: str) -> tuple[str, str]:
    m = AT_SPLIT_RE.match(value)
    if not m:
        return value, ""
    return m.group(1).strip(), m.group(2).strip()


def _labeled_fields(text: str) -> dict[str, str]:
    fields: dict[str, str] = {"title": "", "company": "", "location": ""}
    for key, patterns in LABEL_PATTERNS:
        if fields[key]:
            continue
        for pattern in patterns:
            m = pattern.search(text)
            if not m or not m.group(1):
                continue
            value = m.group(1).strip()
            if 1 < len(value) < 200:
                fields[key] = value
                break

        if key == "title" and fields["title"]:
            title, company = _split_at_company(fields["title"])
            fields["title"] = title
            if company and not fields["company"]:
                fields["company"] = company
    return fields


def _clean_description(text: str, apply_url: str, apply_email: str, standalone_email: str) -> str:
    desc = text
    if apply_url:
        desc = desc.replace(apply_url, "", 1)
    if apply_email:
        desc = desc.replace(apply_email, "", 1)
    elif standalone_email:
        desc = desc.replace(standalone_email, "", 1)
    desc = APPLY_PHRASE_RE.sub("", desc)
    return _EXTRA_BLANK_LINES.sub("\n\n", desc).strip()


def extract_job(raw: str) -> ExtractedJobFields:
    """Best-effort job fields from pasted text; missing values stay empty."""
    text = (raw or "").strip()
    result = ExtractedJobFields(location=DEFAULT_LOCATION)
    if not text:
        result.suggested_hashtags = suggest_hashtags()
        return result

    apply_url = find_apply_url(text)
    email_match = APPLY_EMAIL_RE.search(text)
    apply_email = email_match.group(1) if email_match else ""
    standalone_match = STANDALONE_EMAIL_RE.search(text)
    standalone_email = standalone_match.group(0) if standalone_match else ""

    if apply_url:
        result.apply_link = apply_url
    elif apply_email:
        result.apply_link = f"mailto:{apply_email}"
    elif standalone_email:
        result.apply_link = f"mailto:{standalone_email}"

    result.job_type = detect_job_type(text)

    fields = _labeled_fields(text)
    title, company, location = fields["title"], fields["company"], fields["location"]

    if not title:
        first_line = text.split("\n", 1)[0].strip()
        m = AT_SPLIT_RE.match(first_line)
        if m:
            title = m.group(1).strip()
            if not company:
                company = m.group(2).strip()
        elif first_line and len(first_line) < 100 and not first_line.startswith("http"):
            title = first_line

    if not location and WORK_ARRANGEMENT_RE.search(text):
        location = "Hybrid" if result.job_type == "Hybrid" else "Remote"

    result.title = title
    result.company = company
    result.location = location or DEFAULT_LOCATION

    desc = _clean_description(text, apply_url, apply_email, standalone_email)
    if desc:
        result.description = parse_sections(desc)

    result.suggested_hashtags = suggest_hashtags(
        title=result.title, job_type=result.job_type, company=result.company,
    )
    log.debug(
        "Extracted title=%r company=%r location=%r type=%r apply=%r",
        result.title, result.company, result.location, result.job_type, result.apply_link,
    )
    return result
