"""Compose channel-ready job posts.

Two channels, two shapes:

* X/Twitter gets plain text with the apply URL spelled out and hashtags at
  the end.
* Telegram gets HTML (``parse_mode=HTML``): bold header and labels, an
  ``Apply Now`` link, no hashtags.

The full-form composers serve operator-entered jobs (``JobRecord``). The
concise composers serve scraped jobs posted automatically (``ScrapedJob``):
their descriptions are stripped of site metadata, always open with an
"About the role" paragraph, and on X are cut to fit a single post.
"""
from __future__ import annotations

import enum
from typing import Sequence

from jobcast.config import PostingLimits
from jobcast.formatting.apply import RenderStyle, format_apply_section
from jobcast.formatting.hashtags import as_hashtag_string, generate_hashtags
from jobcast.formatting.sections import ensure_about_section, parse_sections, strip_metadata
from jobcast.formatting.text import escape_html, hiring_intro, truncate_at_word
from jobcast.models import JobRecord, ScrapedJob

FULL_INTRO_CHARS = 100
CONCISE_INTRO_CHARS = 80
RESERVED_OVERHEAD = 30
MIN_DESCRIPTION_BUDGET = 80
PARAGRAPH_BREAK = "\n\n"


class Channel(enum.Enum):
    TWITTER = "twitter"
    TELEGRAM = "telegram"


def _blocks(*parts: str) -> str:
    return PARAGRAPH_BREAK.join(p.strip() for p in parts if p and p.strip())


def _header(title: str, company: str) -> str:
    return f"{title} at {company}" if company.strip() else title


def split_location_and_type(location: str, job_type: str) -> tuple[str, str]:
    """Fold a work arrangement ("Remote | Full Time") into the location line."""
    loc = location.strip()
    kind = job_type.strip()
    if not kind:
        return loc, ""
    parts = [p.strip() for p in kind.split("|") if p.strip()]
    if len(parts) >= 2:
        arrangement, employment = parts[0], " | ".join(parts[1:])
        return (f"{loc} | {arrangement}" if loc else arrangement), employment
    return (f"{loc} | {kind}" if loc else kind), ""


# ── Full form (operator posts) ───────────────────────────────────────────


def compose_twitter_message(job: JobRecord) -> str:
    location_line, type_line = split_location_and_type(job.location, job.job_type)
    header = "\n".join(line for line in (_header(job.title, job.company), location_line, type_line) if line)
    return _blocks(
        header,
        hiring_intro(job.description, FULL_INTRO_CHARS),
        parse_sections(job.description),
        format_apply_section(job.apply_link, RenderStyle.PLAIN),
        as_hashtag_string(job.hashtags),
    )


def compose_chat_message(job: JobRecord) -> str:
    header = f"<b>{escape_html(_header(job.title, job.company))}</b>"
    meta = [
        f"<b>{label}:</b> {escape_html(value.strip())}"
        for label, value in (("Company", job.company), ("Location", job.location), ("Type", job.job_type))
        if value.strip()
    ]
    return _blocks(
        header,
        "\n".join(meta),
        escape_html(hiring_intro(job.description, FULL_INTRO_CHARS)),
        escape_html(parse_sections(job.description)),
        format_apply_section(job.apply_link, RenderStyle.RICH),
    )


# ── Concise form (automated posts of scraped jobs) ───────────────────────


def _concise_description(job: ScrapedJob) -> tuple[str, str]:
    """(sanitised raw description, parsed description with an About section)."""
    sanitized = strip_metadata(job.description)
    parsed = ensure_about_section(parse_sections(sanitized), job.company, job.title)
    return sanitized, parsed


def compose_concise_twitter(
    job: ScrapedJob,
    limits: PostingLimits | None = None,
    trending: Sequence[str] | None = None,
) -> str:
    limits = limits or PostingLimits.standard()
    header = _header(job.title, job.company)
    sanitized, parsed = _concise_description(job)
    intro = hiring_intro(sanitized, CONCISE_INTRO_CHARS)
    apply = format_apply_section(job.apply_url, RenderStyle.PLAIN, job.source_url)
    hashtags = as_hashtag_string(generate_hashtags(job, trending))

    # the intro is reserved with its paragraph break
    intro_len = len(intro) + len(PARAGRAPH_BREAK) if intro else 0
    reserved = len(header) + intro_len + len(apply) + len(hashtags) + RESERVED_OVERHEAD
    budget = max(MIN_DESCRIPTION_BUDGET, limits.char_limit - reserved)
    return _blocks(header, intro, truncate_at_word(parsed, budget), apply, hashtags)


def compose_concise_chat(job: ScrapedJob) -> str:
    sanitized, parsed = _concise_description(job)
    return _blocks(
        f"<b>{escape_html(_header(job.title, job.company))}</b>",
        escape_html(hiring_intro(sanitized, CONCISE_INTRO_CHARS)),
        escape_html(parsed),
        format_apply_section(job.apply_url, RenderStyle.RICH, job.source_url),
    )


def compose_message(
    job: JobRecord | ScrapedJob,
    channel: Channel,
    *,
    concise: bool = False,
    limits: PostingLimits | None = None,
    trending: Sequence[str] | None = None,
) -> str:
    """Dispatch to the composer for *channel*; ``concise`` expects a ScrapedJob."""
    if concise:
        if not isinstance(job, ScrapedJob):
            raise TypeError("concise posts are composed from ScrapedJob records")
        if channel is Channel.TWITTER:
            return compose_concise_twitter(job, limits, trending)
        return compose_concise_chat(job)

    if not isinstance(job, JobRecord):
        raise TypeError("full posts are composed from JobRecord records")
    if channel is Channel.TWITTER:
        return compose_twitter_message(job)
    return compose_chat_message(job)
