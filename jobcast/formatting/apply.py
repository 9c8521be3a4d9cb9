"""Render the "how to apply" paragraph for each channel."""
from __future__ import annotations

import enum
import html
import re

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

# Job-detail pages on the aggregator we scrape; linking back to them adds nothing.
AGGREGATOR_JOB_PAGE_RE = re.compile(r"myjobmag\.com/job(?:/|$)", re.IGNORECASE)

EMAIL_APPLY_TEXT = "Interested and qualified candidates should send their CVs to: {email}"
ORIGINAL_LISTING_TEXT = "Interested and qualified? Apply via the original listing."


class RenderStyle(enum.Enum):
    PLAIN = "plain"  # X/Twitter: no markup, bare URLs
    RICH = "rich"  # Telegram HTML parse mode


def is_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value.strip()))


def is_email_apply_link(apply_link: str) -> bool:
    val = apply_link.strip()
    if not val:
        return False
    return val.startswith("mailto:") or is_email(val)


def display_email(apply_link: str) -> str:
    val = apply_link.strip()
    if val.startswith("mailto:"):
        return val[len("mailto:"):].strip()
    if is_email(val):
        return val
    return ""


def apply_href(apply_link: str) -> str:
    """Link target for *apply_link*: plain emails become ``mailto:`` links."""
    val = apply_link.strip()
    if not val:
        return val
    if val.startswith(("http://", "https://", "mailto:")):
        return val
    if is_email(val):
        return f"mailto:{val}"
    return val


def is_aggregator_job_page(url: str) -> bool:
    return bool(AGGREGATOR_JOB_PAGE_RE.search(url.strip()))


def format_apply_section(
    apply_link: str,
    style: RenderStyle,
    source_url: str | None = None,
) -> str:
    val = apply_link.strip()
    if not val:
        return ""

    if is_email_apply_link(val):
        email = display_email(val)
        if email:
            return EMAIL_APPLY_TEXT.format(email=email)

    if is_aggregator_job_page(val) or (source_url and val == source_url):
        return ORIGINAL_LISTING_TEXT

    if style is RenderStyle.RICH:
        href = html.escape(apply_href(val), quote=True)
        return f'Interested and qualified? <a href="{href}">Apply Now</a>.'
    return f"Interested and qualified? Apply Now.\n{val}"
