"""Reorganise free-form job descriptions under canonical section headings.

Descriptions arrive as loosely structured prose: scraped paragraphs, pasted
postings, operator input. ``parse_sections`` detects heading-like phrases at
line starts and re-renders the text in a fixed order:

    About the role / Responsibilities / Requirements / Benefits / (other)

Text that carries no recognisable heading is returned as-is (trimmed); no
structure is invented. ``strip_metadata`` removes the date stamps and banner
lines that scraped descriptions tend to carry before parsing.
"""
from __future__ import annotations

import re
from typing import NamedTuple

from jobcast.log import get_logger

log = get_logger(__name__)

SECTION_ORDER: tuple[str, ...] = ("about", "responsibilities", "requirements", "benefits", "other")

SECTION_LABELS: dict[str, str] = {
    "about": "About the role",
    "responsibilities": "Responsibilities",
    "requirements": "Requirements",
    "benefits": "Benefits",
    "other": "Other",
}

_HEADING_FLAGS = re.IGNORECASE | re.MULTILINE
# A heading is a synonym followed by a colon or by the end of its line.
_HEADING_END = r"[^\S\n]*(?::|$)[^\S\n]*"

# (section key, heading pattern). Evaluated in order; add synonyms here.
SECTION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "about",
        re.compile(
            r"^(?:about\s+(?:the\s+)?role|overview|summary|introduction|the\s+role|role\s+summary)" + _HEADING_END,
            _HEADING_FLAGS,
        ),
    ),
    (
        "responsibilities",
        re.compile(
            r"^(?:responsibilities|key\s+responsibilities|what\s+you(?:'ll|\s+will)?\s+do|duties"
            r"|key\s+duties|your\s+role)" + _HEADING_END,
            _HEADING_FLAGS,
        ),
    ),
    (
        "requirements",
        re.compile(
            r"^(?:requirements|qualifications|qualification\s*(?:&|and)\s*experience"
            r"|what\s+we(?:'re|\s+are)?\s+looking\s+for|must\s+have|must\s+haves|skills\s+required"
            r"|you\s+have)" + _HEADING_END,
            _HEADING_FLAGS,
        ),
    ),
    (
        "benefits",
        re.compile(
            r"^(?:benefits|perks|what\s+we\s+offer|compensation|we\s+offer|our\s+benefits)" + _HEADING_END,
            _HEADING_FLAGS,
        ),
    ),
)

_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")
_ABOUT_LABEL = re.compile(r"about\s+the\s+role:", re.IGNORECASE)


class _Heading(NamedTuple):
    key: str
    start: int
    end: int


def _find_headings(text: str) -> list[_Heading]:
    found = [
        _Heading(key, m.start(), m.end())
        for key, pattern in SECTION_PATTERNS
        for m in pattern.finditer(text)
    ]
    found.sort(key=lambda h: h.start)

    kept: list[_Heading] = []
    for h in found:
        # first match wins when two patterns claim the same span
        if any(h.start < k.end and h.end > k.start for k in kept):
            continue
        kept.append(h)
    return kept


def split_sections(text: str) -> dict[str, list[str]]:
    """Map each section key to its paragraphs; empty when no heading is found."""
    headings = _find_headings(text)
    if not headings:
        return {}

    sections: dict[str, list[str]] = {key: [] for key in SECTION_ORDER}
    for i, h in enumerate(headings):
        end = headings[i + 1].start if i + 1 < len(headings) else len(text)
        content = text[h.end:end].strip()
        if content:
            sections[h.key].append(content)

    before = text[: headings[0].start].strip()
    if before:
        sections["other"].append(before)
    return sections


def render_sections(sections: dict[str, list[str]]) -> str:
    parts: list[str] = []
    for key in SECTION_ORDER:
        contents = sections.get(key) or []
        if not contents:
            continue
        body = "\n\n".join(contents)
        if key == "other":
            parts.append(body)
        else:
            parts.append(f"{SECTION_LABELS[key]}:\n{body}")
    return _EXTRA_BLANK_LINES.sub("\n\n", "\n\n".join(parts)).strip()


def parse_sections(raw: str) -> str:
    """Render *raw* under canonical section labels, or return it trimmed when unstructured."""
    trimmed = raw.strip()
    if not trimmed:
        return raw

    sections = split_sections(trimmed)
    if not sections:
        return trimmed

    rendered = render_sections(sections)
    log.debug(
        "Parsed description into sections: %s",
        ", ".join(k for k in SECTION_ORDER if sections.get(k)),
    )
    return rendered or raw


def has_about_section(parsed: str) -> bool:
    return bool(_ABOUT_LABEL.search(parsed))


def ensure_about_section(parsed: str, company: str, title: str) -> str:
    """Prepend a one-line About paragraph when the description has none."""
    if has_about_section(parsed):
        return parsed
    fallback = f"About the role:\n{company} is hiring a {title}."
    if not parsed.strip():
        return fallback
    return f"{fallback}\n\n{parsed}"


# ── Metadata stripping ───────────────────────────────────────────────────

_MONTHS_FULL = (
    "January|February|March|April|May|June|July|August|September|October|November|December"
)

# Applied in this order; later passes see the output of earlier ones.
METADATA_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*,?\s*\d{4}\b", re.IGNORECASE),
    re.compile(rf"\b(?:{_MONTHS_FULL}),?\s*\d{{4}}\b", re.IGNORECASE),
    # case-sensitive so the verb "may" survives
    re.compile(rf"\b(?:{_MONTHS_FULL})\b,?[^\S\n]*"),
    re.compile(r"\bPosted:[^\n]*", re.IGNORECASE),
    re.compile(r"\bDeadline:[^\n]*", re.IGNORECASE),
    re.compile(
        r"\b[A-Za-z][A-Za-z ]*?[^\S\n]*\|[^\S\n]*(?:Remote|Full Time|Part Time|Contract|Hybrid)[^\S\n]*Jobs?\b",
        re.IGNORECASE,
    ),
)


def strip_metadata(text: str) -> str:
    """Remove date stamps, Posted/Deadline lines and "X | Remote Jobs" banners."""
    out = text
    for pattern in METADATA_PATTERNS:
        out = pattern.sub("", out)
    return _EXTRA_BLANK_LINES.sub("\n\n", out).strip()
