"""Split long posts into numbered thread chunks."""
from __future__ import annotations

import math
import re

from jobcast.config import PostingLimits
from jobcast.log import get_logger
from jobcast.models import CharacterStatus

log = get_logger(__name__)

_SUFFIX_RE = re.compile(r"\s*\((\d+)/\d+\)$")


def _suffix(index: int, total: int) -> str:
    return f" ({index}/{total})"


def _break_point(remaining: str, max_length: int) -> int:
    """Index to cut *remaining* at: sentence end, else word boundary, else hard cut."""
    sentence_end = remaining.rfind(". ", 0, max_length + 1)
    if sentence_end > max_length * 0.5:
        return sentence_end + 1
    word_break = remaining.rfind(" ", 0, max_length + 1)
    if word_break > max_length * 0.5:
        return word_break
    return max_length


def _split(text: str, char_limit: int, estimate: int) -> list[str]:
    chunks: list[str] = []
    remaining = text
    while remaining:
        suffix = _suffix(len(chunks) + 1, estimate)
        max_length = char_limit - len(suffix)
        if max_length <= 0:
            raise ValueError(f"char_limit {char_limit} cannot hold a thread suffix")

        if len(remaining) <= max_length:
            if not chunks and len(remaining) <= char_limit:
                chunks.append(remaining)
            else:
                chunks.append(remaining + suffix)
            break

        cut = _break_point(remaining, max_length)
        chunks.append(remaining[:cut].strip() + suffix)
        remaining = remaining[cut:].strip()
    return chunks


def _renumber(chunks: list[str]) -> list[str]:
    total = len(chunks)
    return [_SUFFIX_RE.sub(_suffix(i, total), chunk, count=1) for i, chunk in enumerate(chunks, 1)]


def split_into_thread(text: str, limits: PostingLimits) -> list[str]:
    """Chunks of at most ``limits.char_limit`` chars, each suffixed " (i/n)" when threaded."""
    if len(text) <= limits.char_limit:
        return [text]
    # leading or trailing whitespace alone must not become a chunk
    text = text.strip()
    if len(text) <= limits.char_limit:
        return [text]

    estimate = math.ceil(len(text) / limits.thread_chunk_target)
    chunks = _split(text, limits.char_limit, estimate)
    # A total with more digits than the estimate would lengthen every suffix.
    while len(str(len(chunks))) > len(str(estimate)):
        estimate = len(chunks)
        chunks = _split(text, limits.char_limit, estimate)

    log.debug("Split %d chars into %d chunk(s) (estimated %d)", len(text), len(chunks), estimate)
    return _renumber(chunks)


def evaluate(text: str, limits: PostingLimits) -> CharacterStatus:
    count = len(text)
    over = count > limits.char_limit
    return CharacterStatus(
        count=count,
        remaining=limits.char_limit - count,
        is_over_limit=over,
        needs_thread=over,
        thread_chunk_count=len(split_into_thread(text, limits)) if over else 1,
        char_limit=limits.char_limit,
    )
