"""Small text helpers shared by the composers."""
from __future__ import annotations

import html


def truncate_at_word(text: str, max_chars: int) -> str:
    """Trim *text* to *max_chars*, cutting at the last space when one is past the halfway mark."""
    trimmed = text.strip()
    if len(trimmed) <= max_chars:
        return trimmed
    cut = trimmed[:max_chars]
    last_space = cut.rfind(" ")
    if last_space > max_chars * 0.5:
        return cut[:last_space].strip()
    return cut.strip()


def first_sentence(text: str, max_chars: int = 120) -> str:
    """Text up to the first ". " or newline (whichever comes first within *max_chars*)."""
    trimmed = text.strip()
    if not trimmed:
        return ""
    end = len(trimmed)
    period = trimmed.find(". ")
    newline = trimmed.find("\n")
    if 0 < period < max_chars:
        end = min(end, period + 1)
    if 0 < newline < max_chars:
        end = min(end, newline)
    return truncate_at_word(trimmed[:end], max_chars)


def hiring_intro(description: str, max_chars: int) -> str:
    """``"We're hiring! <first sentence>."`` paragraph, or "" when there is no sentence."""
    sentence = first_sentence(description, max_chars)
    if not sentence:
        return ""
    stop = "" if sentence.endswith(".") else "."
    return f"We're hiring! {sentence}{stop}"


def escape_html(text: str) -> str:
    """Escape &, < and > for Telegram's HTML parse mode."""
    return html.escape(text, quote=False)
