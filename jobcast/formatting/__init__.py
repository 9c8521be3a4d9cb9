"""Text formatting and message composition for job posts."""
from .apply import RenderStyle, format_apply_section
from .compose import (
    Channel,
    compose_chat_message,
    compose_concise_chat,
    compose_concise_twitter,
    compose_message,
    compose_twitter_message,
)
from .extract import extract_job
from .hashtags import generate_hashtags, suggest_hashtags
from .sections import parse_sections, strip_metadata
from .thread import evaluate, split_into_thread
from .validate import validate_job

__all__ = [
    "Channel", "RenderStyle",
    "compose_chat_message", "compose_concise_chat", "compose_concise_twitter",
    "compose_message", "compose_twitter_message",
    "evaluate", "extract_job", "format_apply_section", "generate_hashtags",
    "parse_sections", "split_into_thread", "strip_metadata", "suggest_hashtags",
    "validate_job",
]
