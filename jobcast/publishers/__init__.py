from .base import PublishError, Publisher
from .telegram import TelegramClient
from .twitter import TwitterClient, tweet_url

from jobcast.config import PostingLimits
from jobcast.log import get_logger

log = get_logger(__name__)

__all__ = [
    "PublishError", "Publisher", "TelegramClient", "TwitterClient",
    "get_publishers", "tweet_url",
]


def get_publishers(env_getter, limits: PostingLimits | None = None) -> dict[str, Publisher]:
    """Publishers whose credentials are present, keyed by platform name."""
    publishers: dict[str, Publisher] = {}

    twitter_keys = ("TWITTER_API_KEY", "TWITTER_API_SECRET", "TWITTER_ACCESS_TOKEN", "TWITTER_ACCESS_TOKEN_SECRET")
    if all(env_getter(k) for k in twitter_keys):
        publishers["twitter"] = TwitterClient.from_env(env_getter, limits)
        log.info("Registered publisher: X/Twitter")
    else:
        log.warning("Twitter credentials incomplete — X/Twitter posting disabled")

    if env_getter("TELEGRAM_BOT_TOKEN") and env_getter("TELEGRAM_CHANNEL_ID"):
        publishers["telegram"] = TelegramClient.from_env(env_getter)
        log.info("Registered publisher: Telegram")
    else:
        log.warning("Telegram credentials incomplete — Telegram posting disabled")

    return publishers
