"""X/Twitter publisher: single posts or reply-chained threads."""
from __future__ import annotations

import requests
from requests_oauthlib import OAuth1Session

from jobcast.config import PostingLimits
from jobcast.formatting.thread import split_into_thread
from jobcast.log import get_logger
from jobcast.models import PostResult
from jobcast.publishers.base import PublishError, Publisher
from jobcast.retry import retry

log = get_logger(__name__)

TWEETS_URL = "https://api.twitter.com/2/tweets"
MEDIA_UPLOAD_URL = "https://upload.twitter.com/1.1/media/upload.json"

_TRANSIENT = (requests.ConnectionError, requests.Timeout)


def tweet_url(tweet_id: str) -> str:
    return f"https://twitter.com/i/web/status/{tweet_id}"


def _error_detail(r: requests.Response) -> str:
    try:
        data = r.json()
    except ValueError:
        return r.text[:200]
    return str(data.get("detail") or data.get("title") or data.get("errors") or data)[:200]


class TwitterClient(Publisher):
    name = "twitter"

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        access_token: str,
        access_secret: str,
        *,
        limits: PostingLimits | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.limits = limits or PostingLimits.standard()
        self.session = session or OAuth1Session(
            api_key,
            client_secret=api_secret,
            resource_owner_key=access_token,
            resource_owner_secret=access_secret,
        )

    @classmethod
    def from_env(cls, env_getter, limits: PostingLimits | None = None) -> "TwitterClient":
        return cls(
            env_getter("TWITTER_API_KEY"),
            env_getter("TWITTER_API_SECRET"),
            env_getter("TWITTER_ACCESS_TOKEN"),
            env_getter("TWITTER_ACCESS_TOKEN_SECRET"),
            limits=limits,
        )

    @retry(max_attempts=3, base_delay=2.0, retryable=_TRANSIENT)
    def _upload_media(self, image: bytes) -> str:
        r = self.session.post(MEDIA_UPLOAD_URL, files={"media": image}, timeout=60)
        if not r.ok:
            raise PublishError(f"media upload failed ({r.status_code}): {_error_detail(r)}")
        return str(r.json()["media_id_string"])

    @retry(max_attempts=3, base_delay=2.0, retryable=_TRANSIENT)
    def _create_tweet(self, payload: dict) -> str:
        r = self.session.post(TWEETS_URL, json=payload, timeout=20)
        if not r.ok:
            raise PublishError(f"tweet failed ({r.status_code}): {_error_detail(r)}")
        return str(r.json()["data"]["id"])

    def post(self, message: str, image: bytes | None = None) -> PostResult:
        tweet_ids: list[str] = []
        try:
            if len(message) <= self.limits.char_limit and not image:
                tweet_ids.append(self._create_tweet({"text": message}))
                return PostResult(success=True, ids=tweet_ids)

            media_id = self._upload_media(image) if image else None
            chunks = split_into_thread(message, self.limits)
            previous: str | None = None
            for i, chunk in enumerate(chunks):
                payload: dict = {"text": chunk}
                if previous:
                    payload["reply"] = {"in_reply_to_tweet_id": previous}
                if i == 0 and media_id:
                    payload["media"] = {"media_ids": [media_id]}
                previous = self._create_tweet(payload)
                tweet_ids.append(previous)
            log.info("Posted thread of %d tweet(s)", len(tweet_ids))
            return PostResult(success=True, ids=tweet_ids)
        except (PublishError, requests.RequestException, KeyError, ValueError) as exc:
            log.error("Twitter posting error: %s", exc)
            return PostResult(success=False, ids=tweet_ids, error=str(exc)[:300])
