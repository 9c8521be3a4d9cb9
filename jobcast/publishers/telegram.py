"""Telegram channel publisher (Bot API, HTML parse mode)."""
from __future__ import annotations

import requests

from jobcast.log import get_logger
from jobcast.models import PostResult
from jobcast.publishers.base import PublishError, Publisher
from jobcast.retry import retry

log = get_logger(__name__)

API_BASE = "https://api.telegram.org"
CAPTION_LIMIT = 1024

_TRANSIENT = (requests.ConnectionError, requests.Timeout)


class TelegramClient(Publisher):
    name = "telegram"

    def __init__(self, bot_token: str, channel_id: str, *, session: requests.Session | None = None) -> None:
        self.api_url = f"{API_BASE}/bot{bot_token}"
        self.channel_id = channel_id
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls, env_getter) -> "TelegramClient":
        return cls(env_getter("TELEGRAM_BOT_TOKEN"), env_getter("TELEGRAM_CHANNEL_ID"))

    @retry(max_attempts=3, base_delay=2.0, retryable=_TRANSIENT)
    def _call(self, method: str, *, data: dict, files: dict | None = None) -> str:
        if files:
            r = self.session.post(f"{self.api_url}/{method}", data=data, files=files, timeout=60)
        else:
            r = self.session.post(f"{self.api_url}/{method}", json=data, timeout=20)
        body = r.json()
        if not body.get("ok"):
            raise PublishError(body.get("description") or f"{method} failed ({r.status_code})")
        return str(body["result"]["message_id"])

    def _send_text(self, text: str) -> str:
        return self._call(
            "sendMessage",
            data={
                "chat_id": self.channel_id,
                "text": text,
                "parse_mode": "HTML",
                "disable_web_page_preview": False,
            },
        )

    def _send_photo(self, image: bytes, caption: str | None) -> str:
        data = {"chat_id": self.channel_id}
        if caption:
            data.update({"caption": caption, "parse_mode": "HTML"})
        return self._call("sendPhoto", data=data, files={"photo": ("image.png", image, "image/png")})

    def post(self, message: str, image: bytes | None = None) -> PostResult:
        try:
            if not image:
                return PostResult(success=True, ids=[self._send_text(message)])
            if len(message) <= CAPTION_LIMIT:
                return PostResult(success=True, ids=[self._send_photo(image, message)])
            # Captions are capped, so long posts go out as photo then text.
            ids = [self._send_photo(image, None), self._send_text(message)]
            return PostResult(success=True, ids=ids)
        except (PublishError, requests.RequestException, KeyError, ValueError) as exc:
            log.error("Telegram posting error: %s", exc)
            return PostResult(success=False, error=str(exc)[:300])
