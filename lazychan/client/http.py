"""HTTP fetch operations against a content provider's JSON API.

Thin wrapper over ``requests``: timeouts, bounded retries with exponential
backoff for transient failures, and a single ``FetchError`` for callers.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

import requests

from ..model import Board, Post, Thread, boards_from_json, posts_from_json, threads_from_json
from .providers import ChanProvider

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class FetchError(RuntimeError):
    """Network, HTTP-status or payload failure while fetching ``url``."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason


@dataclass(frozen=True)
class HttpConfig:
    timeout_sec: float = 10.0
    max_retries: int = 2
    backoff_base_sec: float = 0.5
    backoff_max_sec: float = 4.0
    user_agent: str = "lazychan"


class ChanClient:
    """Fetch boards, thread-list pages and threads for one provider."""

    def __init__(
        self,
        provider: ChanProvider,
        config: HttpConfig | None = None,
        session: Optional[requests.Session] = None,
        sleep=time.sleep,
    ) -> None:
        self.provider = provider
        self._cfg = config if config is not None else HttpConfig()
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self._cfg.user_agent})
        self._sleep = sleep

    def fetch_boards(self) -> list[Board]:
        url = self.provider.boards_endpoint()
        return self._decode(url, boards_from_json)

    def fetch_threads(self, board: str, page: int) -> list[Thread]:
        url = self.provider.threads_endpoint(board, page)
        return self._decode(url, threads_from_json)

    def fetch_thread(self, board: str, opening_post_id: int) -> list[Post]:
        url = self.provider.thread_endpoint(board, opening_post_id)
        return self._decode(url, posts_from_json)

    def _decode(self, url: str, decoder):
        payload = self.get_json(url)
        try:
            return decoder(payload)
        except (ValueError, TypeError) as exc:
            raise FetchError(url, f"unexpected payload: {exc}") from exc

    def get_json(self, url: str) -> object:
        """GET ``url`` and decode its JSON body, retrying transient failures."""
        for attempt in range(self._cfg.max_retries + 1):
            try:
                resp = self._session.get(url, timeout=self._cfg.timeout_sec)
                if resp.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"transient status={resp.status_code}",
                        response=resp,
                    )
                resp.raise_for_status()
            except requests.RequestException as exc:
                status = getattr(getattr(exc, "response", None), "status_code", None)
                retryable = status is None or status in RETRYABLE_STATUS_CODES
                if not retryable or attempt >= self._cfg.max_retries:
                    logger.error("GET failed: url=%s err=%s", url, exc)
                    raise FetchError(url, str(exc) or type(exc).__name__) from exc
                sleep_sec = self._compute_backoff(attempt)
                logger.warning(
                    "GET failed (retrying): attempt=%s url=%s sleep=%.2fs err=%s",
                    attempt + 1,
                    url,
                    sleep_sec,
                    exc,
                )
                self._sleep(sleep_sec)
                continue
            try:
                return resp.json()
            except ValueError as exc:
                logger.error("invalid JSON: url=%s err=%s", url, exc)
                raise FetchError(url, "invalid JSON response") from exc
        raise FetchError(url, "no attempts made")

    def _compute_backoff(self, attempt: int) -> float:
        return min(self._cfg.backoff_base_sec * (2**attempt), self._cfg.backoff_max_sec)


__all__ = ["ChanClient", "FetchError", "HttpConfig", "RETRYABLE_STATUS_CODES"]
