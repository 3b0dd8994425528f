from __future__ import annotations

import logging
import time
from collections.abc import Callable

import httpx

logger = logging.getLogger(__name__)

DEFAULT_REMOTE_URL = "https://rentry.co/firehawk52/raw"

# Default User-Agent for HTTP requests - identifies the tool to the document host
DEFAULT_USER_AGENT = "marl/0.2 (Deezer ARL manager)"

_RETRY_STATUS_CODES = {429, 500, 502, 503, 504}


class FetchError(Exception):
    """The remote document could not be retrieved."""


class DocumentClient:
    """Fetches the raw markdown document that lists the ARLs.

    Transient failures (connection errors, 429 and 5xx responses) are retried
    with exponential backoff; anything else fails immediately with FetchError.
    """

    def __init__(
        self,
        *,
        url: str = DEFAULT_REMOTE_URL,
        timeout_s: float = 30.0,
        max_retries: int = 2,
        backoff_s: float = 0.6,
        sleep_fn: Callable[[float], None] = time.sleep,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._url = url
        self._client = httpx.Client(
            timeout=timeout_s,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        )
        self._max_retries = max_retries
        self._backoff_s = backoff_s
        self._sleep_fn = sleep_fn

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> DocumentClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_document(self) -> str:
        """Return the full document text.

        Raises:
            FetchError: If the document cannot be retrieved after all retries.
        """
        for attempt in range(self._max_retries + 1):
            try:
                resp = self._client.get(self._url)
            except httpx.RequestError as e:
                if attempt >= self._max_retries:
                    raise FetchError(f"Could not reach {self._url}: {e}") from e
                logger.debug(f"Request to {self._url} failed ({e}), retrying")
                self._sleep_fn(self._backoff_delay(attempt))
                continue

            if resp.status_code in _RETRY_STATUS_CODES and attempt < self._max_retries:
                delay = _retry_after_seconds(resp) or self._backoff_delay(attempt)
                logger.debug(f"Got HTTP {resp.status_code} from {self._url}, retrying in {delay:.1f}s")
                self._sleep_fn(delay)
                continue

            try:
                resp.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise FetchError(f"HTTP {resp.status_code} from {self._url}") from e

            logger.info(f"Fetched {len(resp.content)} bytes from {self._url}")
            return resp.text

        raise FetchError(f"HTTP request to {self._url} failed unexpectedly.")

    def _backoff_delay(self, attempt: int) -> float:
        # 0.6, 1.2, 2.4, 4.8... (capped)
        delay = self._backoff_s * (1 << attempt)
        return min(20.0, delay)


def _retry_after_seconds(resp: httpx.Response) -> float | None:
    raw = resp.headers.get("Retry-After")
    if not raw:
        return None
    raw = raw.strip()
    if raw.isdigit():
        return float(raw)
    return None
