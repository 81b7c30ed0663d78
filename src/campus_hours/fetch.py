"""HTTP fetch of raw hours markup for the host process.

The engine itself never does I/O. A host fetches pages with HoursFetcher and
hands the markup over; fetch_or_empty() turns any failure into "" so the
engine falls back to static hours.
"""

import requests
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from campus_hours.errors import (
    FetchError,
    PermanentFetchError,
    RateLimitError,
    TransientFetchError,
)
from campus_hours.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "campus-hours/0.1 (+https://github.com/campus-hours)",
    "Accept": "text/html,application/xhtml+xml,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


class HoursFetcher:
    """GET hours pages with retries on transient failures.

    Args:
        timeout: Per-request timeout in seconds.
        max_attempts: Attempts before a transient failure is given up on.
        session: requests.Session to reuse; one is created when omitted.
        wait: tenacity wait strategy between attempts.
    """

    def __init__(
        self,
        timeout: float = 20.0,
        max_attempts: int = 3,
        session: requests.Session | None = None,
        wait: wait_base | None = None,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self._retrying = Retrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait or wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(TransientFetchError),
            reraise=True,
        )

    def _get_once(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.timeout)
        except (requests.Timeout, requests.ConnectionError) as e:
            logger.warning("fetch_transient_error", url=url, error=str(e))
            raise TransientFetchError(f"Fetching {url} failed: {e}") from e
        except requests.RequestException as e:
            raise PermanentFetchError(f"Fetching {url} failed: {e}") from e

        status = response.status_code
        if status == 429:
            logger.warning("fetch_rate_limited", url=url)
            raise RateLimitError(f"Rate limited by {url}")
        if status >= 500:
            logger.warning("fetch_server_error", url=url, status=status)
            raise TransientFetchError(f"{url} returned {status}")
        if status >= 400:
            raise PermanentFetchError(f"{url} returned {status}")

        logger.debug("fetch_succeeded", url=url, status=status, length=len(response.text))
        return response.text

    def fetch(self, url: str) -> str:
        """Fetch markup, retrying transient failures.

        Raises:
            TransientFetchError: If every attempt failed transiently.
            PermanentFetchError: On 4xx responses or an invalid URL.
        """
        return self._retrying(self._get_once, url)

    def fetch_or_empty(self, url: str) -> str:
        """Fetch markup, or "" after logging when the page can't be had."""
        try:
            return self.fetch(url)
        except FetchError as e:
            logger.error("fetch_failed", url=url, error=str(e), type=type(e).__name__)
            return ""
