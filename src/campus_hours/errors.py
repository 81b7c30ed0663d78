"""Error hierarchy for the campus hours engine.

Only I/O and configuration problems are exceptions. Data-quality issues
(unparseable time text, empty extraction, no opening within the horizon)
are returned as values and never raised.

The fetch errors split transient from permanent failures so tenacity retry
decorators can classify them:
    @retry(retry=retry_if_exception_type(TransientFetchError), stop=stop_after_attempt(3))
    def fetch(url: str) -> str:
        ...
"""


class CampusHoursError(Exception):
    """Base exception for all campus hours errors."""

    pass


class FetchError(CampusHoursError):
    """Markup could not be obtained from the hours page."""

    pass


class TransientFetchError(FetchError):
    """Temporary failure that may succeed on retry.

    Examples: connection reset, read timeout, 502/503/504 responses.
    """

    pass


class RateLimitError(TransientFetchError):
    """HTTP 429 - retried like any transient failure but worth logging apart."""

    pass


class PermanentFetchError(FetchError):
    """Failure that won't succeed on retry (404, 410, malformed URL)."""

    pass


class ConfigurationError(CampusHoursError):
    """Static hours file is missing, unreadable or does not match the schema."""

    pass
