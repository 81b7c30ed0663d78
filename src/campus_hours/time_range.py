"""Parse free-text hours ranges into minutes-of-day.

Accepted single times: "7:00 AM", "10:00am", "8am", "7 a.m.", "16:00", "9:30".
A range is two times joined by a hyphen, en dash, em dash or "to".
"24 Hours" is midnight to midnight.
"Closed" (any case) and the empty string mean closed all day.

When the end is not after the start on the same day, the end moves to the
next day ("10:00 PM - 2:00 AM" is a late-night window, not an error).
"""

import re

from pydantic import BaseModel, ConfigDict

MINUTES_PER_DAY = 24 * 60

_TWELVE_HOUR_RE = re.compile(
    r"^(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?\s*(?P<meridiem>[ap])\.?\s*m\.?$",
    re.IGNORECASE,
)
_TWENTY_FOUR_HOUR_RE = re.compile(r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})$")
_DASHES_RE = re.compile(r"\s*(?:[-\u2010-\u2015\u2212]|\bto\b)\s*", re.IGNORECASE)
_SPACES_RE = re.compile(r"\s+")
_ALL_DAY_RE = re.compile(r"^(?:open\s+)?24\s*(?:hours|hrs|h)$", re.IGNORECASE)


class ParsedRange(BaseModel):
    """A parsed range; end is on the following day when overnight is set."""

    model_config = ConfigDict(frozen=True)

    start_minutes: int
    end_minutes: int
    overnight: bool = False

    @property
    def start_day_offset(self) -> int:
        return 0

    @property
    def end_day_offset(self) -> int:
        return 1 if self.overnight else 0


class Closed(BaseModel):
    """The text says the entity is closed for the day."""

    model_config = ConfigDict(frozen=True)


class ParseFailure(BaseModel):
    """The text matched no known format; callers keep it for display."""

    model_config = ConfigDict(frozen=True)

    text: str
    reason: str


CLOSED = Closed()

ParseResult = ParsedRange | Closed | ParseFailure


def _clean(text: str) -> str:
    return _SPACES_RE.sub(" ", text).strip()


def is_closed_text(text: str) -> bool:
    """True for "" and any casing of "closed"."""
    return _clean(text).lower() in ("", "closed")


def parse_time(text: str) -> int | None:
    """Parse one time of day into minutes since midnight.

    Returns:
        Minutes in [0, 1440], where 1440 is "24:00" (end of day), or None if
        the text is not a time.
    """
    cleaned = _clean(text)

    match = _TWELVE_HOUR_RE.match(cleaned)
    if match:
        hour = int(match.group("hour"))
        minute = int(match.group("minute") or 0)
        if not (1 <= hour <= 12 and 0 <= minute <= 59):
            return None
        hour %= 12
        if match.group("meridiem").lower() == "p":
            hour += 12
        return hour * 60 + minute

    match = _TWENTY_FOUR_HOUR_RE.match(cleaned)
    if match:
        hour = int(match.group("hour"))
        minute = int(match.group("minute"))
        if hour == 24 and minute == 0:
            return MINUTES_PER_DAY
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            return None
        return hour * 60 + minute

    return None


def split_range(text: str) -> tuple[str, str] | None:
    """Split "<start> - <end>" into its two trimmed sides.

    Returns None unless the text has exactly one separator.
    """
    parts = _DASHES_RE.split(_clean(text))
    if len(parts) != 2:
        return None
    return parts[0].strip(), parts[1].strip()


def parse_pair(start_text: str, end_text: str) -> ParseResult:
    """Parse already-split start and end tokens.

    Args:
        start_text: Opening time, or "Closed".
        end_text: Closing time; may be empty when start_text is "Closed".
    """
    if is_closed_text(start_text) and is_closed_text(end_text):
        return CLOSED
    if not end_text and _ALL_DAY_RE.match(_clean(start_text)):
        return ParsedRange(start_minutes=0, end_minutes=0, overnight=True)

    original = f"{start_text} - {end_text}" if end_text else start_text
    start = parse_time(start_text)
    end = parse_time(end_text)
    if start is None or end is None:
        side = "start" if start is None else "end"
        if start is None and end is None:
            side = "start and end"
        return ParseFailure(text=original, reason=f"unrecognized {side} time")

    if start == MINUTES_PER_DAY:
        start = 0
    if end == MINUTES_PER_DAY:
        return ParsedRange(start_minutes=start, end_minutes=0, overnight=True)
    return ParsedRange(start_minutes=start, end_minutes=end, overnight=end <= start)


def parse(text: str) -> ParseResult:
    """Parse a full range string such as "7:00 AM - 10:00 AM" or "10:00-16:00"."""
    if is_closed_text(text):
        return CLOSED
    if _ALL_DAY_RE.match(_clean(text)):
        return parse_pair(text, "")

    sides = split_range(text)
    if sides is None:
        return ParseFailure(text=text, reason="expected '<start> - <end>'")
    return parse_pair(*sides)


def format_minutes(minutes: int, clock: str = "12h") -> str:
    """Render minutes since midnight as "7:05 PM" (12h) or "19:05" (24h)."""
    if clock not in ("12h", "24h"):
        raise ValueError(f"Unknown clock {clock!r}. Valid: ['12h', '24h']")

    hour, minute = divmod(minutes % MINUTES_PER_DAY, 60)
    if clock == "24h":
        return f"{hour:02d}:{minute:02d}"
    meridiem = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {meridiem}"
