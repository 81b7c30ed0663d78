"""Pydantic models for normalized hours data.

Windows, day schedules and statuses are frozen and recomputed per query.
Dumping with ``model_dump(mode="json", by_alias=True)`` gives the camelCase
wire shape consumed by the list/detail views.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class ChangeType(str, Enum):
    """Kind of the next status transition."""

    OPEN = "open"
    CLOSE = "close"
    MEAL_SWITCH = "mealSwitch"


class ScheduleSource(str, Enum):
    """Where a day schedule's windows came from."""

    EXTRACTED = "extracted"
    STATIC = "static"
    NONE = "none"


class RawScheduleEntry(BaseModel):
    """Pre-parse hours text pulled from markup or a static table row."""

    model_config = _WIRE_CONFIG

    label: str
    start_text: str
    end_text: str = ""

    @property
    def text(self) -> str:
        """The entry as a single display string ("7:00 AM - 10:00 AM")."""
        if not self.end_text:
            return self.start_text
        return f"{self.start_text} - {self.end_text}"


class ServiceWindow(BaseModel):
    """A contiguous interval during which an entity is open."""

    model_config = _WIRE_CONFIG

    start: datetime
    end: datetime
    label: str | None = None  # "Breakfast", "Night Powell", None for retail

    @model_validator(mode="after")
    def _start_before_end(self) -> "ServiceWindow":
        if not self.start < self.end:
            raise ValueError(f"window start {self.start} is not before end {self.end}")
        return self

    def contains(self, instant: datetime) -> bool:
        """Closed interval test: start <= instant <= end."""
        return self.start <= instant <= self.end


class DaySchedule(BaseModel):
    """All service windows for one entity on one calendar day, sorted by start.

    ``unparsed`` keeps raw entries whose text could not be parsed so a view
    can still show the original string.
    """

    model_config = _WIRE_CONFIG

    entity_id: str
    day: date
    windows: tuple[ServiceWindow, ...] = ()
    source: ScheduleSource = ScheduleSource.NONE
    unparsed: tuple[RawScheduleEntry, ...] = ()

    @property
    def is_closed_all_day(self) -> bool:
        return not self.windows


class EntityStatus(BaseModel):
    """Open/closed state of an entity at an instant plus its next transition."""

    model_config = _WIRE_CONFIG

    entity_id: str
    open_now: bool
    current_label: str | None = None
    next_change_at: datetime | None = None
    next_change_type: ChangeType | None = None

    @property
    def closed_indefinitely(self) -> bool:
        """True when no opening was found within the look-ahead horizon."""
        return not self.open_now and self.next_change_at is None
