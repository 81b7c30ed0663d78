"""Campus hours engine.

Normalizes scraped and static hour descriptions for dining halls, retail
eateries and libraries into service windows, and answers whether a location
is open at an instant and when that next changes.
"""

from campus_hours.extract import HoursExtractor
from campus_hours.models import (
    ChangeType,
    DaySchedule,
    EntityStatus,
    RawScheduleEntry,
    ServiceWindow,
)
from campus_hours.normalize import NameMatcher, normalize_name
from campus_hours.service import HoursService
from campus_hours.static_hours import StaticScheduleTable
from campus_hours.status import StatusResolver
from campus_hours.store import ScheduleStore

__all__ = [
    "HoursService",
    "HoursExtractor",
    "NameMatcher",
    "normalize_name",
    "ScheduleStore",
    "StaticScheduleTable",
    "StatusResolver",
    "ServiceWindow",
    "DaySchedule",
    "EntityStatus",
    "ChangeType",
    "RawScheduleEntry",
]
