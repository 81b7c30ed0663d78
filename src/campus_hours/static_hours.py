"""Static fallback hours, used when live extraction yields nothing.

Schema: entity id -> weekday name -> list of (label, start, end) rows.
Weekday names are lowercase English; the "default" key covers every weekday
without its own list. The table is frozen at load time.
"""

import json
from collections.abc import Iterable, Mapping
from datetime import date
from pathlib import Path
from types import MappingProxyType

from pydantic import TypeAdapter, ValidationError

from campus_hours.errors import ConfigurationError
from campus_hours.logging import get_logger
from campus_hours.models import RawScheduleEntry

log = get_logger(__name__)

WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)
DEFAULT_KEY = "default"

_TABLE_ADAPTER = TypeAdapter(dict[str, dict[str, list[tuple[str, str, str]]]])


def _three_meals(breakfast, lunch, dinner):
    return [("Breakfast", *breakfast), ("Lunch", *lunch), ("Dinner", *dinner)]


DEFAULT_STATIC_HOURS: dict[str, dict[str, list[tuple[str, str, str]]]] = {
    # Residential
    "BruinCafe": {DEFAULT_KEY: _three_meals(("7:00 AM", "10:00 AM"), ("11:00 AM", "4:00 PM"), ("5:00 PM", "9:00 PM"))},
    "BruinPlate": {DEFAULT_KEY: _three_meals(("7:00 AM", "9:00 AM"), ("11:00 AM", "2:00 PM"), ("5:00 PM", "9:00 PM"))},
    "Cafe1919": {DEFAULT_KEY: [("Lunch", "11:00 AM", "4:00 PM"), ("Dinner", "5:00 PM", "9:00 PM")]},
    "DeNeveDining": {DEFAULT_KEY: _three_meals(("7:00 AM", "10:00 AM"), ("11:00 AM", "2:00 PM"), ("5:00 PM", "9:00 PM"))},
    "EpicuriaAtAckerman": {DEFAULT_KEY: [("Lunch", "11:00 AM", "4:00 PM"), ("Dinner", "5:00 PM", "9:00 PM")]},
    "EpicuriaAtCovel": {DEFAULT_KEY: [("Lunch", "11:00 AM", "2:00 PM"), ("Dinner", "5:00 PM", "9:00 PM")]},
    "FEASTAtRieber": {DEFAULT_KEY: [("Lunch", "11:00 AM", "2:00 PM"), ("Dinner", "5:00 PM", "9:00 PM")]},
    "Rendezvous": {DEFAULT_KEY: [("Lunch", "11:00 AM", "3:00 PM"), ("Dinner", "5:00 PM", "9:00 PM")]},
    "TheDrey": {DEFAULT_KEY: [("Lunch", "11:00 AM", "3:00 PM"), ("Dinner", "5:00 PM", "9:00 PM")]},
    "TheStudyAtHedrick": {DEFAULT_KEY: _three_meals(("7:00 AM", "10:00 AM"), ("11:00 AM", "3:00 PM"), ("5:00 PM", "9:00 PM"))},
    # Campus retail (single unlabeled window)
    "LollicupFresh": {DEFAULT_KEY: [("", "8:00 AM", "7:00 PM")]},
    "WetzelsPretzels": {DEFAULT_KEY: [("", "8:00 AM", "7:00 PM")]},
    "Sweetspot": {DEFAULT_KEY: [("", "8:00 AM", "6:00 PM")]},
    "PandaExpress": {DEFAULT_KEY: [("", "10:00 AM", "7:00 PM")]},
    "Rubios": {DEFAULT_KEY: [("", "10:00 AM", "7:00 PM")]},
    "VeggieGrill": {DEFAULT_KEY: [("", "10:00 AM", "8:00 PM")]},
    "EpicuriaAck": {DEFAULT_KEY: [("", "10:00 AM", "7:00 PM")]},
    "CORE": {DEFAULT_KEY: [("", "7:00 AM", "10:00 PM")]},
    "JambaBlendid": {DEFAULT_KEY: [("", "8:00 AM", "8:00 PM")]},
    "KerckhoffCoffee": {DEFAULT_KEY: [("", "7:00 AM", "9:00 PM")]},
    "NorthernLights": {DEFAULT_KEY: [("", "7:00 AM", "8:00 PM")]},
    "Cafe451": {DEFAULT_KEY: [("", "8:00 AM", "5:00 PM")]},
    "LuValleCommons": {DEFAULT_KEY: [("", "7:00 AM", "7:00 PM")]},
    "CourtOfSciences": {DEFAULT_KEY: [("", "7:00 AM", "7:00 PM")]},
    "MusicCafe": {DEFAULT_KEY: [("", "8:00 AM", "5:00 PM")]},
    "SouthCampusFood": {DEFAULT_KEY: [("", "7:00 AM", "3:00 PM")]},
    # Libraries: main building hours when the weekly calendar is unreachable
    "powell": {DEFAULT_KEY: [("Hours", "10:00", "16:00")]},
}


def weekday_name(day: date) -> str:
    """Lowercase English weekday of a date ("tuesday")."""
    if not isinstance(day, date):
        raise TypeError(f"day must be a date, got {type(day).__name__}")
    return WEEKDAYS[day.weekday()]


class StaticScheduleTable:
    """Immutable per-entity, per-weekday hours rows.

    Args:
        table: entity id -> weekday name or "default" -> (label, start, end) rows.

    Raises:
        ConfigurationError: If the table does not match the schema.
    """

    def __init__(self, table: Mapping[str, Mapping[str, Iterable[Iterable[str]]]]) -> None:
        try:
            validated = _TABLE_ADAPTER.validate_python(
                {eid: {day: [tuple(row) for row in rows] for day, rows in days.items()} for eid, days in table.items()}
            )
        except (ValidationError, AttributeError, TypeError) as e:
            raise ConfigurationError(f"Invalid static hours table: {e}") from e

        frozen: dict[str, Mapping[str, tuple[RawScheduleEntry, ...]]] = {}
        for entity_id, days in validated.items():
            unknown = set(days) - set(WEEKDAYS) - {DEFAULT_KEY}
            if unknown:
                raise ConfigurationError(
                    f"Static hours for {entity_id!r} use unknown day keys {sorted(unknown)}"
                )
            frozen[entity_id] = MappingProxyType(
                {
                    day: tuple(
                        RawScheduleEntry(label=label, start_text=start, end_text=end)
                        for label, start, end in rows
                    )
                    for day, rows in days.items()
                }
            )
        self._table = MappingProxyType(frozen)

    @classmethod
    def default(cls) -> "StaticScheduleTable":
        return cls(DEFAULT_STATIC_HOURS)

    @classmethod
    def empty(cls) -> "StaticScheduleTable":
        return cls({})

    @classmethod
    def from_json_file(cls, path: str | Path) -> "StaticScheduleTable":
        """Load a table from a JSON file using the module schema.

        Raises:
            ConfigurationError: If the file can't be read or parsed.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read static hours file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Static hours file {path} must hold a JSON object")

        table = cls(data)
        log.info("static_hours_loaded", path=str(path), entities=len(table))
        return table

    def __contains__(self, entity_id: str) -> bool:
        return entity_id in self._table

    def __len__(self) -> int:
        return len(self._table)

    def entity_ids(self) -> tuple[str, ...]:
        return tuple(self._table)

    def entries_for(self, entity_id: str, day: date) -> tuple[RawScheduleEntry, ...]:
        """Rows for the entity on the weekday of ``day``; empty when unknown."""
        days = self._table.get(entity_id)
        if days is None:
            return ()
        weekday = weekday_name(day)
        if weekday in days:
            return days[weekday]
        return days.get(DEFAULT_KEY, ())
