"""ScheduleStore - normalized service windows per entity per day.

Resolution order for (entity, day):
  1. extracted entries for that day, when the page had any for the entity
  2. the static table row list for the day's weekday
  3. nothing: an empty schedule, meaning closed all day

Windows are anchored to the day's midnight in the campus time zone and
returned sorted by start, which the status resolver relies on.
"""

from collections.abc import Mapping, Sequence
from datetime import date, datetime, time, timedelta
from types import MappingProxyType
from zoneinfo import ZoneInfo

from campus_hours.extract import HoursExtractor
from campus_hours.logging import get_logger
from campus_hours.models import DaySchedule, RawScheduleEntry, ScheduleSource, ServiceWindow
from campus_hours.normalize import EntityMatcher, join_to_ids
from campus_hours.static_hours import StaticScheduleTable
from campus_hours.time_range import Closed, ParseFailure, ParsedRange, parse_pair

log = get_logger(__name__)

CLOSED_LABEL = "closed"


def anchor(day: date, minutes: int, day_offset: int, tz: ZoneInfo) -> datetime:
    """Wall-clock instant ``minutes`` after midnight of ``day + day_offset``."""
    hour, minute = divmod(minutes, 60)
    return datetime.combine(day + timedelta(days=day_offset), time(hour, minute), tzinfo=tz)


def window_from_range(day: date, parsed: ParsedRange, label: str | None, tz: ZoneInfo) -> ServiceWindow:
    return ServiceWindow(
        start=anchor(day, parsed.start_minutes, parsed.start_day_offset, tz),
        end=anchor(day, parsed.end_minutes, parsed.end_day_offset, tz),
        label=label or None,
    )


def _check_day(day: object) -> None:
    if isinstance(day, datetime) or not isinstance(day, date):
        raise TypeError(f"day must be a date, got {type(day).__name__}")


class ScheduleStore:
    """Read-only view over extraction results and the static fallback table.

    Args:
        static_table: Fallback hours.
        extracted: day -> entity id -> raw entries read from markup.
        tz: Campus time zone (name or ZoneInfo).
    """

    def __init__(
        self,
        static_table: StaticScheduleTable,
        extracted: Mapping[date, Mapping[str, Sequence[RawScheduleEntry]]] | None = None,
        tz: ZoneInfo | str = "America/Los_Angeles",
    ) -> None:
        self.static_table = static_table
        self.tz = tz if isinstance(tz, ZoneInfo) else ZoneInfo(tz)
        self._extracted = MappingProxyType(
            {
                day: MappingProxyType({eid: tuple(entries) for eid, entries in by_id.items()})
                for day, by_id in (extracted or {}).items()
            }
        )

    @classmethod
    def from_markup(
        cls,
        pages: Mapping[date, Sequence[str]],
        static_table: StaticScheduleTable,
        matcher: EntityMatcher,
        extractor: HoursExtractor | None = None,
        tz: ZoneInfo | str = "America/Los_Angeles",
    ) -> "ScheduleStore":
        """Extract every page, join names to ids and build a store.

        Args:
            pages: day -> markup documents describing that day. Earlier
                documents win when two list the same entity.
            static_table: Fallback hours.
            matcher: Name key -> entity id join.
            extractor: Defaults to HoursExtractor().
            tz: Campus time zone.
        """
        extractor = extractor or HoursExtractor()
        extracted: dict[date, dict[str, list[RawScheduleEntry]]] = {}
        for day, documents in pages.items():
            by_id = extracted.setdefault(day, {})
            for markup in documents:
                joined = join_to_ids(extractor.extract(markup, day), matcher)
                for entity_id, entries in joined.items():
                    by_id.setdefault(entity_id, entries)
        return cls(static_table, extracted, tz=tz)

    def extracted_entries(self, entity_id: str, day: date) -> tuple[RawScheduleEntry, ...]:
        return self._extracted.get(day, {}).get(entity_id, ())

    def windows_for(self, entity_id: str, day: date) -> DaySchedule:
        """Normalized windows for ``entity_id`` on ``day``, sorted by start.

        Raises:
            TypeError: If day is not a date (datetimes are rejected too).
        """
        _check_day(day)

        entries = self.extracted_entries(entity_id, day)
        source = ScheduleSource.EXTRACTED
        if not entries:
            entries = self.static_table.entries_for(entity_id, day)
            source = ScheduleSource.STATIC if entries else ScheduleSource.NONE
            if entries:
                log.debug("static_fallback_used", entity_id=entity_id, day=day.isoformat())

        windows: list[ServiceWindow] = []
        unparsed: list[RawScheduleEntry] = []
        for entry in entries:
            if entry.label.strip().lower() == CLOSED_LABEL:
                continue
            result = parse_pair(entry.start_text, entry.end_text)
            if isinstance(result, Closed):
                continue
            if isinstance(result, ParseFailure):
                log.warning(
                    "entry_parse_failed",
                    entity_id=entity_id,
                    day=day.isoformat(),
                    label=entry.label,
                    text=result.text,
                    reason=result.reason,
                )
                unparsed.append(entry)
                continue
            windows.append(window_from_range(day, result, entry.label, self.tz))

        windows.sort(key=lambda w: w.start)
        return DaySchedule(
            entity_id=entity_id,
            day=day,
            windows=tuple(windows),
            source=source,
            unparsed=tuple(unparsed),
        )
