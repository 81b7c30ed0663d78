"""HoursService - wires config, directory, extraction and resolution together.

Each call builds a fresh ScheduleStore from the markup it is given; nothing
is cached between calls.
"""

from collections.abc import Mapping, Sequence
from datetime import date, datetime, timedelta

from campus_hours.config import CampusHoursConfig, get_config
from campus_hours.entities import EntityDirectory, EntityKind
from campus_hours.extract import HoursExtractor
from campus_hours.fetch import HoursFetcher
from campus_hours.logging import get_logger
from campus_hours.models import DaySchedule, EntityStatus
from campus_hours.static_hours import StaticScheduleTable
from campus_hours.status import StatusResolver
from campus_hours.store import ScheduleStore

log = get_logger(__name__)

Pages = Mapping[date, Sequence[str]]

# the library widget shows one week
LIBRARY_PAGE_DAYS = 7


class HoursService:
    """Entry point for a host process.

    Args:
        config: Settings; defaults to get_config().
        directory: Tracked entities; defaults to the built-in directory.
        static_table: Fallback hours; defaults to config.static_hours_path
            when set, else the built-in table.
        fetcher: Used only by fetch_pages().
    """

    def __init__(
        self,
        config: CampusHoursConfig | None = None,
        directory: EntityDirectory | None = None,
        static_table: StaticScheduleTable | None = None,
        fetcher: HoursFetcher | None = None,
    ) -> None:
        self.config = config or get_config()
        self.directory = directory if directory is not None else EntityDirectory()
        if static_table is None:
            if self.config.static_hours_path:
                static_table = StaticScheduleTable.from_json_file(self.config.static_hours_path)
            else:
                static_table = StaticScheduleTable.default()
        self.static_table = static_table
        self.matcher = self.directory.matcher(fallback_ids=static_table.entity_ids())
        self.extractor = HoursExtractor(main_row_label=self.config.main_row_label)
        self._fetcher = fetcher

    @property
    def fetcher(self) -> HoursFetcher:
        if self._fetcher is None:
            self._fetcher = HoursFetcher(
                timeout=self.config.fetch_timeout_seconds,
                max_attempts=self.config.fetch_max_attempts,
            )
        return self._fetcher

    def fetch_pages(self, today: date) -> dict[date, list[str]]:
        """Fetch the dining and library pages and assign them to the days they cover.

        Failed fetches contribute nothing, which leaves those days on static hours.
        """
        dining = self.fetcher.fetch_or_empty(self.config.dining_hours_url)
        library = self.fetcher.fetch_or_empty(self.config.library_hours_url)

        pages: dict[date, list[str]] = {}
        if dining:
            pages.setdefault(today, []).append(dining)
        if library:
            for offset in range(LIBRARY_PAGE_DAYS):
                pages.setdefault(today + timedelta(days=offset), []).append(library)
        log.info("pages_fetched", dining=bool(dining), library=bool(library))
        return pages

    def build_store(self, pages: Pages | None = None) -> ScheduleStore:
        return ScheduleStore.from_markup(
            pages or {},
            self.static_table,
            self.matcher,
            extractor=self.extractor,
            tz=self.config.campus_timezone,
        )

    def resolver(self, store: ScheduleStore) -> StatusResolver:
        return StatusResolver(
            store,
            lookahead_days=self.config.lookahead_days,
            emit_meal_switch=self.config.emit_meal_switch,
        )

    def windows_for(self, entity_id: str, day: date, pages: Pages | None = None) -> DaySchedule:
        return self.build_store(pages).windows_for(entity_id, day)

    def status_now(self, entity_id: str, now: datetime | None = None, pages: Pages | None = None) -> EntityStatus:
        return self.resolver(self.build_store(pages)).status_now(entity_id, now)

    def statuses(
        self,
        now: datetime | None = None,
        pages: Pages | None = None,
        kind: EntityKind | None = None,
    ) -> list[EntityStatus]:
        """Status of every directory entity (optionally of one kind) at one instant."""
        entities = list(self.directory) if kind is None else self.directory.of_kind(kind)
        resolver = self.resolver(self.build_store(pages))
        return resolver.statuses([e.id for e in entities], now)
