import json
from datetime import date

import pytest

from campus_hours.config import CampusHoursConfig
from campus_hours.entities import EntityDirectory, EntityKind
from campus_hours.errors import ConfigurationError
from campus_hours.models import ChangeType, ScheduleSource
from campus_hours.service import LIBRARY_PAGE_DAYS, HoursService

from conftest import DAY, at


class FakeFetcher:
    def __init__(self, pages: dict[str, str]) -> None:
        self.pages = pages
        self.requested: list[str] = []

    def fetch_or_empty(self, url: str) -> str:
        self.requested.append(url)
        return self.pages.get(url, "")


def make_config(**overrides) -> CampusHoursConfig:
    return CampusHoursConfig(_env_file=None, **overrides)


def test_defaults_to_builtin_static_table():
    service = HoursService(make_config())
    status = service.status_now("BruinPlate", at(18, 30))
    assert status.open_now
    assert status.current_label == "Dinner"


def test_static_table_from_file(tmp_path):
    path = tmp_path / "hours.json"
    path.write_text(json.dumps({"BruinPlate": {"default": [["Brunch", "10:00 AM", "2:00 PM"]]}}))
    service = HoursService(make_config(static_hours_path=str(path)))

    schedule = service.windows_for("BruinPlate", DAY)
    assert [w.label for w in schedule.windows] == ["Brunch"]
    assert service.windows_for("CORE", DAY).source is ScheduleSource.NONE


def test_missing_static_file_is_a_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        HoursService(make_config(static_hours_path=str(tmp_path / "nope.json")))


def test_fetch_pages_assigns_days(dining_html, library_html):
    config = make_config()
    fetcher = FakeFetcher({config.dining_hours_url: dining_html, config.library_hours_url: library_html})
    pages = HoursService(config, fetcher=fetcher).fetch_pages(DAY)

    assert pages[DAY] == [dining_html, library_html]
    assert len(pages) == LIBRARY_PAGE_DAYS
    assert pages[date(2025, 9, 24)] == [library_html]


def test_failed_fetch_contributes_nothing():
    pages = HoursService(make_config(), fetcher=FakeFetcher({})).fetch_pages(DAY)
    assert pages == {}


def test_extracted_pages_override_static(dining_html):
    service = HoursService(make_config())
    schedule = service.windows_for("Rendezvous", DAY, pages={DAY: [dining_html]})
    assert schedule.source is ScheduleSource.EXTRACTED
    assert [w.label for w in schedule.windows] == ["Lunch", "Dinner", "Late Night"]

    cafe = service.windows_for("Cafe1919", DAY, pages={DAY: [dining_html]})
    assert [w.label for w in cafe.windows] == ["Lunch", "Dinner"]


def test_library_statuses(library_html):
    service = HoursService(make_config())
    statuses = service.statuses(at(23, 30), pages={DAY: [library_html]}, kind=EntityKind.LIBRARY)
    by_id = {s.entity_id: s for s in statuses}

    assert set(by_id) == {e.id for e in service.directory.of_kind(EntityKind.LIBRARY)}
    assert by_id["powell"].open_now
    assert by_id["powell"].current_label == "Night Powell"
    assert not by_id["arts"].open_now


def test_meal_switch_follows_config():
    service = HoursService(make_config(emit_meal_switch=True))
    assert service.resolver(service.build_store()).emit_meal_switch

    status = HoursService(make_config()).status_now("BruinPlate", at(8))
    assert status.next_change_type is ChangeType.CLOSE


def test_empty_directory_is_kept():
    service = HoursService(make_config(), directory=EntityDirectory(()))
    assert len(service.directory) == 0
    assert service.statuses(at(12)) == []
    # static-table ids still resolve through the matcher fallback
    assert service.matcher.resolve("Bruin Plate") == "BruinPlate"
