from datetime import date

import pytest
from pydantic import ValidationError

from campus_hours.models import (
    ChangeType,
    DaySchedule,
    EntityStatus,
    RawScheduleEntry,
    ScheduleSource,
    ServiceWindow,
)

from conftest import DAY, at


def test_status_wire_shape():
    status = EntityStatus(
        entity_id="BruinPlate",
        open_now=True,
        current_label="Dinner",
        next_change_at=at(21),
        next_change_type=ChangeType.CLOSE,
    )
    data = status.model_dump(mode="json", by_alias=True)
    assert data == {
        "entityId": "BruinPlate",
        "openNow": True,
        "currentLabel": "Dinner",
        "nextChangeAt": "2025-09-23T21:00:00-07:00",
        "nextChangeType": "close",
    }


def test_meal_switch_wire_value():
    assert ChangeType.MEAL_SWITCH.value == "mealSwitch"


def test_closed_status_defaults():
    status = EntityStatus(entity_id="SproulHall", open_now=False)
    assert status.closed_indefinitely
    assert status.model_dump(mode="json", by_alias=True)["nextChangeType"] is None


def test_window_requires_start_before_end():
    with pytest.raises(ValidationError):
        ServiceWindow(start=at(9), end=at(9))
    with pytest.raises(ValidationError):
        ServiceWindow(start=at(10), end=at(9))


def test_window_contains_both_ends():
    window = ServiceWindow(start=at(9), end=at(10))
    assert window.contains(at(9))
    assert window.contains(at(10))
    assert not window.contains(at(10, 1))


def test_day_schedule_shape():
    schedule = DaySchedule(
        entity_id="CORE",
        day=DAY,
        windows=(ServiceWindow(start=at(7), end=at(22)),),
        source=ScheduleSource.STATIC,
    )
    data = schedule.model_dump(mode="json", by_alias=True)
    assert data["entityId"] == "CORE"
    assert data["day"] == "2025-09-23"
    assert data["source"] == "static"
    assert data["windows"][0]["label"] is None
    assert not schedule.is_closed_all_day
    assert DaySchedule(entity_id="CORE", day=date(2025, 9, 24)).is_closed_all_day


def test_models_are_frozen():
    status = EntityStatus(entity_id="CORE", open_now=False)
    with pytest.raises(ValidationError):
        status.open_now = True


def test_raw_entry_text():
    assert RawScheduleEntry(label="Lunch", start_text="11am", end_text="2pm").text == "11am - 2pm"
    assert RawScheduleEntry(label="Lunch", start_text="TBD").text == "TBD"
    assert RawScheduleEntry(label="Lunch", startText="11am").start_text == "11am"
