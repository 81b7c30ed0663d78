"""Dining hours page - one table row per location, one column per meal.

Row structure:
  tr
    td  name                     (4 or 5 cells)
    td  Breakfast  td Lunch  td Dinner  [td notes]
  or
    td  icon  td name            (6+ cells)
    td  Breakfast  td Lunch  td Dinner  td Late Night

Cell text is a range ("7:00 AM - 10:00 AM"), "Closed", a bare dash or empty.
The name cell may be a th (scope="row"). Rows made only of th cells are
headers and are skipped.
"""

from collections.abc import Iterator

from bs4 import BeautifulSoup, Tag

from campus_hours.logging import get_logger
from campus_hours.models import RawScheduleEntry
from campus_hours.normalize import normalize_name
from campus_hours.time_range import split_range
from campus_hours.utils import cell_text, direct_cells, is_lone_dash

log = get_logger(__name__)

MEAL_LABELS: tuple[str, ...] = ("Breakfast", "Lunch", "Dinner")
LATE_NIGHT_LABEL = "Late Night"

MIN_CELLS = 4
ICON_COLUMN_CELLS = 6


def _entry(label: str, text: str) -> RawScheduleEntry:
    if is_lone_dash(text):
        return RawScheduleEntry(label=label, start_text="Closed")
    sides = split_range(text)
    if sides is None:
        return RawScheduleEntry(label=label, start_text=text)
    return RawScheduleEntry(label=label, start_text=sides[0], end_text=sides[1])


def parse_row(cells: list[Tag]) -> tuple[str, list[RawScheduleEntry]] | None:
    """Read one location row.

    Returns:
        (normalized name key, entries) or None when the row isn't a location row.
    """
    if len(cells) < MIN_CELLS:
        return None

    if len(cells) >= ICON_COLUMN_CELLS:
        name_cell = cells[1]
        labels = (*MEAL_LABELS, LATE_NIGHT_LABEL)
        meal_cells = cells[2 : 2 + len(labels)]
    else:
        name_cell = cells[0]
        labels = MEAL_LABELS
        meal_cells = cells[1 : 1 + len(labels)]

    key = normalize_name(cell_text(name_cell))
    if not key:
        return None

    entries = []
    for label, cell in zip(labels, meal_cells):
        text = cell_text(cell)
        if text:
            entries.append(_entry(label, text))
    return key, entries


def iter_locations(soup: BeautifulSoup) -> Iterator[tuple[str, list[RawScheduleEntry]]]:
    """Yield (key, entries) for every location row that has at least one entry."""
    seen: set[str] = set()
    for row in soup.find_all("tr"):
        cells = direct_cells(row)
        if not any(cell.name == "td" for cell in cells):
            continue
        parsed = parse_row(cells)
        if parsed is None:
            continue
        key, entries = parsed
        if not entries:
            log.debug("dining_row_without_hours", key=key)
            continue
        if key in seen:
            log.debug("dining_row_duplicate", key=key)
            continue
        seen.add(key)
        yield key, entries
