"""Library weekly hours widget - location blocks with sub-service rows.

DOM structure:
  table.s-lc-whw
    thead tr -> th "Location", then one th per day ("Tuesday Sep 23")
    tbody
      tr.s-lc-whw-loc     -> span.s-lc-whw-locname + one td per day
      tr.s-lc-whw-subloc  -> span.s-lc-whw-sublocname + one td per day
      ...                    (sub-rows belong to the preceding loc row)

Older pages wrap each location in its own block instead:
  div.s-lc-whw-loc
    h3 name (or .s-lc-whw-locname)
    table -> header row naming the day, then one row per service;
             the first data row is the main hours

A bare dash in a location row means closed that day. A bare dash in a
sub-row means the service isn't offered, so the sub-row is skipped.
"""

import re
from collections.abc import Iterator
from datetime import date

from bs4 import BeautifulSoup, Tag

from campus_hours.logging import get_logger
from campus_hours.models import RawScheduleEntry
from campus_hours.normalize import normalize_name
from campus_hours.static_hours import weekday_name
from campus_hours.time_range import split_range
from campus_hours.utils import cell_text, direct_cells, is_lone_dash

log = get_logger(__name__)

LOCATION_ROW_CLASS = "s-lc-whw-loc"
SUBLOCATION_ROW_CLASS = "s-lc-whw-subloc"
LOCATION_NAME = ".s-lc-whw-locname"
SUBLOCATION_NAME = ".s-lc-whw-sublocname"
BLOCK_HEADINGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

_MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")
_ANY_MONTH_DAY_RE = re.compile(
    r"\b(?:" + "|".join(_MONTHS) + r")[a-z]*\.?\s+\d{1,2}\b|\b\d{1,2}/\d{1,2}\b"
)


def _month_day_patterns(day: date) -> list[re.Pattern]:
    month = _MONTHS[day.month - 1]
    # "Sep 23", "Sept 23", "September 23", "9/23"
    return [
        re.compile(rf"\b{month}[a-z]*\.?\s+0?{day.day}\b"),
        re.compile(rf"\b0?{day.month}/0?{day.day}\b"),
    ]


def _header_row(table: Tag) -> Tag | None:
    return table.select_one("thead tr") or table.find("tr")


def find_day_column(table: Tag, day: date) -> int | None:
    """Index of the header cell for ``day``.

    Dated headers ("Tuesday Sep 23") must match the date. Only headers with no
    dates at all fall back to the weekday name.
    """
    header = _header_row(table)
    if header is None:
        return None
    texts = [cell_text(c).lower() for c in direct_cells(header)]

    patterns = _month_day_patterns(day)
    for index, text in enumerate(texts):
        if any(p.search(text) for p in patterns):
            return index

    if any(_ANY_MONTH_DAY_RE.search(text) for text in texts):
        return None
    weekday = weekday_name(day)
    for index, text in enumerate(texts):
        if re.search(rf"\b{weekday}\b", text):
            return index
    return None


def _row_name(row: Tag, selector: str) -> str:
    named = row.select_one(selector)
    if named is not None:
        return cell_text(named)
    cells = direct_cells(row)
    return cell_text(cells[0]) if cells else ""


def _day_text(row: Tag, column: int) -> str | None:
    cells = direct_cells(row)
    if column >= len(cells):
        return None
    return cell_text(cells[column])


def _entry(label: str, text: str) -> RawScheduleEntry:
    sides = split_range(text)
    if sides is None:
        return RawScheduleEntry(label=label, start_text=text)
    return RawScheduleEntry(label=label, start_text=sides[0], end_text=sides[1])


def _location_tables(soup: BeautifulSoup) -> list[Tag]:
    tables: dict[int, Tag] = {}
    for row in soup.select(f"tr.{LOCATION_ROW_CLASS}"):
        table = row.find_parent("table")
        if table is not None:
            tables.setdefault(id(table), table)
    return list(tables.values())


def _location_blocks(soup: BeautifulSoup) -> list[Tag]:
    return [
        block
        for block in soup.select(f".{LOCATION_ROW_CLASS}")
        if block.name != "tr" and block.select_one(f"tr.{LOCATION_ROW_CLASS}") is None
    ]


def _block_name(block: Tag) -> str:
    named = block.select_one(LOCATION_NAME) or block.find(BLOCK_HEADINGS)
    return cell_text(named)


def _iter_table_rows(
    table: Tag, day: date, main_label: str
) -> Iterator[tuple[str, list[RawScheduleEntry]]]:
    column = find_day_column(table, day)
    if column is None:
        log.info("library_day_column_missing", day=day.isoformat())
        return

    key: str | None = None
    entries: list[RawScheduleEntry] = []
    for row in table.find_all("tr"):
        classes = row.get("class") or []

        if LOCATION_ROW_CLASS in classes:
            if key and entries:
                yield key, entries
            key = normalize_name(_row_name(row, LOCATION_NAME)) or None
            entries = []
            text = _day_text(row, column)
            if key is None or not text:
                continue
            if is_lone_dash(text):
                text = "Closed"
            entries.append(_entry(main_label, text))

        elif SUBLOCATION_ROW_CLASS in classes and key is not None:
            text = _day_text(row, column)
            if not text or is_lone_dash(text):
                continue
            label = _row_name(row, SUBLOCATION_NAME)
            entries.append(_entry(label or main_label, text))

    if key and entries:
        yield key, entries


def _block_entries(block: Tag, day: date, main_label: str) -> list[RawScheduleEntry]:
    """Entries of a div-shaped block: first data row is the main row, later rows are sub-services."""
    entries: list[RawScheduleEntry] = []
    main_seen = False
    for table in block.find_all("table"):
        column = find_day_column(table, day)
        if column is None:
            log.info("library_day_column_missing", day=day.isoformat())
            continue
        header = _header_row(table)
        for row in table.find_all("tr"):
            if row is header:
                continue
            text = _day_text(row, column)
            if text is None:
                continue
            if not main_seen:
                main_seen = True
                if not text:
                    continue
                entries.append(_entry(main_label, "Closed" if is_lone_dash(text) else text))
                continue
            if not text or is_lone_dash(text):
                continue
            label = _row_name(row, SUBLOCATION_NAME) if column > 0 else ""
            entries.append(_entry(label or main_label, text))
    return entries


def iter_locations(
    soup: BeautifulSoup, day: date, main_label: str = "Hours"
) -> Iterator[tuple[str, list[RawScheduleEntry]]]:
    """Yield (key, entries) for each location block with hours on ``day``."""
    for table in _location_tables(soup):
        yield from _iter_table_rows(table, day, main_label)

    for block in _location_blocks(soup):
        key = normalize_name(_block_name(block))
        if not key:
            log.info("library_block_without_name")
            continue
        entries = _block_entries(block, day, main_label)
        if entries:
            yield key, entries
