"""HoursExtractor - raw hours markup to per-location raw entries.

Two page shapes are supported and detected explicitly:
  - location-block: a weekly hours widget (any .s-lc-whw-loc element present)
  - tabular: one row per location with a column per meal

Results are keyed by normalize_name(display name), never by entity id; the
caller joins keys to ids with a NameMatcher.
"""

from datetime import date
from enum import Enum

from bs4 import BeautifulSoup

from campus_hours.logging import get_logger
from campus_hours.models import RawScheduleEntry
from campus_hours.pages import dining, library

log = get_logger(__name__)


class MarkupShape(str, Enum):
    TABULAR = "tabular"
    LOCATION_BLOCK = "location_block"
    EMPTY = "empty"


def detect_shape(soup: BeautifulSoup) -> MarkupShape:
    """Decide the grammar from structural markers, never by trial parsing."""
    if soup.select_one(f".{library.LOCATION_ROW_CLASS}") is not None:
        return MarkupShape.LOCATION_BLOCK
    if soup.find("tr") is not None:
        return MarkupShape.TABULAR
    return MarkupShape.EMPTY


class HoursExtractor:
    """Extract raw schedule entries for one calendar day from hours markup.

    Args:
        main_row_label: Label for a location block's main row.
    """

    def __init__(self, main_row_label: str = "Hours") -> None:
        self.main_row_label = main_row_label

    def extract(self, markup: str, day: date) -> dict[str, list[RawScheduleEntry]]:
        """Extract entries for ``day``.

        Malformed or unrecognized markup yields whatever rows could be read,
        possibly nothing. Only a wrong argument type raises.

        Args:
            markup: Raw HTML as fetched; "" when the fetch failed.
            day: Calendar day the caller wants hours for.

        Returns:
            Mapping of normalized location name to its entries, in page order.

        Raises:
            TypeError: If markup is not a str or day is not a date.
        """
        if not isinstance(markup, str):
            raise TypeError(f"markup must be str, got {type(markup).__name__}")
        if not isinstance(day, date):
            raise TypeError(f"day must be a date, got {type(day).__name__}")

        results: dict[str, list[RawScheduleEntry]] = {}
        if not markup.strip():
            log.info("markup_empty", day=day.isoformat())
            return results

        soup = BeautifulSoup(markup, "html.parser")
        shape = detect_shape(soup)
        log.debug("markup_shape_detected", shape=shape.value, day=day.isoformat())

        if shape is MarkupShape.LOCATION_BLOCK:
            rows = library.iter_locations(soup, day, main_label=self.main_row_label)
        elif shape is MarkupShape.TABULAR:
            rows = dining.iter_locations(soup)
        else:
            log.info("markup_unrecognized", day=day.isoformat(), length=len(markup))
            return results

        try:
            for key, entries in rows:
                results.setdefault(key, entries)
        except Exception as e:
            # rows read before the failure are kept
            log.warning(
                "extraction_aborted",
                shape=shape.value,
                day=day.isoformat(),
                rows=len(results),
                error=str(e),
                type=type(e).__name__,
            )

        log.info("rows_extracted", shape=shape.value, day=day.isoformat(), locations=len(results))
        return results
