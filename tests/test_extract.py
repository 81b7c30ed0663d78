from datetime import date

import pytest
from bs4 import BeautifulSoup

from campus_hours.extract import HoursExtractor, MarkupShape, detect_shape
from campus_hours.models import RawScheduleEntry
from campus_hours.pages import library
from campus_hours.utils import clean_text

from conftest import DAY


@pytest.fixture
def extractor() -> HoursExtractor:
    return HoursExtractor()


def test_shape_detection(dining_html, library_html):
    assert detect_shape(BeautifulSoup(dining_html, "html.parser")) is MarkupShape.TABULAR
    assert detect_shape(BeautifulSoup(library_html, "html.parser")) is MarkupShape.LOCATION_BLOCK
    assert detect_shape(BeautifulSoup("<p>Hours coming soon</p>", "html.parser")) is MarkupShape.EMPTY


def test_clean_text_decodes_entities_and_strips_tags():
    assert clean_text("Caf&eacute;&nbsp;<b>1919</b>") == "Café 1919"
    assert clean_text("7:00&#160;AM") == "7:00 AM"


class TestTabular:
    def test_four_cell_row(self, extractor, dining_html):
        result = extractor.extract(dining_html, DAY)
        assert result["bruinplate"] == [
            RawScheduleEntry(label="Breakfast", start_text="7:00 AM", end_text="9:00 AM"),
            RawScheduleEntry(label="Lunch", start_text="11:00 AM", end_text="2:00 PM"),
            RawScheduleEntry(label="Dinner", start_text="5:00 PM", end_text="9:00 PM"),
        ]

    def test_five_cell_row_has_no_late_night_and_decoded_name(self, extractor, dining_html):
        entries = extractor.extract(dining_html, DAY)["cafe1919"]
        assert [e.label for e in entries] == ["Breakfast", "Lunch", "Dinner"]
        assert entries[0].start_text == "Closed"

    def test_six_cell_row_shifts_name_and_adds_late_night(self, extractor, dining_html):
        entries = extractor.extract(dining_html, DAY)["rendezvous"]
        assert [e.label for e in entries] == ["Breakfast", "Lunch", "Dinner", "Late Night"]
        assert entries[3] == RawScheduleEntry(label="Late Night", start_text="9:00 PM", end_text="12:00 AM")

    def test_row_without_hours_yields_no_entry(self, extractor, dining_html):
        assert "deneve" not in extractor.extract(dining_html, DAY)

    def test_unparseable_text_is_kept_raw(self, extractor, dining_html):
        entries = extractor.extract(dining_html, DAY)["epicuriaatcovel"]
        assert entries == [
            RawScheduleEntry(label="Breakfast", start_text="TBD"),
            RawScheduleEntry(label="Lunch", start_text="Closed"),
            RawScheduleEntry(label="Dinner", start_text="5pm"),
        ]

    def test_header_and_short_rows_are_ignored(self, extractor):
        html = "<table><tr><th>A</th><th>B</th><th>C</th><th>D</th></tr><tr><td>X</td><td>1-2</td></tr></table>"
        assert extractor.extract(html, DAY) == {}

    def test_name_in_row_header_cell(self, extractor):
        html = """
        <table>
          <tr><th>Location</th><th>Breakfast</th><th>Lunch</th><th>Dinner</th></tr>
          <tr><th scope="row">Bruin Plate</th><td>7:00 AM - 9:00 AM</td>
              <td>11:00 AM - 2:00 PM</td><td>5:00 PM - 9:00 PM</td></tr>
        </table>
        """
        result = extractor.extract(html, DAY)
        assert list(result) == ["bruinplate"]
        assert [e.label for e in result["bruinplate"]] == ["Breakfast", "Lunch", "Dinner"]
        assert result["bruinplate"][0] == RawScheduleEntry(label="Breakfast", start_text="7:00 AM", end_text="9:00 AM")


class TestLocationBlock:
    def test_main_row_and_sub_rows_for_the_day(self, extractor, library_html):
        entries = extractor.extract(library_html, DAY)["powelllibrary"]
        assert entries == [
            RawScheduleEntry(label="Hours", start_text="7:30am", end_text="11:00pm"),
            RawScheduleEntry(label="Night Powell", start_text="11:00pm", end_text="2:00am"),
        ]

    def test_dash_in_main_row_means_closed(self, extractor, library_html):
        assert extractor.extract(library_html, DAY)["artslibrary"] == [
            RawScheduleEntry(label="Hours", start_text="Closed"),
        ]

    def test_dash_sub_rows_are_skipped(self, extractor, library_html):
        sunday = date(2025, 9, 21)
        assert extractor.extract(library_html, sunday)["powelllibrary"] == [
            RawScheduleEntry(label="Hours", start_text="Closed"),
        ]

    def test_other_day_column(self, extractor, library_html):
        monday = date(2025, 9, 22)
        labels = [e.label for e in extractor.extract(library_html, monday)["powelllibrary"]]
        assert labels == ["Hours", "Night Powell", "CLICC Classroom Hub"]

    def test_day_outside_the_week_yields_nothing(self, extractor, library_html):
        # dated headers never fall back to the weekday name
        assert extractor.extract(library_html, date(2025, 9, 30)) == {}

    def test_undated_headers_match_by_weekday(self, extractor):
        html = """
        <table><tr><th>Location</th><th>Monday</th><th>Tuesday</th></tr>
        <tr class="s-lc-whw-loc"><td>Music Library</td><td>9am - 5pm</td><td>10am - 4pm</td></tr></table>
        """
        assert extractor.extract(html, DAY) == {
            "musiclibrary": [RawScheduleEntry(label="Hours", start_text="10am", end_text="4pm")],
        }

    def test_div_blocks(self, extractor):
        html = """
        <div class="s-lc-whw-loc">
          <h3>Powell Library</h3>
          <table>
            <tr><th>Service</th><th>Monday</th><th>Tuesday</th></tr>
            <tr><td>Building</td><td>7:30am - 11:00pm</td><td>7:30am - 11:00pm</td></tr>
            <tr><td>Night Powell</td><td>11:00pm - 2:00am</td><td>11:00pm - 2:00am</td></tr>
            <tr><td>CLICC Classroom Hub</td><td>8am - 5pm</td><td>-</td></tr>
          </table>
        </div>
        <div class="s-lc-whw-loc">
          <h3>Arts Library</h3>
          <table><tr><th>Tuesday</th></tr><tr><td>-</td></tr></table>
        </div>
        """
        assert detect_shape(BeautifulSoup(html, "html.parser")) is MarkupShape.LOCATION_BLOCK
        assert extractor.extract(html, DAY) == {
            "powelllibrary": [
                RawScheduleEntry(label="Hours", start_text="7:30am", end_text="11:00pm"),
                RawScheduleEntry(label="Night Powell", start_text="11:00pm", end_text="2:00am"),
            ],
            "artslibrary": [RawScheduleEntry(label="Hours", start_text="Closed")],
        }

    def test_custom_main_label(self, library_html):
        entries = HoursExtractor(main_row_label="Library").extract(library_html, DAY)["powelllibrary"]
        assert entries[0].label == "Library"

    def test_find_day_column(self, library_html):
        table = BeautifulSoup(library_html, "html.parser").select_one("table")
        assert library.find_day_column(table, DAY) == 3


class TestNeverRaises:
    def test_empty_markup(self, extractor):
        assert extractor.extract("", DAY) == {}

    def test_garbage_markup(self, extractor):
        assert extractor.extract("<tr><td>unterminated", DAY) == {}

    def test_grammar_failure_keeps_partial_rows(self, extractor, dining_html, monkeypatch):
        from campus_hours.pages import dining

        original = dining.iter_locations

        def explode_after_first(soup):
            rows = original(soup)
            yield next(rows)
            raise RuntimeError("markup changed")

        monkeypatch.setattr(dining, "iter_locations", explode_after_first)
        assert list(extractor.extract(dining_html, DAY)) == ["bruinplate"]

    def test_wrong_argument_types_raise(self, extractor):
        with pytest.raises(TypeError):
            extractor.extract(None, DAY)
        with pytest.raises(TypeError):
            extractor.extract("<table></table>", "2025-09-23")
