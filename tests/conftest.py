"""Shared fixtures: a fixed campus clock and sample hours pages."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from campus_hours.static_hours import StaticScheduleTable
from campus_hours.store import ScheduleStore

CAMPUS_TZ = ZoneInfo("America/Los_Angeles")

# Tuesday
DAY = date(2025, 9, 23)


def at(hour: int, minute: int = 0, day: date = DAY) -> datetime:
    """Campus wall-clock instant on ``day``."""
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=CAMPUS_TZ)


DINING_HTML = """
<html><body>
<table>
  <tr><th>Location</th><th>Breakfast</th><th>Lunch</th><th>Dinner</th></tr>
  <tr><td>Bruin Plate</td><td>7:00 AM - 9:00 AM</td><td>11:00 AM - 2:00 PM</td><td>5:00 PM - 9:00 PM</td></tr>
  <tr><td>Caf&eacute;&nbsp;1919</td><td>Closed</td><td>11:00 AM - 4:00 PM</td><td>5:00 PM - 9:00 PM</td><td>Takeout only</td></tr>
  <tr><td>De Neve</td><td></td><td></td><td></td></tr>
</table>
<table>
  <tr><td><img src="icon.png"></td><td><a href="/rendezvous">Rendezvous</a></td><td>Closed</td>
      <td>11:00 AM - 3:00 PM</td><td>5:00 PM - 9:00 PM</td><td>9:00 PM - 12:00 AM</td></tr>
  <tr><td>Epicuria at Covel</td><td>TBD</td><td>-</td><td>5pm</td></tr>
</table>
</body></html>
"""

LIBRARY_HTML = """
<div class="s-lc-whw-cont">
<table class="s-lc-whw">
  <thead><tr>
    <th>Location</th>
    <th>Sunday<br><span>Sep 21</span></th>
    <th>Monday<br><span>Sep 22</span></th>
    <th>Tuesday<br><span>Sep 23</span></th>
  </tr></thead>
  <tbody>
    <tr class="s-lc-whw-loc">
      <td><span class="s-lc-whw-locname">Powell Library</span></td>
      <td>-</td><td>7:30am - 11:00pm</td><td>7:30am &ndash; 11:00pm</td>
    </tr>
    <tr class="s-lc-whw-subloc">
      <td><span class="s-lc-whw-sublocname">Night Powell</span></td>
      <td>-</td><td>11:00pm - 2:00am</td><td>11:00pm - 2:00am</td>
    </tr>
    <tr class="s-lc-whw-subloc">
      <td><span class="s-lc-whw-sublocname">CLICC Classroom Hub</span></td>
      <td>-</td><td>8am - 5pm</td><td>-</td>
    </tr>
    <tr class="s-lc-whw-loc">
      <td><span class="s-lc-whw-locname">Arts Library</span></td>
      <td>Closed</td><td>9:00am - 5:00pm</td><td>-</td>
    </tr>
  </tbody>
</table>
</div>
"""


@pytest.fixture
def dining_html() -> str:
    return DINING_HTML


@pytest.fixture
def library_html() -> str:
    return LIBRARY_HTML


@pytest.fixture
def static_table() -> StaticScheduleTable:
    return StaticScheduleTable.default()


@pytest.fixture
def store(static_table: StaticScheduleTable) -> ScheduleStore:
    return ScheduleStore(static_table, tz=CAMPUS_TZ)
