"""StatusResolver - open/closed now and the next transition.

For one entity at instant ``now``:
  1. inside a window (first by start order wins)  -> open, next change = its end
  2. a window starts later today                   -> closed, next change = that start
  3. a later day within the horizon has a window   -> closed, next change = its first start
  4. otherwise                                     -> closed, no known next change

Windows from yesterday that run past midnight count as today's for step 1.
"""

from collections.abc import Iterable
from concurrent.futures import Executor
from datetime import date, datetime, time, timedelta

from campus_hours.logging import get_logger
from campus_hours.models import ChangeType, EntityStatus, ServiceWindow
from campus_hours.store import ScheduleStore

log = get_logger(__name__)

DEFAULT_LOOKAHEAD_DAYS = 14


class StatusResolver:
    """Answers "is X open now / what's next" against a ScheduleStore.

    Args:
        store: Source of day schedules.
        lookahead_days: Days scanned after today for the next opening.
        emit_meal_switch: Report a window ending exactly when the next one
            starts as a mealSwitch instead of close.
        executor: Optional executor to fetch look-ahead days in parallel;
            results are still consumed in day order.

    Raises:
        ValueError: If lookahead_days is below 1.
    """

    def __init__(
        self,
        store: ScheduleStore,
        lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
        emit_meal_switch: bool = False,
        executor: Executor | None = None,
    ) -> None:
        if lookahead_days < 1:
            raise ValueError(f"lookahead_days must be at least 1, got {lookahead_days}")
        self.store = store
        self.lookahead_days = lookahead_days
        self.emit_meal_switch = emit_meal_switch
        self.executor = executor

    def _localize(self, now: datetime | None) -> datetime:
        if now is None:
            return datetime.now(self.store.tz)
        if not isinstance(now, datetime):
            raise TypeError(f"now must be a datetime, got {type(now).__name__}")
        if now.tzinfo is None:
            return now.replace(tzinfo=self.store.tz)
        return now.astimezone(self.store.tz)

    def _candidates(self, entity_id: str, today: date) -> list[ServiceWindow]:
        midnight = datetime.combine(today, time.min, tzinfo=self.store.tz)
        yesterday = self.store.windows_for(entity_id, today - timedelta(days=1))
        carried = [w for w in yesterday.windows if w.end > midnight]
        return carried + list(self.store.windows_for(entity_id, today).windows)

    def status_now(self, entity_id: str, now: datetime | None = None) -> EntityStatus:
        """Status of ``entity_id`` at ``now`` (default: current campus time).

        A naive ``now`` is read as campus wall-clock time.
        """
        now = self._localize(now)
        today = now.date()
        windows = self._candidates(entity_id, today)

        active = next((w for w in windows if w.contains(now)), None)
        if active is not None:
            change = ChangeType.CLOSE
            if self.emit_meal_switch and any(w.start == active.end for w in windows if w is not active):
                change = ChangeType.MEAL_SWITCH
            return EntityStatus(
                entity_id=entity_id,
                open_now=True,
                current_label=active.label,
                next_change_at=active.end,
                next_change_type=change,
            )

        upcoming = next((w for w in windows if w.start > now), None)
        if upcoming is not None:
            return EntityStatus(
                entity_id=entity_id,
                open_now=False,
                next_change_at=upcoming.start,
                next_change_type=ChangeType.OPEN,
            )

        next_start = self.next_open_start(entity_id, today)
        if next_start is not None:
            return EntityStatus(
                entity_id=entity_id,
                open_now=False,
                next_change_at=next_start,
                next_change_type=ChangeType.OPEN,
            )

        log.info("lookahead_exhausted", entity_id=entity_id, days=self.lookahead_days)
        return EntityStatus(entity_id=entity_id, open_now=False)

    def next_open_start(self, entity_id: str, today: date) -> datetime | None:
        """First window start on the days after ``today`` within the horizon."""
        days = [today + timedelta(days=offset) for offset in range(1, self.lookahead_days + 1)]

        if self.executor is None:
            schedules = (self.store.windows_for(entity_id, day) for day in days)
        else:
            futures = [self.executor.submit(self.store.windows_for, entity_id, day) for day in days]
            schedules = (f.result() for f in futures)

        for schedule in schedules:
            if schedule.windows:
                return schedule.windows[0].start
        return None

    def statuses(self, entity_ids: Iterable[str], now: datetime | None = None) -> list[EntityStatus]:
        """Status for each id at the same instant."""
        now = self._localize(now)
        return [self.status_now(entity_id, now) for entity_id in entity_ids]
