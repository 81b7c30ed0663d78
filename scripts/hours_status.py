"""Print whether campus locations are open, as JSON or a table.

Standalone CLI script around HoursService. Works offline from the static
table, from saved hours pages, or from a live fetch of the hours pages.

Run with: python scripts/hours_status.py
One:      python scripts/hours_status.py --entity BruinPlate
At:       python scripts/hours_status.py --at 2025-09-23T18:30
Table:    python scripts/hours_status.py --table --kind residential
Saved:    python scripts/hours_status.py --markup data/dining.html --markup data/library.html
Live:     python scripts/hours_status.py --fetch
Windows:  python scripts/hours_status.py --windows --entity powell --fetch

Exit codes:
  0 = success (JSON or table on stdout)
  1 = error (message on stderr)
"""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from campus_hours.config import get_config
from campus_hours.entities import EntityKind
from campus_hours.errors import CampusHoursError
from campus_hours.logging import setup_logging_from
from campus_hours.models import EntityStatus
from campus_hours.service import HoursService
from campus_hours.time_range import format_minutes


def _log(msg: str) -> None:
    """Write diagnostic messages to stderr so stdout stays clean for JSON."""
    print(msg, file=sys.stderr)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Show open/closed status of campus dining halls, eateries and libraries.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--entity",
        action="append",
        default=None,
        help="Entity id to report (repeatable). Default: every known entity.",
    )
    parser.add_argument(
        "--kind",
        choices=[k.value for k in EntityKind],
        default=None,
        help="Only report entities of this kind.",
    )
    parser.add_argument(
        "--at",
        type=datetime.fromisoformat,
        default=None,
        help="Instant to evaluate (ISO 8601, campus time if no offset). Default: now.",
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--markup",
        action="append",
        type=Path,
        default=None,
        help="Saved hours page for the evaluated day (repeatable).",
    )
    source.add_argument(
        "--fetch",
        action="store_true",
        help="Fetch the dining and library hours pages before resolving.",
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument("--table", action="store_true", help="Human-readable table.")
    output.add_argument(
        "--windows",
        action="store_true",
        help="Print the day's service windows instead of status.",
    )
    return parser.parse_args()


def _format_status_row(status: EntityStatus, name: str) -> str:
    state = "OPEN" if status.open_now else "closed"
    label = status.current_label or ""
    if status.next_change_at is None:
        nxt = "no opening scheduled"
    else:
        at = status.next_change_at
        minutes = at.hour * 60 + at.minute
        nxt = f"{status.next_change_type.value} {at:%a} {format_minutes(minutes)}"
    return f"{name:<36} {state:<7} {label:<20} {nxt}"


def main() -> int:
    load_dotenv()
    args = _parse_args()
    config = get_config()
    setup_logging_from(config)

    try:
        service = HoursService(config)
    except CampusHoursError as e:
        _log(f"Error: {e}")
        return 1

    tz = ZoneInfo(config.campus_timezone)
    now = args.at or datetime.now(tz)
    if now.tzinfo is not None:
        now = now.astimezone(tz)
    today = now.date()

    pages = None
    if args.markup:
        try:
            pages = {today: [p.read_text(encoding="utf-8") for p in args.markup]}
        except OSError as e:
            _log(f"Error: {e}")
            return 1
    elif args.fetch:
        pages = service.fetch_pages(today)

    if args.entity:
        unknown = [e for e in args.entity if e not in service.directory and e not in service.static_table]
        if unknown:
            _log(f"Unknown entity ids: {', '.join(unknown)}")
            return 1
        entity_ids = args.entity
    else:
        kind = EntityKind(args.kind) if args.kind else None
        entities = list(service.directory) if kind is None else service.directory.of_kind(kind)
        entity_ids = [e.id for e in entities]

    store = service.build_store(pages)

    if args.windows:
        schedules = [store.windows_for(eid, today) for eid in entity_ids]
        json.dump([s.model_dump(mode="json", by_alias=True) for s in schedules], sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0

    statuses = service.resolver(store).statuses(entity_ids, now)

    if args.table:
        for status in statuses:
            entity = service.directory.get(status.entity_id)
            print(_format_status_row(status, entity.name if entity else status.entity_id))
        return 0

    json.dump([s.model_dump(mode="json", by_alias=True) for s in statuses], sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
