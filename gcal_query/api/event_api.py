"""
Event API layer: coordinates the calendar backend with event normalization
and the search windows used by the tools.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Any

from ..errors import NoAccessibleCalendarError, NotFoundError
from ..models import EventRecord

if TYPE_CHECKING:
  from collections.abc import Iterable
  from zoneinfo import ZoneInfo

  from ..client.base import CalendarBackend
  from ..config import CalendarSettings
  from ..models import DateRange

log = logging.getLogger("gcal_query.api.event")


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def parse_event_time(value: dict[str, Any] | None, zone: ZoneInfo) -> datetime | None:
  """Read a Google ``start``/``end`` object.

  ``dateTime`` wins; all-day events only carry ``date`` and are pinned to
  midnight in ``zone``. Anything unreadable yields None.
  """
  if not value:
    return None
  try:
    if value.get("dateTime"):
      dt = datetime.fromisoformat(value["dateTime"].replace("Z", "+00:00"))
      return dt if dt.tzinfo else dt.replace(tzinfo=zone)
    if value.get("date"):
      return datetime.combine(date.fromisoformat(value["date"]), time(), tzinfo=zone)
  except (TypeError, ValueError):
    log.debug("Unreadable event time: %s", value)
  return None


def normalize_event(raw: dict[str, Any], calendar_id: str, zone: ZoneInfo) -> EventRecord:
  start = parse_event_time(raw.get("start"), zone)
  end = parse_event_time(raw.get("end"), zone)

  duration = None
  if start and end:
    duration = round((end - start).total_seconds() / 60)

  attendees = raw.get("attendees") or []
  emails = [a["email"] for a in attendees if isinstance(a, dict) and a.get("email")]

  return EventRecord(
    name=raw.get("summary") or "No title",
    creator=(raw.get("creator") or {}).get("email") or "",
    start=start,
    end=end,
    attendee_emails=emails,
    location=raw.get("location") or "",
    source_calendar=calendar_id,
    id=raw.get("id") or "",
    time_zone=zone.key,
    duration_minutes=duration,
  )


def normalize_events(
  raw_events: Iterable[dict[str, Any]], calendar_id: str, zone: ZoneInfo
) -> list[EventRecord]:
  return [normalize_event(raw, calendar_id, zone) for raw in raw_events]


# ---------------------------------------------------------------------------
# Search windows
# ---------------------------------------------------------------------------


def _iso(dt: datetime) -> str:
  return dt.isoformat(timespec="milliseconds")


def day_window(day: date, zone: ZoneInfo) -> tuple[datetime, datetime]:
  """Midnight to 23:59:59.999 of ``day`` in ``zone``."""
  start = datetime.combine(day, time(), tzinfo=zone)
  end = datetime.combine(day, time(23, 59, 59, 999000), tzinfo=zone)
  return start, end


def two_week_window(now: datetime, zone: ZoneInfo) -> tuple[datetime, datetime]:
  """Sunday of the current week through Saturday of next week in ``zone``."""
  local = now.astimezone(zone)
  days_since_sunday = (local.weekday() + 1) % 7
  sunday = local.date() - timedelta(days=days_since_sunday)
  start, _ = day_window(sunday, zone)
  _, end = day_window(sunday + timedelta(days=13), zone)
  return start, end


def lookup_window(day: date | None, now: datetime, zone: ZoneInfo) -> tuple[datetime, datetime]:
  return day_window(day, zone) if day else two_week_window(now, zone)


# ---------------------------------------------------------------------------
# Backend coordination
# ---------------------------------------------------------------------------


async def fetch_events_in_range(
  backend: CalendarBackend,
  settings: CalendarSettings,
  date_range: DateRange,
) -> list[EventRecord]:
  """Subscribe the configured calendar, then list the first accessible one."""
  await backend.subscribe_calendar(settings.google_calendar_id)

  calendars = await backend.list_calendars()
  log.info("Total subscribed calendars: %d", len(calendars))
  if not calendars:
    raise NoAccessibleCalendarError()

  calendar_id = calendars[0]
  log.info("Querying %s from %s to %s", calendar_id, date_range.start, date_range.end)
  raw_events = await backend.list_events(
    calendar_id,
    time_min=_iso(date_range.start),
    time_max=_iso(date_range.end),
    max_results=settings.query_max_results,
  )
  return normalize_events(raw_events, calendar_id, settings.zone)


async def find_event_by_title(
  backend: CalendarBackend,
  settings: CalendarSettings,
  query: str,
  day: date | None,
  now: datetime,
) -> dict[str, Any]:
  """Return the first event in the lookup window whose title contains ``query``.

  Matching is case-insensitive. Raises NotFoundError when nothing matches.
  """
  time_min, time_max = lookup_window(day, now, settings.zone)
  log.debug("Looking up %r between %s and %s", query, time_min, time_max)
  items = await backend.list_events(
    settings.google_calendar_id,
    time_min=_iso(time_min),
    time_max=_iso(time_max),
    max_results=settings.lookup_max_results,
  )

  needle = query.lower()
  for item in items:
    summary = item.get("summary")
    if summary and needle in summary.lower():
      log.debug("Matched event %s (%s)", item.get("id"), summary)
      return item

  raise NotFoundError(query, day.isoformat() if day else None)
