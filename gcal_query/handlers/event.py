"""
Calendar event tool handlers.

Every handler catches everything: failures come back as error-marked text,
and a missing event comes back as a plain "not found" reply.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..api import event_api
from ..errors import NotFoundError, ResolutionError
from ..helpers import (
  ERROR_MARK,
  ErrorCategory,
  ToolResult,
  log_and_format_error,
  success,
)
from ..validation import (
  ValidationError,
  opt_clock_time,
  opt_date,
  opt_string,
  require_date,
  require_string,
)

if TYPE_CHECKING:
  from ..config import CalendarSettings
  from ..context import CalendarContext

log = logging.getLogger("gcal_query.handlers.event")


def not_found(error: NotFoundError) -> ToolResult:
  return ToolResult(content=f"{ERROR_MARK} {error}")


def _timed(dt: datetime, tz_name: str) -> dict[str, str]:
  return {"dateTime": dt.isoformat(timespec="seconds"), "timeZone": tz_name}


def _event_zone(tz_name: str | None, settings: CalendarSettings) -> tuple[ZoneInfo, str]:
  if tz_name:
    try:
      return ZoneInfo(tz_name), tz_name
    except (ZoneInfoNotFoundError, ValueError):
      log.debug("Unknown event timezone %s, using %s", tz_name, settings.timezone)
  return settings.zone, settings.timezone


def build_update_patch(
  event: dict[str, Any],
  settings: CalendarSettings,
  new_title: str | None = None,
  new_date: date | None = None,
  new_time: tuple[int, int] | None = None,
  new_location: str | None = None,
) -> dict[str, Any]:
  """Build a partial update holding only the fields the caller supplied.

  A date-only change keeps the event's time of day and a time-only change
  keeps its date. Any start change resets the duration to the default.
  """
  patch: dict[str, Any] = {}
  if new_title:
    patch["summary"] = new_title

  if new_date or new_time:
    start_field = event.get("start") or {}
    zone, tz_name = _event_zone(start_field.get("timeZone"), settings)
    original = event_api.parse_event_time(start_field, zone)
    local = original.astimezone(zone) if original else None

    if new_date:
      day = new_date
    elif local:
      day = local.date()
    else:
      raise ValidationError("Event has no start date; newDate is required")

    if new_time:
      hours, minutes = new_time
    elif local and start_field.get("dateTime"):
      hours, minutes = local.hour, local.minute
    else:
      hours, minutes = 0, 0

    start = datetime.combine(day, time(hours, minutes), tzinfo=zone)
    end = start + timedelta(minutes=settings.event_duration_minutes)
    patch["start"] = _timed(start, tz_name)
    patch["end"] = _timed(end, tz_name)

  if new_location:
    patch["location"] = new_location

  return patch


async def query_google_calendar(ctx: CalendarContext, args: dict[str, Any]) -> ToolResult:
  try:
    query = require_string(args, "query")
    now = ctx.now()

    date_range = await ctx.resolver.resolve_date_range(query, now)
    events = await event_api.fetch_events_in_range(ctx.calendar, ctx.settings, date_range)
    return await ctx.narrator.narrate(query, date_range, events, now)
  except Exception as e:
    return log_and_format_error(
      "query_google_calendar", "querying calendar", e, ErrorCategory.QUERY
    )


async def create_calendar_event(ctx: CalendarContext, args: dict[str, Any]) -> ToolResult:
  try:
    name = require_string(args, "name")
    day = require_date(args, "date")
    time_text = require_string(args, "time")
    location = opt_string(args, "location")
    settings = ctx.settings

    resolved = await ctx.resolver.resolve_time(time_text)
    if not resolved.in_range:
      raise ResolutionError(f"Resolved time {resolved} is out of range")

    start = datetime.combine(day, time(resolved.hours, resolved.minutes), tzinfo=settings.zone)
    end = start + timedelta(minutes=settings.event_duration_minutes)
    body: dict[str, Any] = {
      "summary": name,
      "start": _timed(start, settings.timezone),
      "end": _timed(end, settings.timezone),
    }
    if location:
      body["location"] = location

    await ctx.calendar.insert_event(settings.google_calendar_id, body)

    at_location = f" at {location}" if location else ""
    return success(f'Created event "{name}" on {day.isoformat()} at {resolved}{at_location}')
  except Exception as e:
    return log_and_format_error(
      "create_calendar_event", "creating calendar event", e, ErrorCategory.EVENT
    )


async def remove_calendar_event(ctx: CalendarContext, args: dict[str, Any]) -> ToolResult:
  try:
    query = require_string(args, "query")
    day = opt_date(args, "date")

    try:
      match = await event_api.find_event_by_title(ctx.calendar, ctx.settings, query, day, ctx.now())
    except NotFoundError as e:
      return not_found(e)

    await ctx.calendar.delete_event(ctx.settings.google_calendar_id, match["id"])

    start = (match.get("start") or {}).get("dateTime")
    at_time = f" at {start}" if start else ""
    return success(f'Deleted event: "{match.get("summary")}"{at_time}')
  except Exception as e:
    return log_and_format_error(
      "remove_calendar_event", "removing calendar event", e, ErrorCategory.EVENT
    )


async def update_calendar_event(ctx: CalendarContext, args: dict[str, Any]) -> ToolResult:
  try:
    query = require_string(args, "query")
    day = opt_date(args, "date")
    new_title = opt_string(args, "newTitle")
    new_date = opt_date(args, "newDate")
    new_time = opt_clock_time(args, "newTime")
    new_location = opt_string(args, "newLocation")

    if not (new_title or new_date or new_time or new_location):
      raise ValidationError("Nothing to update: supply newTitle, newDate, newTime or newLocation")

    try:
      match = await event_api.find_event_by_title(ctx.calendar, ctx.settings, query, day, ctx.now())
    except NotFoundError as e:
      return not_found(e)

    patch = build_update_patch(
      match,
      ctx.settings,
      new_title=new_title,
      new_date=new_date,
      new_time=new_time,
      new_location=new_location,
    )
    await ctx.calendar.patch_event(ctx.settings.google_calendar_id, match["id"], patch)

    text = f'Updated event: "{match.get("summary")}"'
    if new_title:
      text += f' to "{new_title}"'
    if new_date or new_time:
      text += " with new date/time"
    if new_location:
      text += f" at {new_location}"
    return success(text)
  except Exception as e:
    return log_and_format_error(
      "update_calendar_event", "updating calendar event", e, ErrorCategory.EVENT
    )
