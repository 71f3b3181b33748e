"""
Result narrator: turns a list of events into a short prose summary.

The model call is bounded by ``narration_timeout``. Timeouts and model errors
fall back to a plain listing built from local data, so ``narrate`` never
raises.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import TYPE_CHECKING

from ..client.workers_ai import reply_text
from ..helpers import ToolResult, format_local_date, format_local_datetime
from . import prompts

if TYPE_CHECKING:
  from collections.abc import Sequence
  from datetime import tzinfo

  from ..client.base import TextGenerator
  from ..config import CalendarSettings
  from ..models import DateRange, EventRecord

log = logging.getLogger("gcal_query.ai.narrator")


def format_event_block(event: EventRecord, zone: tzinfo) -> str:
  start = format_local_datetime(event.start, zone) if event.start else ""
  end = format_local_datetime(event.end, zone) if event.end else ""
  duration = f"{event.duration_minutes} mins" if event.duration_minutes is not None else ""
  attendees = ", ".join(event.attendee_emails) if event.attendee_emails else "No attendees"
  return "\n".join(
    [
      f"Event: {event.name}",
      f"Time: {start} - {end}",
      f"Location: {event.location or 'No location specified'}",
      f"Duration: {duration}",
      f"Attendees: {attendees}",
    ]
  )


def format_events_context(events: Sequence[EventRecord], zone: tzinfo) -> str:
  return "\n\n".join(format_event_block(e, zone) for e in events)


def fallback_text(date_range: DateRange, events: Sequence[EventRecord], zone: tzinfo) -> str:
  start = format_local_date(date_range.start, zone)
  end = format_local_date(date_range.end, zone)
  return f"Found {len(events)} events between {start} and {end}:\n" + format_events_context(
    events, zone
  )


class ResultNarrator:
  def __init__(self, generator: TextGenerator, settings: CalendarSettings) -> None:
    self._generator = generator
    self._settings = settings

  async def narrate(
    self,
    query: str,
    date_range: DateRange,
    events: Sequence[EventRecord],
    now: datetime,
  ) -> ToolResult:
    """Summarize ``events`` for ``query``; falls back to a plain listing."""
    zone = self._settings.zone
    messages = prompts.summary_messages(
      query,
      format_local_date(date_range.start, zone),
      format_local_date(date_range.end, zone),
      format_events_context(events, zone),
      now.astimezone(zone).strftime("%a %b %d %Y"),
    )

    try:
      reply = await asyncio.wait_for(
        self._generator.generate(self._settings.narrator_model, messages),
        timeout=self._settings.narration_timeout,
      )
      return ToolResult(content=reply_text(reply))
    except TimeoutError:
      log.warning(
        "Narration timed out after %.1fs, using plain listing",
        self._settings.narration_timeout,
      )
    except Exception as e:
      log.warning("Narration failed, using plain listing: %s", e)

    return ToolResult(content=fallback_text(date_range, events, zone))
