"""
Intent resolver: free text to a date range or a wall-clock time.

Each resolution is exactly one model call. The model is asked for JSON only,
but its output is treated as untrusted prose: anything that does not parse
into the expected shape raises ``ResolutionError`` and is not retried.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

import pydantic

from ..client.workers_ai import reply_text
from ..errors import ResolutionError
from ..models import DateRange, NormalizedTime
from . import prompts

if TYPE_CHECKING:
  from zoneinfo import ZoneInfo

  from ..client.base import TextGenerator
  from ..config import CalendarSettings

log = logging.getLogger("gcal_query.ai.resolver")

_DECODER = json.JSONDecoder()


def parse_instant(value: Any, zone: ZoneInfo, field: str) -> datetime:
  """Parse an ISO-8601 string; naive values are taken as local to ``zone``."""
  if not isinstance(value, str) or not value.strip():
    raise ResolutionError(f"Missing {field} in date range response")
  try:
    dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
  except ValueError as e:
    raise ResolutionError(f"Invalid {field} in date range response: {value!r}") from e
  if dt.tzinfo is None:
    dt = dt.replace(tzinfo=zone)
  return dt


def parse_date_range(text: str, zone: ZoneInfo) -> DateRange:
  try:
    parsed = json.loads(text)
  except (TypeError, ValueError) as e:
    raise ResolutionError("Could not parse date range from LLM response") from e
  if not parsed or not isinstance(parsed, dict):
    raise ResolutionError("Could not parse date range from LLM response")

  start = parse_instant(parsed.get("startDate"), zone, "startDate")
  end = parse_instant(parsed.get("endDate"), zone, "endDate")
  try:
    return DateRange(start=start, end=end)
  except pydantic.ValidationError as e:
    raise ResolutionError(f"Invalid date range from LLM response: {start} > {end}") from e


def first_json_object(text: str) -> dict[str, Any] | None:
  """Return the first complete JSON object embedded in ``text``.

  Decoding starts at each ``{`` in turn, so code fences, line breaks and
  surrounding prose are skipped over.
  """
  start = text.find("{")
  while start != -1:
    try:
      parsed, _ = _DECODER.raw_decode(text, start)
    except ValueError:
      start = text.find("{", start + 1)
    else:
      return parsed
  return None


def parse_time(text: str) -> NormalizedTime:
  if "{" not in text:
    raise ResolutionError("No JSON found in time response")
  parsed = first_json_object(text)
  if parsed is None:
    raise ResolutionError("Failed to process time response")

  value = parsed.get("time")
  if not isinstance(value, str) or not value.strip():
    raise ResolutionError("Invalid time format in response")

  parts = value.strip().split(":")
  try:
    hours, minutes = int(parts[0]), int(parts[1])
  except (IndexError, ValueError) as e:
    raise ResolutionError(f"Invalid time format in response: {value!r}") from e
  return NormalizedTime(hours=hours, minutes=minutes)


class IntentResolver:
  def __init__(self, generator: TextGenerator, settings: CalendarSettings) -> None:
    self._generator = generator
    self._settings = settings

  async def resolve_date_range(self, query: str, now: datetime) -> DateRange:
    """Ask the resolver model which days ``query`` refers to."""
    zone = self._settings.zone
    messages = prompts.date_range_messages(query, now.astimezone(zone), self._settings.timezone)
    reply = await self._generator.generate(self._settings.resolver_model, messages)
    text = reply_text(reply)
    log.debug("Date range response: %s", text)

    date_range = parse_date_range(text, zone)
    log.info("Resolved %r to %s .. %s", query, date_range.start, date_range.end)
    return date_range

  async def resolve_time(self, text: str) -> NormalizedTime:
    """Ask the resolver model to rewrite ``text`` as HH:MM."""
    reply = await self._generator.generate(
      self._settings.resolver_model, prompts.time_messages(text)
    )
    raw = reply_text(reply)
    log.debug("Raw time response: %s", raw)
    return parse_time(raw)
