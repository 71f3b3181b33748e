"""Shared fixtures: in-memory calendar backend and text generator fakes."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from gcal_query.client.base import ModelReply, TextReply
from gcal_query.config import CalendarSettings
from gcal_query.server import build_context

# Monday 2026-10-19, 10:00 in Los Angeles
NOW = datetime(2026, 10, 19, 17, 0, tzinfo=UTC)


class FakeCalendar:
  """Records every call; ``events`` is returned for any window."""

  def __init__(
    self,
    events: list[dict[str, Any]] | None = None,
    calendars: list[str] | None = None,
  ) -> None:
    self.events = events or []
    self.calendars = ["team@example.com"] if calendars is None else calendars
    self.list_calls: list[dict[str, Any]] = []
    self.inserted: list[tuple[str, dict[str, Any]]] = []
    self.patched: list[tuple[str, str, dict[str, Any]]] = []
    self.deleted: list[tuple[str, str]] = []
    self.subscribed: list[str] = []

  async def list_events(
    self,
    calendar_id: str,
    time_min: str,
    time_max: str,
    max_results: int = 50,
    order_by: str = "startTime",
    single_events: bool = True,
  ) -> list[dict[str, Any]]:
    self.list_calls.append(
      {
        "calendar_id": calendar_id,
        "time_min": time_min,
        "time_max": time_max,
        "max_results": max_results,
        "order_by": order_by,
        "single_events": single_events,
      }
    )
    return list(self.events)

  async def insert_event(self, calendar_id: str, body: dict[str, Any]) -> dict[str, Any]:
    self.inserted.append((calendar_id, body))
    return {"id": "new-event", **body}

  async def patch_event(
    self, calendar_id: str, event_id: str, body: dict[str, Any]
  ) -> dict[str, Any]:
    self.patched.append((calendar_id, event_id, body))
    return {"id": event_id, **body}

  async def delete_event(self, calendar_id: str, event_id: str) -> None:
    self.deleted.append((calendar_id, event_id))

  async def list_calendars(self) -> list[str]:
    return list(self.calendars)

  async def subscribe_calendar(self, calendar_id: str) -> None:
    self.subscribed.append(calendar_id)


class FakeGenerator:
  """Replays queued replies in order.

  A queued exception is raised; a queued coroutine function is awaited.
  """

  def __init__(self, *replies: Any) -> None:
    self.replies = list(replies)
    self.calls: list[tuple[str, list[dict[str, str]]]] = []

  async def generate(self, model: str, messages: list[dict[str, str]]) -> ModelReply:
    self.calls.append((model, messages))
    reply = self.replies.pop(0)
    if isinstance(reply, BaseException):
      raise reply
    if callable(reply):
      return await reply()
    if isinstance(reply, str):
      return TextReply(reply)
    return reply


def make_event(
  event_id: str,
  summary: str,
  start: str | None,
  end: str | None,
  **extra: Any,
) -> dict[str, Any]:
  event: dict[str, Any] = {"id": event_id, "summary": summary, **extra}
  if start:
    event["start"] = {"dateTime": start, "timeZone": "America/Los_Angeles"}
  if end:
    event["end"] = {"dateTime": end, "timeZone": "America/Los_Angeles"}
  return event


@pytest.fixture
def settings() -> CalendarSettings:
  return CalendarSettings(
    google_client_email="svc@project.iam.gserviceaccount.com",
    google_private_key="MIIBfake\\nkey",
    google_calendar_id="team@example.com",
    cloudflare_account_id="acct",
    cloudflare_api_token="token",
    narration_timeout=0.05,
  )


@pytest.fixture
def calendar() -> FakeCalendar:
  return FakeCalendar()


@pytest.fixture
def generator() -> FakeGenerator:
  return FakeGenerator()


@pytest.fixture
def ctx(settings, calendar, generator):
  context = build_context(settings, calendar, generator)
  context.clock = lambda: NOW
  return context
