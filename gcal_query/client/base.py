"""
Collaborator interfaces.

Handlers and the AI pipeline depend on these protocols only, so tests can
substitute in-memory fakes for Google Calendar and Workers AI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


class CalendarBackend(Protocol):
  async def list_events(
    self,
    calendar_id: str,
    time_min: str,
    time_max: str,
    max_results: int = 50,
    order_by: str = "startTime",
    single_events: bool = True,
  ) -> list[dict[str, Any]]: ...

  async def insert_event(self, calendar_id: str, body: dict[str, Any]) -> dict[str, Any]: ...

  async def patch_event(
    self, calendar_id: str, event_id: str, body: dict[str, Any]
  ) -> dict[str, Any]: ...

  async def delete_event(self, calendar_id: str, event_id: str) -> None: ...

  async def list_calendars(self) -> list[str]: ...

  async def subscribe_calendar(self, calendar_id: str) -> None: ...


# ---------------------------------------------------------------------------
# Model replies
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextReply:
  """The model host answered with a bare string."""

  text: str


@dataclass(frozen=True)
class StructuredReply:
  """The model host answered with an object carrying a ``response`` field."""

  response: Any
  raw: dict[str, Any]


ModelReply = TextReply | StructuredReply


class TextGenerator(Protocol):
  async def generate(self, model: str, messages: list[dict[str, str]]) -> ModelReply: ...
