"""
Per-server wiring of collaborators, handed to every tool handler.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
  from .ai.narrator import ResultNarrator
  from .ai.resolver import IntentResolver
  from .client.base import CalendarBackend
  from .config import CalendarSettings


def _utcnow() -> datetime:
  return datetime.now(UTC)


@dataclass
class CalendarContext:
  settings: CalendarSettings
  calendar: CalendarBackend
  resolver: IntentResolver
  narrator: ResultNarrator
  clock: Callable[[], datetime] = field(default=_utcnow)

  def now(self) -> datetime:
    return self.clock()
