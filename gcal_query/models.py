"""
Value types passed between the resolver, the normalizer and the narrator.

All of these are built fresh per tool call and never persisted.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DateRange(BaseModel):
  """Inclusive search window resolved from a free-text query."""

  model_config = ConfigDict(frozen=True)

  start: datetime
  end: datetime

  @model_validator(mode="after")
  def _check_order(self) -> DateRange:
    if self.start > self.end:
      raise ValueError(f"start {self.start.isoformat()} is after end {self.end.isoformat()}")
    return self


class NormalizedTime(BaseModel):
  """A wall-clock time as returned by the resolver.

  Range checks are left to the caller; see ``in_range``.
  """

  model_config = ConfigDict(frozen=True)

  hours: int
  minutes: int

  @property
  def in_range(self) -> bool:
    return 0 <= self.hours <= 23 and 0 <= self.minutes <= 59

  def __str__(self) -> str:
    return f"{self.hours:02d}:{self.minutes:02d}"


class EventRecord(BaseModel):
  """Normalized view of a Google Calendar event."""

  model_config = ConfigDict(frozen=True)

  name: str = "No title"
  creator: str = ""
  start: datetime | None = None
  end: datetime | None = None
  attendee_emails: list[str] = Field(default_factory=list)
  location: str = ""
  source_calendar: str = ""
  id: str = ""
  time_zone: str = ""
  duration_minutes: int | None = None
