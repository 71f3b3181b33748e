"""
Error taxonomy for the calendar tools.

Every error raised inside a tool handler is turned into an error-marked text
result at the tool boundary; none of these escape to the MCP caller.
"""

from __future__ import annotations


class CalendarQueryError(Exception):
  """Base class for all calendar tool errors."""

  pass


class ResolutionError(CalendarQueryError):
  """Model output could not be turned into a date range or a time."""

  pass


class NoAccessibleCalendarError(CalendarQueryError):
  """The service account is not subscribed to any calendar."""

  def __init__(self, message: str = "No accessible calendars found"):
    super().__init__(message)


class NotFoundError(CalendarQueryError):
  """No event title matched the query inside the search window."""

  def __init__(self, query: str, date: str | None = None):
    self.query = query
    self.date = date
    super().__init__(f'No event found matching "{query}"' + (f" on {date}" if date else ""))


class CollaboratorError(CalendarQueryError):
  """An external service (calendar backend or model host) failed."""

  def __init__(self, status: int, message: str):
    self.status = status
    super().__init__(message)


class CalendarApiError(CollaboratorError):
  """Google Calendar request failed."""

  def __init__(self, status: int, message: str):
    super().__init__(status, f"Google Calendar API error {status}: {message}")


class ModelError(CollaboratorError):
  """Text-generation request failed."""

  def __init__(self, status: int, message: str):
    super().__init__(status, f"Workers AI error {status}: {message}")
