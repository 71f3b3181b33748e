"""
Shared formatting and error handling helpers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum

from .errors import CollaboratorError, NoAccessibleCalendarError, ResolutionError
from .validation import ValidationError

log = logging.getLogger("gcal_query.helpers")

SUCCESS_MARK = "✅"
ERROR_MARK = "❌"


# ---------------------------------------------------------------------------
# Tool result
# ---------------------------------------------------------------------------


@dataclass
class ToolResult:
  content: str
  is_error: bool = False


def success(text: str) -> ToolResult:
  return ToolResult(content=f"{SUCCESS_MARK} {text}")


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_local_date(dt: datetime, zone: tzinfo) -> str:
  """Format as M/D/YYYY in the given zone."""
  local = dt.astimezone(zone)
  return f"{local.month}/{local.day}/{local.year}"


def format_local_datetime(dt: datetime, zone: tzinfo) -> str:
  """Format as M/D/YYYY, H:MM AM in the given zone."""
  local = dt.astimezone(zone)
  hour = local.hour % 12 or 12
  meridiem = "AM" if local.hour < 12 else "PM"
  return f"{format_local_date(local, zone)}, {hour}:{local.minute:02d} {meridiem}"


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


class ErrorCategory(str, Enum):
  QUERY = "QUERY"
  EVENT = "EVENT"
  RESOLUTION = "RESOLUTION"
  CALENDAR = "CALENDAR"
  VALIDATION = "VALIDATION"
  API = "API"


def categorize(error: Exception) -> ErrorCategory | None:
  if isinstance(error, ValidationError):
    return ErrorCategory.VALIDATION
  if isinstance(error, ResolutionError):
    return ErrorCategory.RESOLUTION
  if isinstance(error, NoAccessibleCalendarError):
    return ErrorCategory.CALENDAR
  if isinstance(error, CollaboratorError):
    return ErrorCategory.API
  return None


def log_and_format_error(
  function_name: str,
  action: str,
  error: Exception,
  category: str | ErrorCategory | None = None,
) -> ToolResult:
  """Log a handler failure and turn it into an error-marked result.

  ``action`` completes the sentence "Error ...", e.g. "querying calendar".
  """
  category = categorize(error) or category
  prefix = category.value if isinstance(category, ErrorCategory) else (category or "GEN")
  hash_val = sum(ord(c) for c in function_name) % 1000
  error_code = f"{prefix}-ERR-{hash_val:03d}"

  log.error("[MCP] Error in %s - Code: %s - %s", function_name, error_code, error)

  return ToolResult(content=f"{ERROR_MARK} Error {action}: {error}", is_error=True)
