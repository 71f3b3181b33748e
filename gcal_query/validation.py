"""
Input validation helpers for tool arguments.
"""

from __future__ import annotations

import re
from datetime import date

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class ValidationError(Exception):
  """Raised when input validation fails."""

  pass


def opt_string(args: dict, key: str, default: str | None = None) -> str | None:
  """Extract optional string from args."""
  val = args.get(key)
  if val is None:
    return default
  if isinstance(val, str):
    return val.strip() if val.strip() else default
  return str(val).strip() if str(val).strip() else default


def require_string(args: dict, key: str) -> str:
  """Extract required string from args."""
  val = opt_string(args, key)
  if val is None or val == "":
    raise ValidationError(f"Missing required parameter: {key}")
  return val


def opt_date(args: dict, key: str) -> date | None:
  """Extract an optional YYYY-MM-DD date."""
  val = opt_string(args, key)
  if val is None:
    return None
  if not _DATE_RE.match(val):
    raise ValidationError(f"Invalid {key}: expected YYYY-MM-DD, got {val!r}")
  try:
    return date.fromisoformat(val)
  except ValueError as e:
    raise ValidationError(f"Invalid {key}: {e}") from e


def require_date(args: dict, key: str) -> date:
  """Extract a required YYYY-MM-DD date."""
  val = opt_date(args, key)
  if val is None:
    raise ValidationError(f"Missing required parameter: {key}")
  return val


def opt_clock_time(args: dict, key: str) -> tuple[int, int] | None:
  """Extract an optional 24-hour HH:MM time as (hours, minutes)."""
  val = opt_string(args, key)
  if val is None:
    return None
  match = _CLOCK_RE.match(val)
  if not match:
    raise ValidationError(f"Invalid {key}: expected HH:MM (24-hour), got {val!r}")
  hours, minutes = int(match.group(1)), int(match.group(2))
  if hours > 23 or minutes > 59:
    raise ValidationError(f"Invalid {key}: {val!r} is not a valid time of day")
  return hours, minutes
