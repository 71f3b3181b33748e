"""
Tool dispatch — routes tool names to handler functions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..helpers import ERROR_MARK, ToolResult
from .event import (
  create_calendar_event,
  query_google_calendar,
  remove_calendar_event,
  update_calendar_event,
)

if TYPE_CHECKING:
  from ..context import CalendarContext

log = logging.getLogger("gcal_query.handlers")

# Map tool names to handler functions
HANDLERS: dict[str, Any] = {
  "query_google_calendar": query_google_calendar,
  "create_calendar_event": create_calendar_event,
  "remove_calendar_event": remove_calendar_event,
  "update_calendar_event": update_calendar_event,
}


async def dispatch_tool(ctx: CalendarContext, tool_name: str, args: dict[str, Any]) -> ToolResult:
  """Dispatch a tool call to the appropriate handler."""
  handler = HANDLERS.get(tool_name)
  if not handler:
    log.error("Unknown tool: %s", tool_name)
    return ToolResult(content=f"{ERROR_MARK} Unknown tool: {tool_name}", is_error=True)

  try:
    return await handler(ctx, args)
  except Exception as e:
    log.exception("Error executing tool %s: %s", tool_name, e)
    return ToolResult(content=f"{ERROR_MARK} Error: {e!s}", is_error=True)
