"""
MCP server — handles tools/list and tools/call over stdio.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .ai import IntentResolver, ResultNarrator
from .client.google_client import GoogleCalendarClient
from .client.workers_ai import WorkersAIClient
from .context import CalendarContext
from .handlers import dispatch_tool
from .tools import ALL_TOOLS

if TYPE_CHECKING:
  from .client.base import CalendarBackend, TextGenerator
  from .config import CalendarSettings

log = logging.getLogger("gcal_query.server")

SERVER_NAME = "Google Calendar Query"


def build_context(
  settings: CalendarSettings,
  calendar: CalendarBackend,
  generator: TextGenerator,
) -> CalendarContext:
  """Wire the resolver and narrator around the given collaborators."""
  return CalendarContext(
    settings=settings,
    calendar=calendar,
    resolver=IntentResolver(generator, settings),
    narrator=ResultNarrator(generator, settings),
  )


def create_mcp_server(ctx: CalendarContext) -> Server:
  """Create and configure the MCP server with all tool handlers."""
  server = Server(SERVER_NAME)

  @server.list_tools()
  async def list_tools() -> list[Tool]:
    return ALL_TOOLS

  @server.call_tool()
  async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
    args = arguments or {}
    log.info("Tool call: %s", name)
    result = await dispatch_tool(ctx, name, args)
    if result.is_error:
      log.info("Tool %s returned an error result", name)
    return [TextContent(type="text", text=result.content)]

  return server


async def run_server(settings: CalendarSettings) -> None:
  """Run the MCP server on stdio."""
  generator = WorkersAIClient(settings.cloudflare_account_id, settings.cloudflare_api_token)
  calendar = GoogleCalendarClient(settings)
  ctx = build_context(settings, calendar, generator)
  server = create_mcp_server(ctx)

  await generator.connect()
  try:
    async with stdio_server() as (read_stream, write_stream):
      log.info("Serving %d tools on stdio", len(ALL_TOOLS))
      await server.run(read_stream, write_stream, server.create_initialization_options())
  finally:
    await generator.close()
    await calendar.close()
