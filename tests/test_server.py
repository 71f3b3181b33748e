"""Tests for the MCP tool surface."""

from __future__ import annotations

import contextlib

import pytest
from mcp.server import Server

from gcal_query import server as server_module
from gcal_query.handlers import HANDLERS
from gcal_query.server import create_mcp_server
from gcal_query.tools import ALL_TOOLS


def test_every_tool_has_a_handler():
  assert {t.name for t in ALL_TOOLS} == set(HANDLERS)


def test_required_arguments():
  required = {t.name: set(t.inputSchema.get("required", [])) for t in ALL_TOOLS}
  assert required == {
    "query_google_calendar": {"query"},
    "create_calendar_event": {"name", "date", "time"},
    "remove_calendar_event": {"query"},
    "update_calendar_event": {"query"},
  }


def test_update_optional_arguments():
  update = next(t for t in ALL_TOOLS if t.name == "update_calendar_event")
  assert set(update.inputSchema["properties"]) == {
    "query",
    "date",
    "newTitle",
    "newDate",
    "newTime",
    "newLocation",
  }


def test_create_mcp_server(ctx):
  server = create_mcp_server(ctx)
  assert isinstance(server, Server)
  assert server.name == "Google Calendar Query"


class _Closable:
  def __init__(self, name: str, closed: list[str]) -> None:
    self.name = name
    self.closed = closed

  async def connect(self) -> None:
    pass

  async def close(self) -> None:
    self.closed.append(self.name)


async def test_run_server_closes_both_clients(monkeypatch, settings):
  closed: list[str] = []
  monkeypatch.setattr(
    server_module, "WorkersAIClient", lambda *a, **kw: _Closable("model", closed)
  )
  monkeypatch.setattr(
    server_module, "GoogleCalendarClient", lambda *a, **kw: _Closable("calendar", closed)
  )

  @contextlib.asynccontextmanager
  async def broken_stdio():
    raise OSError("stdin closed")
    yield

  monkeypatch.setattr(server_module, "stdio_server", broken_stdio)

  with pytest.raises(OSError):
    await server_module.run_server(settings)

  assert closed == ["model", "calendar"]
