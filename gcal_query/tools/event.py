"""
Calendar event tools (4 tools).
"""

from __future__ import annotations

from mcp.types import Tool

event_tools: list[Tool] = [
  Tool(
    name="query_google_calendar",
    description="Query Google Calendar events and shape data",
    inputSchema={
      "type": "object",
      "properties": {
        "query": {
          "type": "string",
          "description": "Search query for calendar events on a certain date",
        },
      },
      "required": ["query"],
    },
  ),
  Tool(
    name="create_calendar_event",
    description="Create a new calendar event",
    inputSchema={
      "type": "object",
      "properties": {
        "name": {"type": "string", "description": "Name/title of the event"},
        "date": {"type": "string", "description": "Date of the event in YYYY-MM-DD format"},
        "time": {
          "type": "string",
          "description": "Time of the event in HH:MM format (24-hour)",
        },
        "location": {"type": "string", "description": "Location of the event (optional)"},
      },
      "required": ["name", "date", "time"],
    },
  ),
  Tool(
    name="remove_calendar_event",
    description=(
      "Remove a calendar event by event name/summary and optional date. "
      "Deletes the first match."
    ),
    inputSchema={
      "type": "object",
      "properties": {
        "query": {
          "type": "string",
          "description": "Event name or summary to search for (required)",
        },
        "date": {
          "type": "string",
          "description": "Date of the event in YYYY-MM-DD format (optional)",
        },
      },
      "required": ["query"],
    },
  ),
  Tool(
    name="update_calendar_event",
    description=(
      "Update an existing calendar event by event name/summary and optional date. "
      "You can change the title, date, time, or location. Only updates provided fields."
    ),
    inputSchema={
      "type": "object",
      "properties": {
        "query": {
          "type": "string",
          "description": "Event name or summary to search for (required)",
        },
        "date": {
          "type": "string",
          "description": "Date of the event in YYYY-MM-DD format (optional)",
        },
        "newTitle": {"type": "string", "description": "New title for the event (optional)"},
        "newDate": {"type": "string", "description": "New date in YYYY-MM-DD format (optional)"},
        "newTime": {
          "type": "string",
          "description": "New time in HH:MM format (24-hour, optional)",
        },
        "newLocation": {
          "type": "string",
          "description": "New location for the event (optional)",
        },
      },
      "required": ["query"],
    },
  ),
]
