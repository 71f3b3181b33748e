"""
Google Calendar API client authenticated with a service account.

googleapiclient is synchronous, so every request runs in a worker thread.
httplib2.Http is not thread-safe, so each request gets its own transport.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import TYPE_CHECKING, Any, TypeVar

import google_auth_httplib2
import httplib2
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..errors import CalendarApiError

if TYPE_CHECKING:
  from collections.abc import Callable

  from ..config import CalendarSettings

log = logging.getLogger("gcal_query.client.google")

T = TypeVar("T")

# Google Calendar API scopes
SCOPES = ["https://www.googleapis.com/auth/calendar"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


async def _run_sync(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
  """Run a blocking googleapiclient call in a thread."""
  return await asyncio.to_thread(functools.partial(fn, *args, **kwargs))


def _error_from_http(e: HttpError) -> CalendarApiError:
  status = getattr(e.resp, "status", 0) or 0
  reason = getattr(e, "reason", "") or str(e)
  return CalendarApiError(int(status), reason)


class GoogleCalendarClient:
  """Client for Google Calendar API."""

  def __init__(self, settings: CalendarSettings, service: Any = None, credentials: Any = None):
    self._settings = settings
    self._credentials = credentials
    self.service: Any = service
    if self.service is None:
      if self._credentials is None:
        self._credentials = self._load_credentials()
      self.service = build(
        "calendar",
        "v3",
        credentials=self._credentials,
        cache_discovery=False,
      )

  def _load_credentials(self) -> service_account.Credentials:
    info = {
      "type": "service_account",
      "client_email": self._settings.google_client_email,
      "private_key": self._settings.google_private_key,
      "token_uri": TOKEN_URI,
    }
    try:
      return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
    except ValueError as e:
      log.error("Failed to load service account credentials: %s", e)
      raise

  def _new_http(self) -> httplib2.Http:
    http = httplib2.Http()
    if self._credentials is None:
      return http
    return google_auth_httplib2.AuthorizedHttp(self._credentials, http=http)

  async def _send(self, request: Any) -> Any:
    return await _run_sync(request.execute, http=self._new_http())

  async def _execute(self, request: Any, action: str) -> Any:
    try:
      return await self._send(request)
    except HttpError as e:
      log.error("Failed to %s: %s", action, e)
      raise _error_from_http(e) from e

  async def close(self) -> None:
    """Close the discovery service's transport."""
    await _run_sync(self.service.close)

  async def list_events(
    self,
    calendar_id: str,
    time_min: str,
    time_max: str,
    max_results: int = 50,
    order_by: str = "startTime",
    single_events: bool = True,
  ) -> list[dict[str, Any]]:
    """List events in a calendar."""
    request = self.service.events().list(
      calendarId=calendar_id,
      timeMin=time_min,
      timeMax=time_max,
      maxResults=max_results,
      singleEvents=single_events,
      orderBy=order_by,
    )
    result = await self._execute(request, "list events")
    return result.get("items", [])

  async def insert_event(self, calendar_id: str, body: dict[str, Any]) -> dict[str, Any]:
    """Create a new event."""
    request = self.service.events().insert(calendarId=calendar_id, body=body)
    return await self._execute(request, "create event")

  async def patch_event(
    self, calendar_id: str, event_id: str, body: dict[str, Any]
  ) -> dict[str, Any]:
    """Apply a partial update to an event."""
    request = self.service.events().patch(calendarId=calendar_id, eventId=event_id, body=body)
    return await self._execute(request, "update event")

  async def delete_event(self, calendar_id: str, event_id: str) -> None:
    """Delete an event."""
    request = self.service.events().delete(calendarId=calendar_id, eventId=event_id)
    await self._execute(request, "delete event")

  async def list_calendars(self) -> list[str]:
    """List the ids of all subscribed calendars."""
    result = await self._execute(self.service.calendarList().list(), "list calendars")
    return [item["id"] for item in result.get("items", []) if item.get("id")]

  async def subscribe_calendar(self, calendar_id: str) -> None:
    """Add a shared calendar to the service account's calendar list."""
    request = self.service.calendarList().insert(body={"id": calendar_id})
    try:
      await self._send(request)
    except HttpError as e:
      # 409: already in the calendar list
      if getattr(e.resp, "status", None) == 409:
        log.debug("Calendar %s already subscribed", calendar_id)
        return
      log.error("Failed to subscribe to calendar %s: %s", calendar_id, e)
      raise _error_from_http(e) from e
    log.info("Subscribed to calendar: %s", calendar_id)
