"""
Async HTTP client for Cloudflare Workers AI text generation.

Uses aiohttp with bearer token auth. Requests are made once; callers decide
what a failure means.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from ..errors import ModelError
from .base import ModelReply, StructuredReply, TextReply

log = logging.getLogger("gcal_query.client.workers_ai")

BASE_URL = "https://api.cloudflare.com"
REQUEST_TIMEOUT = 60


def parse_reply(body: Any) -> ModelReply:
  """Classify a decoded Workers AI body as a bare string or a structured reply."""
  if isinstance(body, str):
    return TextReply(body)
  if not isinstance(body, dict):
    return StructuredReply(response=None, raw={"result": body})

  result = body.get("result", body)
  if isinstance(result, str):
    return TextReply(result)
  if isinstance(result, dict):
    return StructuredReply(response=result.get("response"), raw=result)
  return StructuredReply(response=None, raw=body)


def reply_text(reply: ModelReply) -> str:
  """Extract the generated text from a reply.

  A structured reply whose ``response`` is not a usable string falls back to
  the JSON encoding of that response, or of the whole reply when empty.
  """
  if isinstance(reply, TextReply):
    return reply.text
  response = reply.response
  if isinstance(response, str) and response:
    return response
  if response not in (None, "", {}, []):
    return json.dumps(response)
  return json.dumps(reply.raw)


class WorkersAIClient:
  """Async HTTP client for the Workers AI ``ai/run`` endpoint."""

  def __init__(
    self,
    account_id: str,
    api_token: str,
    *,
    base_url: str = BASE_URL,
    timeout: float = REQUEST_TIMEOUT,
  ) -> None:
    self._account_id = account_id
    self._api_token = api_token
    self._base_url = base_url
    self._timeout = timeout
    self._session: aiohttp.ClientSession | None = None

  @property
  def is_connected(self) -> bool:
    return self._session is not None and not self._session.closed

  async def connect(self) -> None:
    """Create the aiohttp session."""
    if self._session and not self._session.closed:
      return
    self._session = aiohttp.ClientSession(
      base_url=self._base_url,
      headers={
        "Authorization": f"Bearer {self._api_token}",
        "Content-Type": "application/json",
      },
      timeout=aiohttp.ClientTimeout(total=self._timeout),
    )

  async def close(self) -> None:
    """Close the aiohttp session."""
    if self._session and not self._session.closed:
      await self._session.close()
      self._session = None

  async def generate(self, model: str, messages: list[dict[str, str]]) -> ModelReply:
    """Run a chat model and return its reply."""
    if not self._session:
      await self.connect()
    assert self._session is not None

    path = f"/client/v4/accounts/{self._account_id}/ai/run/{model}"
    try:
      async with self._session.post(path, json={"messages": messages}) as resp:
        if resp.status >= 400:
          text = await resp.text()
          raise ModelError(resp.status, text)
        if resp.content_type == "application/json":
          body = await resp.json()
        else:
          body = await resp.text()
    except TimeoutError as e:
      raise ModelError(0, f"Request timed out after {self._timeout}s") from e
    except aiohttp.ClientError as e:
      raise ModelError(0, f"Request failed: {e}") from e

    if isinstance(body, dict) and body.get("success") is False:
      errors = body.get("errors") or []
      message = "; ".join(
        str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors
      )
      message = message or "unknown error"
      raise ModelError(200, message)

    log.debug("Model %s replied: %s", model, body)
    return parse_reply(body)
