"""
External collaborators: Google Calendar and Workers AI.
"""

from __future__ import annotations

from .base import CalendarBackend, ModelReply, StructuredReply, TextGenerator, TextReply

__all__ = [
  "CalendarBackend",
  "ModelReply",
  "StructuredReply",
  "TextGenerator",
  "TextReply",
]
