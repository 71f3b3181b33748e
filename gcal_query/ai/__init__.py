"""
Model-backed steps of the tool pipeline.
"""

from __future__ import annotations

from .narrator import ResultNarrator
from .resolver import IntentResolver

__all__ = ["IntentResolver", "ResultNarrator"]
