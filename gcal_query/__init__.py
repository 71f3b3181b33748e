"""
Google Calendar tools over MCP, with model-assisted date resolution and
event summaries.
"""

__version__ = "2.0.0"
