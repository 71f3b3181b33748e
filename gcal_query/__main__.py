"""
Entry point — starts the MCP server.

Run with: python -m gcal_query [--config config.json] [--debug]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from .config import load_settings
from .server import run_server

log = logging.getLogger("gcal_query")


def main(argv: list[str] | None = None) -> None:
  parser = argparse.ArgumentParser(prog="gcal-query", description=__doc__)
  parser.add_argument("--config", help="JSON config file; env vars take precedence")
  parser.add_argument("--debug", action="store_true", help="Log model replies and lookups")
  opts = parser.parse_args(argv)

  # stdout carries the MCP stream
  logging.basicConfig(
    level=logging.DEBUG if opts.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
  )

  settings = load_settings(opts.config, os.environ)
  log.info("Starting calendar server for %s (%s)", settings.google_calendar_id, settings.timezone)
  asyncio.run(run_server(settings))


if __name__ == "__main__":
  main()
