"""codeforces-mcp: MCP server exposing read-only Codeforces API tools."""

import logging
import os

import anyio

from codeforces_mcp.server import serve


def main() -> None:
    """CLI entry point — starts the MCP server over stdio."""
    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    anyio.run(serve)
