"""MCP server definition — binds the dispatcher to the low-level MCP Server."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from codeforces_mcp.codeforces_client import CodeforcesClient
from codeforces_mcp.dispatcher import Dispatcher

SERVER_NAME = "codeforces-mcp"
SERVER_VERSION = "1.0.0"

log = logging.getLogger("codeforces-mcp")


def _timeout() -> float:
    return float(os.environ.get("CODEFORCES_TIMEOUT", "10"))


def build_server(dispatcher: Dispatcher) -> Server:
    """Create a Server whose handlers all delegate to *dispatcher*."""
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return dispatcher.list_tools()

    # Arguments are validated by the dispatcher's pydantic models so failures
    # come back as "Error: ..." text rather than protocol-level errors.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        return await dispatcher.invoke(name, arguments)

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return dispatcher.list_resources()

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        text = dispatcher.read_resource(str(uri))
        return [ReadResourceContents(content=text, mime_type="application/json")]

    return server


async def serve() -> None:
    """Run the server on stdio until the host closes the channel."""
    async with CodeforcesClient(timeout=_timeout()) as client:
        server = build_server(Dispatcher(client))
        async with stdio_server() as (read_stream, write_stream):
            log.info("Codeforces MCP Server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())
