"""
Read-only MCP Server for Odoo.

This server exposes record lookup tools via the Model Context Protocol.
Supports both stdio (local) and HTTP/SSE (remote) transports.
"""

import asyncio
import logging
import os
import signal
import sys
from typing import Any, Optional

from mcp.server import Server
from mcp.types import (
    Tool,
    CallToolResult,
)

from . import __version__
from .config import get_odoo_client
from .tools import get_tool_definitions
from .tools import call_tool as dispatch_tool

logger = logging.getLogger(__name__)

# Initialize MCP server
app = Server("odoo-mcp-ro", version=__version__)


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return get_tool_definitions()


# Argument checking is done by the tool registry, which reports field paths
@app.call_tool(validate_input=False)
async def call_tool(name: str, arguments: Optional[dict[str, Any]]) -> CallToolResult:
    """Handle tool calls. The Odoo round trip runs in a worker thread."""
    return await asyncio.to_thread(dispatch_tool, get_odoo_client, name, arguments)


async def run_stdio():
    """Run the MCP server with stdio transport (for local use)."""
    from mcp.server.stdio import stdio_server
    logger.info("Odoo MCP server running on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options()
        )


async def run_sse(host: str = "0.0.0.0", port: int = 8000):
    """Run the MCP server with SSE transport (for remote use)."""
    from mcp.server.sse import SseServerTransport
    from starlette.applications import Starlette
    from starlette.routing import Route, Mount
    from starlette.responses import JSONResponse, PlainTextResponse
    import uvicorn

    sse = SseServerTransport("/messages/")

    async def handle_sse(request):
        async with sse.connect_sse(
            request.scope, request.receive, request._send
        ) as streams:
            await app.run(
                streams[0], streams[1], app.create_initialization_options()
            )

    async def handle_messages(request):
        await sse.handle_post_message(request.scope, request.receive, request._send)

    async def health_check(request):
        return JSONResponse({"status": "healthy", "service": "odoo-mcp-ro", "version": __version__})

    async def root(request):
        return PlainTextResponse("Odoo read-only MCP Server is running. Connect via /sse endpoint.")

    starlette_app = Starlette(
        debug=False,
        routes=[
            Route("/", root),
            Route("/health", health_check),
            Route("/sse", handle_sse),
            Mount("/messages/", routes=[Route("/", handle_messages, methods=["POST"])]),
        ],
    )

    config = uvicorn.Config(starlette_app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)
    await server.serve()


def _exit_on_signal(signum, frame):
    # In-flight requests are not drained; the stdin reader thread would block a normal shutdown
    logger.info("Received signal %s, exiting", signum)
    logging.shutdown()
    os._exit(0)


def configure_logging():
    """Send logs to stderr; stdout carries the stdio protocol."""
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Main entry point - determines transport based on environment."""
    configure_logging()
    signal.signal(signal.SIGTERM, _exit_on_signal)
    signal.signal(signal.SIGINT, _exit_on_signal)

    # Check if PORT is set or MCP_TRANSPORT is sse
    port = os.environ.get("PORT")
    try:
        if port or os.environ.get("MCP_TRANSPORT", "stdio") == "sse":
            port = int(port or 8000)
            host = os.environ.get("HOST", "0.0.0.0")
            logger.info("Starting MCP server with SSE transport on %s:%s", host, port)
            asyncio.run(run_sse(host=host, port=port))
        else:
            # Default to stdio for local use
            asyncio.run(run_stdio())
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
