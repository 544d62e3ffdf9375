"""
Control Plane MCP Server - entry point.

Serves the pod diagnostics tools over one of two MCP transports:
- streamable-http: stateless streamable HTTP mounted at /mcp (default)
- stdio: standard input/output, for clients that spawn the server
"""

import argparse
import asyncio
import contextlib
import logging
import sys
from typing import Any, AsyncIterator, Sequence

import uvicorn
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.routing import Mount
from starlette.types import Receive, Scope, Send

from controlplane_mcp import __version__
from controlplane_mcp.clients.kubernetes import K8sClientError, load_core_v1
from controlplane_mcp.clients.pods import PodAccessor
from controlplane_mcp.config import Settings
from controlplane_mcp.tools import ToolDispatcher

SERVER_NAME = "controlplane-mcp-server"
SERVER_DESCRIPTION = "Kubernetes pod diagnostics MCP server"

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False, dev_mode: bool = False) -> None:
    """Send logs to stderr; stdout is reserved for the stdio transport."""
    if dev_mode:
        fmt = "%(asctime)s %(levelname)-5s %(name)s %(filename)s:%(lineno)d %(message)s"
    else:
        fmt = "%(asctime)s %(levelname)s %(name)s %(message)s"
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if debug else logging.INFO,
        format=fmt,
        force=True,
    )


def build_server(dispatcher: ToolDispatcher) -> Server:
    """Create an MCP server exposing the dispatcher's tools."""
    server = Server(
        SERVER_NAME,
        version=__version__,
        instructions="Read-only Kubernetes pod logs and events.",
    )

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return dispatcher.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        # Cluster calls block, keep them off the event loop.
        result = await asyncio.to_thread(dispatcher.call, name, arguments)
        return result.to_call_tool_result()

    return server


def create_http_app(server: Server) -> Starlette:
    """Mount a stateless streamable HTTP endpoint for the server at /mcp."""
    session_manager = StreamableHTTPSessionManager(app=server, stateless=True)

    async def handle_mcp(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            yield

    return Starlette(routes=[Mount("/mcp", app=handle_mcp)], lifespan=lifespan)


async def _serve_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(SERVER_NAME, description=SERVER_DESCRIPTION)
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        default=None,
        help="Run with debug logging.",
    )
    parser.add_argument(
        "--dev-mode",
        action="store_true",
        default=None,
        help="Enables logging dev mode.",
    )
    parser.add_argument(
        "--transport",
        choices=["streamable-http", "stdio"],
        help="MCP transport mode: streamable-http / stdio",
    )
    parser.add_argument("--host", help="Address to listen on.")
    parser.add_argument("-p", "--port", type=int, help="Port to listen on.")
    parser.add_argument(
        "--kubeconfig",
        dest="kubeconfig_path",
        help=(
            "Location of the kubeconfig to use for the API clients. "
            "Default is to use the incluster config."
        ),
    )
    parser.add_argument(
        "--context",
        dest="kubernetes_context",
        help="Kubernetes context to use from the kubeconfig.",
    )
    parser.add_argument(
        "--max-events",
        type=int,
        help="Maximum number of events to return for a pod.",
    )
    parser.add_argument(
        "--max-log-lines",
        type=int,
        help="Maximum number of log lines to return for a pod.",
    )
    return parser.parse_args(argv)


def build_settings(argv: Sequence[str] | None = None) -> Settings:
    """
    Build settings from the environment, overridden by command line flags.

    Exits with a usage error if the resulting settings are invalid.
    """
    args = _parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise SystemExit(f"{SERVER_NAME}: invalid configuration:\n{e}") from e


def main(argv: Sequence[str] | None = None) -> None:
    settings = build_settings(argv)
    configure_logging(debug=settings.debug, dev_mode=settings.dev_mode)

    try:
        core_v1 = load_core_v1(settings)
    except K8sClientError as e:
        logger.error("failed to construct clientset: %s", e)
        sys.exit(1)

    accessor = PodAccessor(core_v1, settings.accessor_config())
    server = build_server(ToolDispatcher(accessor))

    if settings.transport == "stdio":
        logger.info("stdio server starting")
        asyncio.run(_serve_stdio(server))
        return

    logger.info(
        "Streamable HTTP server starting at http://%s:%d/mcp",
        settings.host,
        settings.port,
    )
    uvicorn.run(
        create_http_app(server),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )
