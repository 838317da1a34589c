from ilevel_mcp import SERVER_NAME, __version__
from ilevel_mcp.core.config import ILevelConfig, load_config, load_yaml_defaults, usage
from ilevel_mcp.core.dispatcher import ToolDispatcher
from ilevel_mcp.core.exceptions import ConfigurationError
from ilevel_mcp.core.ilevel_client import ILevelClient
from ilevel_mcp.core.logging_config import get_log_file, get_logger, setup_logging
from ilevel_mcp.core.resources import JSON_MIME_TYPE
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl
from typing import Optional
import asyncio
import sys

logger = get_logger(__name__)


def create_server(config: ILevelConfig, client: ILevelClient, dispatcher: Optional[ToolDispatcher] = None) -> Server:
    """Build the MCP server and bind its request handlers to one dispatcher."""
    dispatcher = dispatcher or ToolDispatcher(config, client)
    server = Server(SERVER_NAME, version=__version__)

    ###################################################### MCP Tools ######################################################

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return dispatcher.list_tools()

    # Registered without the call_tool() decorator, which would turn McpError
    # into an isError result and lose the error code.
    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        content = await dispatcher.call_tool(req.params.name, req.params.arguments)
        return types.ServerResult(types.CallToolResult(content=content))

    server.request_handlers[types.CallToolRequest] = call_tool

    ###################################################### MCP Resources ######################################################

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return dispatcher.list_resources()

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        return [ReadResourceContents(content=dispatcher.read_resource(uri), mime_type=JSON_MIME_TYPE)]

    logger.info(f"MCP server {SERVER_NAME} {__version__} created with {len(dispatcher.tool_names)} tools")
    return server


async def serve(config: ILevelConfig) -> None:
    async with ILevelClient(config) as client:
        # Startup check only warns; the server still starts without connectivity
        if await client.test_connection():
            logger.info("Successfully connected to iLevel API")
        else:
            logger.warning("Could not verify connection to iLevel API")

        server = create_server(config, client)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("iLevel MCP Server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("MCP server shut down.")


###################################################### Startup ######################################################

def main() -> None:
    try:
        defaults = load_yaml_defaults()
    except ConfigurationError as e:
        setup_logging()
        logger.error(f"ERROR: {e.message}")
        sys.exit(1)

    setup_logging(defaults.get("logs_dir"))
    logger.info("Starting S&P Global iLevel MCP Server...")

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(f"ERROR: {e.message}")
        logger.error(usage())
        sys.exit(1)

    try:
        asyncio.run(serve(config))
    except Exception:
        logger.exception("Unhandled exception running MCP server")
        log_file = get_log_file()
        where = f"See {log_file} for details." if log_file else "See the log output above for details."
        print(f"Unhandled exception occurred. {where}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
