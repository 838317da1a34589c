"""
Tool dispatcher for the iLevel MCP server.

Holds the static tool catalog built from `ilevel_mcp.tools` and routes
tools/call, resources/list and resources/read requests. The dispatcher does
not depend on a transport; `ilevel_mcp.server` binds it to the MCP server.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional

from mcp import types
from mcp.shared.exceptions import McpError
from pydantic import ValidationError

from ilevel_mcp.core.config import ILevelConfig
from ilevel_mcp.core.exceptions import ILevelError
from ilevel_mcp.core.ilevel_client import ILevelClient
from ilevel_mcp.core.resources import CONFIG_RESOURCE_URI, config_resource, render_config
from ilevel_mcp.tools import TOOL_MODULES
from ilevel_mcp.tools.schemas import ToolInput
from ilevel_mcp.utils.response_utils import format_payload

logger = logging.getLogger(__name__)

ToolFunc = Callable[[ILevelClient, Any], Awaitable[Any]]


def _error(code: int, message: str) -> McpError:
    return McpError(types.ErrorData(code=code, message=message))


@dataclass(frozen=True)
class ToolEntry:
    """One catalog row: the tool's identity, its input model and its handler."""

    name: str
    description: str
    input_model: type[ToolInput]
    func: ToolFunc
    title: Optional[str] = None

    def descriptor(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            title=self.title,
            description=self.description,
            inputSchema=self.input_model.model_json_schema(),
        )


def build_catalog(modules: Iterable[Any] = TOOL_MODULES) -> Mapping[str, ToolEntry]:
    """Collect every tool exposed by `modules` into a read-only mapping."""
    catalog: dict[str, ToolEntry] = {}
    for mod in modules:
        for tool_name, meta in mod.get_tools().items():
            if tool_name in catalog:
                raise ValueError(f"Tool {tool_name} registered twice (second time by {mod.__name__})")
            catalog[tool_name] = ToolEntry(
                name=tool_name,
                description=meta["description"],
                input_model=meta["input"],
                func=meta["func"],
                title=meta.get("title"),
            )
    logger.info(f"Total tools registered: {len(catalog)}, tool names: {list(catalog)}")
    return MappingProxyType(catalog)


class ToolDispatcher:
    """
    Route MCP requests to the iLevel client.

    Args:
        config: The active configuration, exposed read-only as a resource.
        client: Client every tool call is sent through.
        catalog: Tool table; defaults to all tools in `ilevel_mcp.tools`.
    """

    def __init__(
        self,
        config: ILevelConfig,
        client: ILevelClient,
        catalog: Optional[Mapping[str, ToolEntry]] = None,
    ):
        self.config = config
        self.client = client
        self._tools = catalog if catalog is not None else build_catalog()

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[types.Tool]:
        return [entry.descriptor() for entry in self._tools.values()]

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]]) -> list[types.TextContent]:
        """Validate the arguments, run the tool and wrap its payload as text.

        Raises:
            McpError: METHOD_NOT_FOUND for an unknown tool, INVALID_PARAMS when
                the arguments do not fit the tool's input model, INTERNAL_ERROR
                when the iLevel request fails.
        """
        entry = self._tools.get(name)
        if entry is None:
            raise _error(types.METHOD_NOT_FOUND, f"Unknown tool: {name}")

        try:
            args = entry.input_model.model_validate(dict(arguments or {}))
        except ValidationError as e:
            raise _error(types.INVALID_PARAMS, f"Invalid arguments for {name}: {e}") from e

        try:
            data = await entry.func(self.client, args)
        except ILevelError as e:
            raise _error(types.INTERNAL_ERROR, e.message) from e
        except Exception as e:
            logger.exception(f"Tool {name} failed")
            raise _error(types.INTERNAL_ERROR, f"Request failed: {e}") from e

        return [types.TextContent(type="text", text=format_payload(data))]

    def list_resources(self) -> list[types.Resource]:
        return [config_resource()]

    def read_resource(self, uri: Any) -> str:
        """Return the configuration snapshot as JSON; any other URI is rejected."""
        requested = str(uri)
        if requested.rstrip("/") == CONFIG_RESOURCE_URI:
            return render_config(self.config)
        raise _error(types.INVALID_REQUEST, f"Unknown resource: {requested}")
