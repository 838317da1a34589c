# tools package for the iLevel MCP server
# Each module exposes `get_tools() -> dict[str, dict]` mapping a tool name to
# {"func", "input", "title", "description"}; `func(client, args)` is awaited by the dispatcher.
from . import clients, data, documents, portfolios, system, users, valuations, webhooks

# Fixed registration order, which is also the order of tools/list.
TOOL_MODULES = (system, users, clients, portfolios, documents, valuations, data, webhooks)

__all__ = ["TOOL_MODULES"]
