from typing import Any

from ilevel_mcp.core.ilevel_client import ILevelClient
from ilevel_mcp.tools.schemas import ClientRef, PagedQuery


async def get_clients(client: ILevelClient, args: PagedQuery) -> Any:
    return await client.get_clients(args.query())


async def get_client(client: ILevelClient, args: ClientRef) -> Any:
    return await client.get_client(args.client_id)


def get_tools() -> dict[str, Any]:
    return {
        "get_clients": {
            "func": get_clients,
            "input": PagedQuery,
            "title": "List clients",
            "description": "Get a list of clients from iLevel",
        },
        "get_client": {
            "func": get_client,
            "input": ClientRef,
            "title": "Get client",
            "description": "Get details of a specific client by ID",
        },
    }
