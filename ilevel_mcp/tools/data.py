from typing import Any

from ilevel_mcp.core.ilevel_client import ILevelClient
from ilevel_mcp.tools.schemas import DataQuery


async def query_data(client: ILevelClient, args: DataQuery) -> Any:
    return await client.query_data(args.query)


def get_tools() -> dict[str, Any]:
    return {
        "query_data": {
            "func": query_data,
            "input": DataQuery,
            "title": "Query data",
            "description": "Query data from iLevel using the data retrieval API",
        }
    }
