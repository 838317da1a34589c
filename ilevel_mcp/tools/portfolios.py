from typing import Any

from ilevel_mcp.core.ilevel_client import ILevelClient
from ilevel_mcp.tools.schemas import FilterQuery, PagedQuery


async def get_portfolios(client: ILevelClient, args: PagedQuery) -> Any:
    return await client.get_portfolios(args.query())


# Assets, funds and investments take the filter mapping itself as the query.

async def get_assets(client: ILevelClient, args: FilterQuery) -> Any:
    return await client.get_assets(args.filters)


async def get_funds(client: ILevelClient, args: FilterQuery) -> Any:
    return await client.get_funds(args.filters)


async def get_investments(client: ILevelClient, args: FilterQuery) -> Any:
    return await client.get_investments(args.filters)


def get_tools() -> dict[str, Any]:
    return {
        "get_portfolios": {
            "func": get_portfolios,
            "input": PagedQuery,
            "title": "List portfolios",
            "description": "Get portfolio data from iLevel",
        },
        "get_assets": {"func": get_assets, "input": FilterQuery, "title": "List assets", "description": "Get assets from iLevel"},
        "get_funds": {"func": get_funds, "input": FilterQuery, "title": "List funds", "description": "Get funds from iLevel"},
        "get_investments": {
            "func": get_investments,
            "input": FilterQuery,
            "title": "List investments",
            "description": "Get investments from iLevel",
        },
    }
