from typing import Any

from ilevel_mcp.core.ilevel_client import ILevelClient
from ilevel_mcp.tools.schemas import FilterQuery, ValuationInput


async def get_valuations(client: ILevelClient, args: FilterQuery) -> Any:
    return await client.get_valuations(args.filters)


async def create_valuation(client: ILevelClient, args: ValuationInput) -> Any:
    """POST the valuation payload as given; iLevel decides create vs update."""
    return await client.create_valuation(args.data)


async def get_calculations(client: ILevelClient, args: FilterQuery) -> Any:
    return await client.get_calculations(args.filters)


def get_tools() -> dict[str, Any]:
    return {
        "get_valuations": {
            "func": get_valuations,
            "input": FilterQuery,
            "title": "List valuations",
            "description": "Get valuations from iLevel",
        },
        "create_valuation": {
            "func": create_valuation,
            "input": ValuationInput,
            "title": "Create valuation",
            "description": "Create or update a valuation in iLevel",
        },
        "get_calculations": {
            "func": get_calculations,
            "input": FilterQuery,
            "title": "List calculations",
            "description": "Get calculations from iLevel",
        },
    }
