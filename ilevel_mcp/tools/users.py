from typing import Any

from ilevel_mcp.core.ilevel_client import ILevelClient
from ilevel_mcp.tools.schemas import PagedQuery, UserRef


async def get_users(client: ILevelClient, args: PagedQuery) -> Any:
    return await client.get_users(args.query())


async def get_user(client: ILevelClient, args: UserRef) -> Any:
    return await client.get_user(args.user_id)


def get_tools() -> dict[str, Any]:
    return {
        "get_users": {
            "func": get_users,
            "input": PagedQuery,
            "title": "List users",
            "description": "Get a list of users from iLevel",
        },
        "get_user": {
            "func": get_user,
            "input": UserRef,
            "title": "Get user",
            "description": "Get details of a specific user by ID",
        },
    }
