from typing import Any

from ilevel_mcp.core.ilevel_client import ILevelClient
from ilevel_mcp.tools.schemas import CustomRequest, NoInput


async def test_connection(client: ILevelClient, args: NoInput) -> dict[str, Any]:
    """Report whether the iLevel API answered the connectivity check."""
    connected = await client.test_connection()
    return {
        "connected": connected,
        "message": "Successfully connected to iLevel API" if connected else "Failed to connect to iLevel API",
    }


async def custom_request(client: ILevelClient, args: CustomRequest) -> Any:
    return await client.request(args.method, args.endpoint, args.data)


def get_tools() -> dict[str, Any]:
    return {
        "test_connection": {
            "func": test_connection,
            "input": NoInput,
            "title": "Test connection",
            "description": "Test connection to the iLevel API",
        },
        "custom_request": {
            "func": custom_request,
            "input": CustomRequest,
            "title": "Custom request",
            "description": "Make a custom request to any iLevel API endpoint (useful for endpoints not yet implemented)",
        },
    }
