from typing import Any

from ilevel_mcp.core.ilevel_client import ILevelClient
from ilevel_mcp.tools.schemas import NoInput, WebhookInput, WebhookRef


async def get_webhooks(client: ILevelClient, args: NoInput) -> Any:
    return await client.get_webhooks()


async def create_webhook(client: ILevelClient, args: WebhookInput) -> Any:
    """Register a webhook; description is only sent when provided."""
    return await client.create_webhook(args.model_dump(exclude_none=True))


async def delete_webhook(client: ILevelClient, args: WebhookRef) -> Any:
    return await client.delete_webhook(args.webhook_id)


def get_tools() -> dict[str, Any]:
    return {
        "get_webhooks": {
            "func": get_webhooks,
            "input": NoInput,
            "title": "List webhooks",
            "description": "Get configured webhooks from iLevel",
        },
        "create_webhook": {
            "func": create_webhook,
            "input": WebhookInput,
            "title": "Create webhook",
            "description": "Create a new webhook in iLevel",
        },
        "delete_webhook": {
            "func": delete_webhook,
            "input": WebhookRef,
            "title": "Delete webhook",
            "description": "Delete a webhook from iLevel",
        },
    }
