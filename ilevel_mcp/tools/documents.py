from typing import Any

from ilevel_mcp.core.ilevel_client import ILevelClient
from ilevel_mcp.tools.schemas import DocumentRef, PagedQuery


async def get_documents(client: ILevelClient, args: PagedQuery) -> Any:
    return await client.get_documents(args.query())


async def get_document(client: ILevelClient, args: DocumentRef) -> Any:
    return await client.get_document(args.document_id)


def get_tools() -> dict[str, Any]:
    return {
        "get_documents": {
            "func": get_documents,
            "input": PagedQuery,
            "title": "List documents",
            "description": "Get documents from iLevel",
        },
        "get_document": {
            "func": get_document,
            "input": DocumentRef,
            "title": "Get document",
            "description": "Get a specific document by ID",
        },
    }
