"""Input models for the iLevel tools.

Each tool declares one of these models. The model's JSON schema is what the
host sees in tools/list, and the same model validates the argument bag when
the tool is called. Field aliases keep the camelCase names of the iLevel API.
"""
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ToolInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def query(self) -> dict[str, Any]:
        """Fields as wire-named query parameters, unset ones left out."""
        return self.model_dump(by_alias=True, exclude_none=True)


class NoInput(ToolInput):
    pass


class PagedQuery(ToolInput):
    page: Optional[int] = Field(default=None, description="Page number for pagination")
    page_size: Optional[int] = Field(default=None, alias="pageSize", description="Number of records per page")
    filters: Optional[dict[str, Any]] = Field(default=None, description="Optional filters (JSON object)")


class FilterQuery(ToolInput):
    filters: Optional[dict[str, Any]] = Field(default=None, description="Optional filters (JSON object)")


class UserRef(ToolInput):
    user_id: str = Field(alias="userId", description="User ID")


class ClientRef(ToolInput):
    client_id: str = Field(alias="clientId", description="Client ID")


class DocumentRef(ToolInput):
    document_id: str = Field(alias="documentId", description="Document ID")


class WebhookRef(ToolInput):
    webhook_id: str = Field(alias="webhookId", description="Webhook ID to delete")


class ValuationInput(ToolInput):
    data: dict[str, Any] = Field(description="Valuation data (JSON object)")


class DataQuery(ToolInput):
    query: dict[str, Any] = Field(description="Query parameters (JSON object)")


class WebhookInput(ToolInput):
    url: str = Field(description="Webhook URL")
    events: list[str] = Field(description="Array of event types to subscribe to")
    description: Optional[str] = Field(default=None, description="Optional webhook description")


class CustomRequest(ToolInput):
    method: Literal["GET", "POST", "PUT", "DELETE"] = Field(description="HTTP method")
    endpoint: str = Field(description="API endpoint path (e.g., /users, /documents-api)")
    data: Optional[dict[str, Any]] = Field(default=None, description="Optional request body data (JSON object)")
