"""
Async client for the S&P Global iLevel REST API.

One method per resource family plus a generic `request` escape hatch. Every
method returns the response body as received; the client never interprets
payloads, retries, or paginates.
"""

import json
import logging
from typing import Any, Mapping, Optional
from urllib.parse import quote

import httpx

from ilevel_mcp.core.config import ILevelConfig
from ilevel_mcp.core.exceptions import (
    ILevelAPIError,
    ILevelConnectionError,
    ILevelRequestError,
    format_body,
)
from ilevel_mcp.utils.response_utils import decode_body

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30.0
HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")


def build_query(params: Optional[Mapping[str, Any]]) -> Optional[dict[str, Any]]:
    """Render a parameter bag as query parameters.

    None values are dropped, booleans become true/false and nested mappings
    (filters) are sent as a JSON string. The input mapping is not modified.
    """
    if not params:
        return None
    query: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, Mapping):
            value = json.dumps(value, ensure_ascii=False)
        query[key] = value
    return query


def _segment(identifier: str) -> str:
    return quote(str(identifier), safe="")


class ILevelClient:
    """
    HTTP client bound to one iLevel origin.

    Wraps a single httpx.AsyncClient configured with basic auth, JSON headers
    and a 30 second timeout. The session holds no per-call state and can be
    shared by concurrent tool calls.
    """

    def __init__(self, config: ILevelConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            config: Connection settings, already validated by load_config.
            transport: Optional httpx transport, used by tests and proxies.
        """
        self.config = config
        self.base_url = f"{config.base_url.rstrip('/')}/api/{config.api_version}"
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            auth=httpx.BasicAuth(config.username, config.password),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=REQUEST_TIMEOUT,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "ILevelClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Any = None,
    ) -> Any:
        """Issue one request and return the decoded body.

        Raises:
            ILevelAPIError: non-2xx status, carries status code and body
            ILevelConnectionError: no response was received
            ILevelRequestError: the request could not be sent
        """
        logger.info(f"[iLevel API] {method.upper()} {path}")
        try:
            response = await self._http.request(
                method.upper(),
                path,
                params=build_query(params),
                json=data,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            body = decode_body(e.response)
            logger.error(f"[iLevel API Error] {e.response.status_code}: {format_body(body)}")
            raise ILevelAPIError(e.response.status_code, body) from e
        except httpx.TransportError as e:
            logger.error("[iLevel API Error] No response received")
            raise ILevelConnectionError(str(e)) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"[iLevel API Error] {e}")
            raise ILevelRequestError(str(e)) from e
        return decode_body(response)

    async def test_connection(self) -> bool:
        """Check the API with a cheap read. Any failure is reported as False."""
        # TODO: switch to a dedicated health endpoint once iLevel documents one;
        # /users also fails when the account lacks permission on users.
        try:
            await self._send("GET", "/users")
            return True
        except Exception:
            return False

    # Users

    async def get_users(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._send("GET", "/users", params=params)

    async def get_user(self, user_id: str) -> Any:
        return await self._send("GET", f"/users/{_segment(user_id)}")

    # Clients

    async def get_clients(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._send("GET", "/clients", params=params)

    async def get_client(self, client_id: str) -> Any:
        return await self._send("GET", f"/clients/{_segment(client_id)}")

    # Portfolios, assets, funds, investments

    async def get_portfolios(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._send("GET", "/webapp", params=params)

    async def get_assets(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._send("GET", "/assets", params=params)

    async def get_funds(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._send("GET", "/funds", params=params)

    async def get_investments(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._send("GET", "/investments", params=params)

    # Documents

    async def get_documents(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._send("GET", "/documents-api", params=params)

    async def get_document(self, document_id: str) -> Any:
        return await self._send("GET", f"/documents-api/{_segment(document_id)}")

    # Valuations

    async def get_valuations(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._send("GET", "/valuation-api", params=params)

    async def create_valuation(self, data: Mapping[str, Any]) -> Any:
        """Create or update a valuation."""
        return await self._send("POST", "/valuation-api", data=data)

    # Data retrieval

    async def query_data(self, query: Mapping[str, Any]) -> Any:
        return await self._send("POST", "/data-retrieval", data=query)

    # Webhooks

    async def get_webhooks(self) -> Any:
        return await self._send("GET", "/webhooks")

    async def create_webhook(self, data: Mapping[str, Any]) -> Any:
        """Register a webhook. `data` carries url, events and an optional description."""
        return await self._send("POST", "/webhooks", data=data)

    async def delete_webhook(self, webhook_id: str) -> Any:
        return await self._send("DELETE", f"/webhooks/{_segment(webhook_id)}")

    # Calculations

    async def get_calculations(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._send("GET", "/calcs-api", params=params)

    async def request(self, method: str, endpoint: str, data: Any = None) -> Any:
        """Send an arbitrary request to any endpoint under the API base path.

        Useful for endpoints that have no dedicated method yet.
        """
        if method.upper() not in HTTP_METHODS:
            raise ILevelRequestError(f"unsupported HTTP method {method!r}")
        # An absolute URL would bypass the base and carry the Basic credentials elsewhere
        try:
            target = httpx.URL(endpoint)
        except httpx.InvalidURL as e:
            raise ILevelRequestError(f"invalid endpoint {endpoint!r}: {e}") from e
        if target.is_absolute_url or target.host:
            raise ILevelRequestError(f"endpoint must be a path under the API base, got {endpoint!r}")
        return await self._send(method, endpoint, data=data)
