from collections.abc import AsyncIterator

import pytest

from ilevel_mcp.core.config import ILevelConfig
from ilevel_mcp.core.dispatcher import ToolDispatcher
from ilevel_mcp.core.ilevel_client import ILevelClient

BASE_URL = "https://ilevel.test"
API_URL = f"{BASE_URL}/api/v1"


@pytest.fixture
def config() -> ILevelConfig:
    return ILevelConfig(
        base_url=BASE_URL,
        username="api-user",
        password="s3cret",
        is_sandbox=True,
    )


@pytest.fixture
async def client(config: ILevelConfig) -> AsyncIterator[ILevelClient]:
    """Client backed by the default httpx transport, intercepted by respx."""
    async with ILevelClient(config) as ilevel_client:
        yield ilevel_client


@pytest.fixture
def dispatcher(config: ILevelConfig) -> ToolDispatcher:
    return ToolDispatcher(config, ILevelClient(config))
