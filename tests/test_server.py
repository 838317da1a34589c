"""Tests for the server entry point and its MCP handler wiring."""

from __future__ import annotations

import json

import httpx
import pytest
from mcp import types
from mcp.shared.exceptions import McpError
from respx import MockRouter

from ilevel_mcp import SERVER_NAME
from ilevel_mcp import server as server_module
from ilevel_mcp.core.config import ILevelConfig
from ilevel_mcp.core.ilevel_client import ILevelClient
from ilevel_mcp.core.resources import CONFIG_RESOURCE_URI

from .conftest import API_URL


@pytest.fixture
def quiet_startup(monkeypatch):
    """Keep main() from touching log files or a local .env."""
    monkeypatch.setattr(server_module, "setup_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr("ilevel_mcp.core.config.load_dotenv", lambda *args, **kwargs: False)
    for name in ("ILEVEL_BASE_URL", "ILEVEL_USERNAME", "ILEVEL_PASSWORD", "ILEVEL_SANDBOX"):
        monkeypatch.delenv(name, raising=False)


def test_main_exits_when_configuration_is_missing(monkeypatch, quiet_startup):
    def no_client(*args, **kwargs):
        raise AssertionError("client must not be created without configuration")

    monkeypatch.setattr(server_module, "ILevelClient", no_client)
    monkeypatch.setenv("ILEVEL_BASE_URL", "https://ilevel.test")

    with pytest.raises(SystemExit) as exc_info:
        server_module.main()

    assert exc_info.value.code == 1


def test_main_exits_on_unhandled_error(monkeypatch, quiet_startup):
    async def failing_serve(config):
        raise RuntimeError("stdio closed")

    monkeypatch.setenv("ILEVEL_BASE_URL", "https://ilevel.test")
    monkeypatch.setenv("ILEVEL_USERNAME", "api-user")
    monkeypatch.setenv("ILEVEL_PASSWORD", "s3cret")
    monkeypatch.setattr(server_module, "serve", failing_serve)

    with pytest.raises(SystemExit) as exc_info:
        server_module.main()

    assert exc_info.value.code == 1


def test_create_server_registers_handlers(config: ILevelConfig):
    server = server_module.create_server(config, ILevelClient(config))

    assert server.name == SERVER_NAME
    for request_type in (
        types.ListToolsRequest,
        types.CallToolRequest,
        types.ListResourcesRequest,
        types.ReadResourceRequest,
    ):
        assert request_type in server.request_handlers


@pytest.mark.asyncio
async def test_list_tools_handler(config: ILevelConfig, client: ILevelClient):
    server = server_module.create_server(config, client)

    result = await server.request_handlers[types.ListToolsRequest](types.ListToolsRequest(method="tools/list"))

    names = {tool.name for tool in result.root.tools}
    assert {"get_user", "create_webhook", "custom_request"} <= names


@pytest.mark.asyncio
async def test_read_resource_handler(config: ILevelConfig, client: ILevelClient):
    server = server_module.create_server(config, client)
    request = types.ReadResourceRequest(
        method="resources/read",
        params=types.ReadResourceRequestParams(uri=CONFIG_RESOURCE_URI),
    )

    result = await server.request_handlers[types.ReadResourceRequest](request)

    contents = result.root.contents
    assert len(contents) == 1
    assert contents[0].mimeType == "application/json"
    assert json.loads(contents[0].text)["username"] == "api-user"


def test_main_names_the_log_file_on_unhandled_error(monkeypatch, quiet_startup, tmp_path, capsys):
    async def failing_serve(config):
        raise RuntimeError("stdio closed")

    log_file = tmp_path / "server_20260101_000000.log"
    monkeypatch.setenv("ILEVEL_BASE_URL", "https://ilevel.test")
    monkeypatch.setenv("ILEVEL_USERNAME", "api-user")
    monkeypatch.setenv("ILEVEL_PASSWORD", "s3cret")
    monkeypatch.setattr(server_module, "serve", failing_serve)
    monkeypatch.setattr(server_module, "get_log_file", lambda: log_file)

    with pytest.raises(SystemExit):
        server_module.main()

    assert f"See {log_file} for details." in capsys.readouterr().err


def test_main_exits_on_malformed_config_file(monkeypatch, quiet_startup, tmp_path):
    yaml_path = tmp_path / "config.yaml"
    yaml_path.write_text("api_version: [v1\n")
    monkeypatch.setattr("ilevel_mcp.core.config.DEFAULT_CONFIG_PATH", yaml_path)

    def no_config(*args, **kwargs):
        raise AssertionError("environment must not be read after a bad config file")

    monkeypatch.setattr(server_module, "load_config", no_config)

    with pytest.raises(SystemExit) as exc_info:
        server_module.main()

    assert exc_info.value.code == 1


def _call(name: str, arguments: dict) -> types.CallToolRequest:
    return types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )


class TestCallToolHandler:
    @pytest.mark.asyncio
    async def test_success_returns_tool_text(self, config: ILevelConfig, client: ILevelClient, respx_mock: MockRouter):
        respx_mock.get(f"{API_URL}/users/123").mock(return_value=httpx.Response(200, json={"id": "123"}))
        server = server_module.create_server(config, client)

        result = await server.request_handlers[types.CallToolRequest](_call("get_user", {"userId": "123"}))

        assert not result.root.isError
        assert json.loads(result.root.content[0].text) == {"id": "123"}

    @pytest.mark.asyncio
    async def test_unknown_tool_raises_method_not_found(
        self, config: ILevelConfig, client: ILevelClient, respx_mock: MockRouter
    ):
        server = server_module.create_server(config, client)

        with pytest.raises(McpError) as exc_info:
            await server.request_handlers[types.CallToolRequest](_call("get_everything", {}))

        assert exc_info.value.error.code == types.METHOD_NOT_FOUND
        assert len(respx_mock.calls) == 0

    @pytest.mark.asyncio
    async def test_invalid_arguments_raise_invalid_params(
        self, config: ILevelConfig, client: ILevelClient, respx_mock: MockRouter
    ):
        server = server_module.create_server(config, client)

        with pytest.raises(McpError) as exc_info:
            await server.request_handlers[types.CallToolRequest](_call("get_user", {}))

        assert exc_info.value.error.code == types.INVALID_PARAMS
        assert len(respx_mock.calls) == 0

    @pytest.mark.asyncio
    async def test_api_failure_raises_internal_error(
        self, config: ILevelConfig, client: ILevelClient, respx_mock: MockRouter
    ):
        respx_mock.get(f"{API_URL}/users/404").mock(return_value=httpx.Response(404, json={"error": "User not found"}))
        server = server_module.create_server(config, client)

        with pytest.raises(McpError) as exc_info:
            await server.request_handlers[types.CallToolRequest](_call("get_user", {"userId": "404"}))

        assert exc_info.value.error.code == types.INTERNAL_ERROR
        assert "404" in exc_info.value.error.message
