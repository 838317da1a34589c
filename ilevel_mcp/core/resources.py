"""Static resources exposed to the host.

There is a single one: a JSON snapshot of the active iLevel configuration
(password excluded).
"""
import json

from mcp import types

from ilevel_mcp.core.config import ILevelConfig

CONFIG_RESOURCE_URI = "ilevel://config"
JSON_MIME_TYPE = "application/json"


def config_resource() -> types.Resource:
    return types.Resource(
        uri=CONFIG_RESOURCE_URI,
        name="iLevel Configuration",
        description="Current iLevel API configuration",
        mimeType=JSON_MIME_TYPE,
    )


def render_config(config: ILevelConfig) -> str:
    return json.dumps(config.snapshot(), indent=2)
