import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

from ilevel_mcp.core.exceptions import ConfigurationError

DEFAULT_API_VERSION = "v1"
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "config.yaml"

REQUIRED_ENV_VARS = {
    "ILEVEL_BASE_URL": "Base URL for iLevel API",
    "ILEVEL_USERNAME": "Your iLevel API username",
    "ILEVEL_PASSWORD": "Your iLevel API password",
}
OPTIONAL_ENV_VARS = {
    "ILEVEL_SANDBOX": '(optional) Set to "true" for sandbox environment',
    "ILEVEL_API_VERSION": "(optional) API version, defaults to v1",
}


@dataclass(frozen=True)
class ILevelConfig:
    """Connection settings for the iLevel API, fixed for the process lifetime."""

    base_url: str
    username: str
    password: str
    is_sandbox: bool = False
    api_version: str = DEFAULT_API_VERSION

    def snapshot(self) -> dict[str, Any]:
        """
        Return the public view of the configuration. The password is left out.
        """
        return {
            "baseUrl": self.base_url,
            "username": self.username,
            "isSandbox": self.is_sandbox,
            "apiVersion": self.api_version or DEFAULT_API_VERSION,
        }


def load_yaml_defaults(config_path: Optional[str | Path] = None) -> dict[str, Any]:
    """
    Load non-secret defaults from config.yaml. A missing file yields an empty dict;
    unparseable YAML or a non-mapping document raises ConfigurationError.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not path.is_file():
        return {}
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(message=f"Invalid configuration file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(message=f"Invalid configuration file {path}: expected a mapping")
    return data


def usage() -> str:
    lines = ["Required environment variables:"]
    for name, help_text in {**REQUIRED_ENV_VARS, **OPTIONAL_ENV_VARS}.items():
        lines.append(f"  - {name}: {help_text}")
    return "\n".join(lines)


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[str | Path] = None,
) -> ILevelConfig:
    """Build the process configuration.

    Reads the environment (after loading a local .env when no explicit mapping
    is given), layered over the defaults in config.yaml. Raises
    ConfigurationError listing every required variable that is missing.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    defaults = load_yaml_defaults(config_path)

    missing = [name for name in REQUIRED_ENV_VARS if not environ.get(name)]
    if missing:
        raise ConfigurationError(missing)

    api_version = environ.get("ILEVEL_API_VERSION") or defaults.get("api_version") or DEFAULT_API_VERSION

    return ILevelConfig(
        base_url=environ["ILEVEL_BASE_URL"],
        username=environ["ILEVEL_USERNAME"],
        password=environ["ILEVEL_PASSWORD"],
        is_sandbox=environ.get("ILEVEL_SANDBOX", "").strip().lower() == "true",
        api_version=str(api_version),
    )
