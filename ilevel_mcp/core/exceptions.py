"""
Exceptions raised by the iLevel client and configuration layer.

The dispatcher turns these into MCP errors; nothing here knows about the
protocol.
"""

import json
from typing import Any, Iterable, Optional


class ILevelError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(ILevelError):
    """Raised at startup when required settings are missing or unreadable."""

    def __init__(self, missing: Iterable[str] = (), message: Optional[str] = None):
        self.missing = list(missing)
        super().__init__(message or f"Missing required environment variables: {', '.join(self.missing)}")


class ILevelAPIError(ILevelError):
    """The iLevel API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: Any = None):
        self.status_code = status_code
        self.body = body
        super().__init__(f"iLevel API error: {status_code} - {format_body(body)}")


class ILevelConnectionError(ILevelError):
    """No response was received (connect failure, timeout, broken transport)."""

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        super().__init__("No response received from iLevel API")


class ILevelRequestError(ILevelError):
    """The request failed before a response could be considered."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Request failed: {reason}")


def format_body(body: Any) -> str:
    # Same serialization the error log lines use.
    try:
        return json.dumps(body, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(body)
