"""Helpers for moving iLevel response bodies through the server untouched.

`decode_body` turns an HTTP response into the payload handed back to callers:
- JSON bodies are decoded (json.loads)
- anything else, an empty body included, is returned as raw text

`format_payload` renders that payload as the text of an MCP content item.
"""
from __future__ import annotations

import json
from typing import Any

import httpx


def decode_body(response: httpx.Response) -> Any:
    """Return the response payload without interpreting it."""
    try:
        return response.json()
    except ValueError:
        return response.text


def format_payload(data: Any) -> str:
    """Strings pass through verbatim, everything else is pretty-printed JSON."""
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False)
