"""
Helpers for building tool results.
"""

import json
from typing import Any

from mcp.types import TextContent, CallToolResult


def to_json(data: Any) -> str:
    """Serialize Odoo data for display. Values JSON can't encode (e.g. XML-RPC DateTime) become strings."""
    return json.dumps(data, indent=2, default=str)


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(
            type="text",
            text=text
        )],
        isError=is_error
    )


def error_result(message: str) -> CallToolResult:
    return text_result(message, is_error=True)
