"""
Tools package for MCP server.
"""

from .definitions import get_tool_definitions
from .records import handle_search_records, handle_get_record
from .models import handle_list_models, handle_get_model_fields
from .registry import get_tool_registry, call_tool

__all__ = [
    'get_tool_definitions',
    'get_tool_registry',
    'call_tool',
    'handle_search_records',
    'handle_get_record',
    'handle_list_models',
    'handle_get_model_fields',
]
