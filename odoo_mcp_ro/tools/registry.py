"""Tool registry that maps MCP tool calls to handler functions."""

import logging
from typing import Any, Callable, Dict, Optional, Tuple, Type

from mcp.types import CallToolResult
from pydantic import ValidationError

from ..exceptions import OdooError
from ..odoo_client import OdooClient
from .models import handle_get_model_fields, handle_list_models
from .records import handle_get_record, handle_search_records
from .results import error_result, text_result
from .schemas import (
    GetModelFieldsArgs,
    GetRecordArgs,
    ListModelsArgs,
    SearchRecordsArgs,
    ToolArguments,
    format_validation_error,
)

_logger = logging.getLogger(__name__)

Handler = Callable[[OdooClient, Any], CallToolResult]


def get_tool_registry() -> Dict[str, Tuple[Type[ToolArguments], Handler]]:
    """Get the registry of available MCP tools.

    Returns:
        dict: Mapping of tool names to (argument model, handler) pairs
    """
    return {
        'search_records': (SearchRecordsArgs, handle_search_records),
        'get_record': (GetRecordArgs, handle_get_record),
        'list_models': (ListModelsArgs, handle_list_models),
        'get_model_fields': (GetModelFieldsArgs, handle_get_model_fields),
    }


def call_tool(
    client_factory: Callable[[], OdooClient],
    tool_name: str,
    arguments: Optional[Dict[str, Any]]
) -> CallToolResult:
    """Validate arguments, run the tool and render its result.

    The client factory is only invoked once the arguments are valid, so
    malformed calls never touch the configuration or the network.

    Args:
        client_factory: Callable returning the Odoo client
        tool_name: Name of the tool to call
        arguments: Raw arguments from the MCP request

    Returns:
        CallToolResult; never raises for tool or Odoo failures
    """
    registry = get_tool_registry()
    if tool_name not in registry:
        return text_result(f"Unknown tool: {tool_name}")

    args_model, handler = registry[tool_name]
    try:
        params = args_model.model_validate(arguments or {})
    except ValidationError as e:
        message = format_validation_error(e)
        _logger.info("Rejected %s call: %s", tool_name, message)
        return error_result(f"Validation Error: {message}")

    try:
        client = client_factory()
        return handler(client, params)
    except OdooError as e:
        _logger.warning("%s failed: %s", tool_name, e.message)
        return error_result(f"Error: {e.message}")
    except Exception as e:
        _logger.exception("Unexpected error in %s", tool_name)
        return error_result(f"Error: {e}")
