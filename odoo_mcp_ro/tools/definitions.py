"""
Tool definitions (schemas) for all MCP tools.
"""

from mcp.types import Tool

from .schemas import MAX_LIMIT


def get_tool_definitions() -> list[Tool]:
    """Return all tool definitions."""
    return [
        # Record Tools
        Tool(
            name="search_records",
            description="Search for Odoo records matching a domain filter. Returns the matching records as JSON, prefixed with the number of records found.",
            inputSchema={
                "type": "object",
                "properties": {
                    "model": {
                        "type": "string",
                        "minLength": 1,
                        "description": "Odoo model name (e.g., 'res.partner', 'sale.order')"
                    },
                    "domain": {
                        "type": "array",
                        "items": {
                            "anyOf": [
                                {"type": "array"},
                                {"type": "string", "enum": ["&", "|", "!"]}
                            ]
                        },
                        "default": [],
                        "description": "Search domain in Odoo format (e.g., [['name', 'ilike', 'john']])"
                    },
                    "fields": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "List of fields to return (all fields if omitted)"
                    },
                    "limit": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": MAX_LIMIT,
                        "description": f"Maximum number of records to return (1-{MAX_LIMIT})"
                    },
                    "offset": {
                        "type": "integer",
                        "minimum": 0,
                        "default": 0,
                        "description": "Number of records to skip"
                    },
                    "order": {
                        "type": "string",
                        "description": "Sort order (e.g., 'name asc, id desc')"
                    }
                },
                "required": ["model"]
            }
        ),
        Tool(
            name="get_record",
            description="Get specific Odoo records by ID. A single ID returns one record object, several IDs return a list.",
            inputSchema={
                "type": "object",
                "properties": {
                    "model": {
                        "type": "string",
                        "minLength": 1,
                        "description": "Odoo model name"
                    },
                    "ids": {
                        "type": "array",
                        "items": {"type": "integer", "minimum": 1},
                        "minItems": 1,
                        "description": "List of record IDs to retrieve"
                    },
                    "fields": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "List of fields to return (all fields if omitted)"
                    }
                },
                "required": ["model", "ids"]
            }
        ),

        # Model Tools
        Tool(
            name="list_models",
            description="List all available Odoo models with their technical and display names, sorted by technical name.",
            inputSchema={
                "type": "object",
                "properties": {
                    "transient": {
                        "type": "boolean",
                        "default": False,
                        "description": "Include transient (wizard) models"
                    }
                }
            }
        ),
        Tool(
            name="get_model_fields",
            description="Get field definitions (type, label, relation, etc.) for an Odoo model. Use this to discover field names before searching.",
            inputSchema={
                "type": "object",
                "properties": {
                    "model": {
                        "type": "string",
                        "minLength": 1,
                        "description": "Odoo model name"
                    },
                    "fields": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Specific fields to get info for (optional)"
                    }
                },
                "required": ["model"]
            }
        ),
    ]
