"""
Read-only MCP server for Odoo.
"""

__version__ = "0.3.0"
