"""Tests for the tool registry (get_tool_registry, call_tool) and result rendering."""

import json
from unittest.mock import MagicMock

import pytest

from odoo_mcp_ro.exceptions import (
    ConfigurationError,
    OdooRemoteError,
    OdooTransportError,
)
from odoo_mcp_ro.tools import call_tool, get_tool_definitions, get_tool_registry


def _text(result):
    assert len(result.content) == 1
    return result.content[0].text


class TestGetToolRegistry:

    def test_contains_expected_tools(self):
        assert set(get_tool_registry()) == {
            "search_records", "get_record", "list_models", "get_model_fields"
        }

    def test_definitions_match_registry(self):
        """Every registered tool should have a definition, and vice versa."""
        names = {tool.name for tool in get_tool_definitions()}

        assert names == set(get_tool_registry())

    def test_required_arguments_match_models(self):
        registry = get_tool_registry()
        for tool in get_tool_definitions():
            args_model, _ = registry[tool.name]
            required = {
                name for name, field in args_model.model_fields.items() if field.is_required()
            }
            assert set(tool.inputSchema.get("required", [])) == required, tool.name


class TestDispatch:

    def test_unknown_tool_is_benign(self, client_factory):
        result = call_tool(client_factory, "delete_records", {})

        assert _text(result) == "Unknown tool: delete_records"
        assert result.isError is False
        client_factory.assert_not_called()

    def test_validation_error_skips_network(self, client_factory, transport):
        result = call_tool(client_factory, "search_records", {"model": ""})

        assert result.isError is True
        assert _text(result).startswith("Validation Error: model:")
        client_factory.assert_not_called()
        assert transport.calls == []

    def test_validation_error_lists_every_problem(self, client_factory):
        result = call_tool(client_factory, "search_records", {"model": "res.partner", "limit": 0, "offset": -1})

        text = _text(result)
        assert "limit:" in text
        assert "offset:" in text

    def test_none_arguments_treated_as_empty(self, client_factory, transport):
        transport.respond("search_read", [])

        result = call_tool(client_factory, "list_models", None)

        assert result.isError is False

    def test_configuration_error_reported(self):
        factory = MagicMock(side_effect=ConfigurationError("Missing required environment variables: ODOO_URL"))

        result = call_tool(factory, "list_models", {})

        assert result.isError is True
        assert _text(result) == "Error: Missing required environment variables: ODOO_URL"

    def test_authentication_error_reported(self, client_factory, transport):
        transport.uid = False

        result = call_tool(client_factory, "search_records", {"model": "res.partner"})

        assert result.isError is True
        assert _text(result) == "Error: Authentication failed: Invalid credentials"

    def test_auth_retried_on_next_call_after_failure(self, client_factory, transport):
        transport.uid = False
        call_tool(client_factory, "list_models", {})

        transport.uid = 2
        transport.respond("search_read", [])
        result = call_tool(client_factory, "list_models", {})

        assert result.isError is False
        assert len(transport.auth_calls) == 2

    def test_transport_error_reported(self, client_factory, transport):
        transport.respond("fields_get", OdooTransportError("HTTP 502"))

        result = call_tool(client_factory, "get_model_fields", {"model": "res.partner"})

        assert result.isError is True
        assert _text(result) == "Error: HTTP 502"

    def test_unexpected_error_reported(self, client_factory, transport):
        transport.respond("fields_get", RuntimeError("boom"))

        result = call_tool(client_factory, "get_model_fields", {"model": "res.partner"})

        assert result.isError is True
        assert _text(result) == "Error: boom"


class TestSearchRecords:

    def test_found_records(self, client_factory, transport):
        records = [{"id": 1, "name": "Azure Interior"}, {"id": 2, "name": "Deco Addict"}]
        transport.respond("search_read", records)

        result = call_tool(client_factory, "search_records", {"model": "res.partner", "domain": [], "limit": 10})

        header, body = _text(result).split("\n", 1)
        assert header == "Found 2 records in model 'res.partner'"
        assert json.loads(body) == records
        assert transport.execute_calls[0][2][6] == {"offset": 0, "limit": 10}

    def test_no_records(self, client_factory, transport):
        transport.respond("search_read", [])

        result = call_tool(client_factory, "search_records", {"model": "sale.order"})

        assert result.isError is False
        assert _text(result) == "Found 0 records in model 'sale.order' (no records match the criteria)"

    def test_domain_passed_through(self, client_factory, transport):
        transport.respond("search_read", [])
        domain = [["state", "=", "sale"], ["amount_total", ">", 100]]

        call_tool(client_factory, "search_records", {"model": "sale.order", "domain": domain, "order": "date_order desc"})

        args = transport.execute_calls[0][2]
        assert args[5] == [domain]
        assert args[6] == {"offset": 0, "order": "date_order desc"}

    def test_invalid_fields_explained(self, client_factory, transport):
        transport.respond("search_read", OdooRemoteError("Invalid field 'colour' on model 'res.partner'"))
        transport.respond("fields_get", {"name": {}, "email": {}})

        result = call_tool(client_factory, "search_records", {"model": "res.partner", "fields": ["name", "colour"]})

        assert result.isError is True
        assert _text(result) == "Invalid field(s) for model 'res.partner': colour"

    def test_field_error_with_valid_fields_reports_remote_error(self, client_factory, transport):
        transport.respond("search_read", OdooRemoteError("Invalid field 'x' in domain"))
        transport.respond("fields_get", {"name": {}})

        result = call_tool(client_factory, "search_records", {"model": "res.partner", "fields": ["name"]})

        assert _text(result) == "Error: Invalid field 'x' in domain"

    def test_field_lookup_failure_reports_remote_error(self, client_factory, transport):
        transport.respond("search_read", OdooRemoteError("Invalid field 'colour'"))
        transport.respond("fields_get", OdooRemoteError("Access Denied"))

        result = call_tool(client_factory, "search_records", {"model": "res.partner", "fields": ["colour"]})

        assert _text(result) == "Error: Invalid field 'colour'"

    def test_non_field_error_skips_lookup(self, client_factory, transport):
        transport.respond("search_read", OdooRemoteError("Access Denied"))

        result = call_tool(client_factory, "search_records", {"model": "res.partner", "fields": ["name"]})

        assert _text(result) == "Error: Access Denied"
        assert [c[2][4] for c in transport.execute_calls] == ["search_read"]


class TestGetRecord:

    def test_single_id_renders_object(self, client_factory, transport):
        transport.respond("read", [{"id": 5, "name": "Azure"}])

        result = call_tool(client_factory, "get_record", {"model": "res.partner", "ids": [5]})

        header, body = _text(result).split("\n", 1)
        assert header == "Retrieved 1 record from model 'res.partner'"
        assert json.loads(body) == {"id": 5, "name": "Azure"}

    def test_multiple_ids_render_list(self, client_factory, transport):
        transport.respond("read", [{"id": 6}, {"id": 5}])

        result = call_tool(client_factory, "get_record", {"model": "res.partner", "ids": [5, 6], "fields": ["name"]})

        header, body = _text(result).split("\n", 1)
        assert header == "Retrieved 2 records from model 'res.partner'"
        assert json.loads(body) == [{"id": 6}, {"id": 5}]

    def test_missing_single_record(self, client_factory, transport):
        transport.respond("read", [])

        result = call_tool(client_factory, "get_record", {"model": "res.partner", "ids": [404]})

        assert result.isError is False
        assert _text(result) == "No record found with id 404 in model 'res.partner'"

    def test_invalid_fields_explained(self, client_factory, transport):
        transport.respond("read", OdooRemoteError("Invalid field 'colour' on model 'res.partner'"))
        transport.respond("fields_get", {"name": {}})

        result = call_tool(client_factory, "get_record", {"model": "res.partner", "ids": [1], "fields": ["colour"]})

        assert _text(result) == "Invalid field(s) for model 'res.partner': colour"


class TestModelTools:

    MODELS = [
        {"model": "sale.order", "name": "Sales Order", "transient": False},
        {"model": "account.move", "name": "Journal Entry", "transient": False},
        {"model": "base.language.install", "name": "Install Language", "transient": True},
    ]

    def test_list_models_sorted_without_transient(self, client_factory, transport):
        transport.respond("search_read", list(self.MODELS))

        result = call_tool(client_factory, "list_models", {})

        assert _text(result) == (
            "Found 2 available Odoo models\n"
            "- **account.move**: Journal Entry\n"
            "- **sale.order**: Sales Order"
        )

    def test_list_models_with_transient(self, client_factory, transport):
        transport.respond("search_read", list(self.MODELS))

        result = call_tool(client_factory, "list_models", {"transient": True})

        lines = _text(result).splitlines()
        assert lines[0] == "Found 3 available Odoo models"
        assert lines[1:] == [
            "- **account.move**: Journal Entry",
            "- **base.language.install**: Install Language",
            "- **sale.order**: Sales Order",
        ]

    def test_get_model_fields(self, client_factory, transport):
        fields = {"name": {"type": "char", "string": "Name"}, "email": {"type": "char", "string": "Email"}}
        transport.respond("fields_get", fields)

        result = call_tool(client_factory, "get_model_fields", {"model": "res.partner", "fields": ["name", "email"]})

        header, body = _text(result).split("\n", 1)
        assert header == "Model 'res.partner' has 2 fields"
        assert json.loads(body) == fields
        assert transport.execute_calls[0][2][6] == {"allfields": ["name", "email"]}

    def test_get_model_fields_empty_model(self, client_factory, transport):
        result = call_tool(client_factory, "get_model_fields", {"model": ""})

        assert result.isError is True
        assert transport.calls == []
