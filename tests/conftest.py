"""Shared pytest fixtures for the Odoo MCP tests.

Provides a fake transport that answers ``common.authenticate`` and
``object.execute_kw`` from canned responses and records every call, so the
client can be exercised without an Odoo server.
"""

from unittest.mock import MagicMock

import pytest

from odoo_mcp_ro.odoo_client import OdooClient, OdooConfig


class FakeTransport:
    """Stand-in for XmlRpcTransport / JsonRpcTransport."""

    def __init__(self, uid=2):
        self.uid = uid
        self.responses = {}
        self.calls = []

    def respond(self, method, result):
        """Answer execute_kw calls for ``method`` with ``result`` (or raise it)."""
        self.responses[method] = result

    def call(self, service, method, args):
        self.calls.append((service, method, args))
        if service == "common" and method == "authenticate":
            if isinstance(self.uid, Exception):
                raise self.uid
            return self.uid
        if service == "object" and method == "execute_kw":
            result = self.responses.get(args[4])
            if isinstance(result, Exception):
                raise result
            return result
        raise AssertionError(f"unexpected call {service}.{method}")

    @property
    def auth_calls(self):
        return [c for c in self.calls if c[1] == "authenticate"]

    @property
    def execute_calls(self):
        return [c for c in self.calls if c[1] == "execute_kw"]


@pytest.fixture
def odoo_config():
    return OdooConfig(
        url="https://odoo.example.com/",
        database="testdb",
        username="admin",
        password="secret",
    )


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(odoo_config, transport):
    return OdooClient(odoo_config, transport=transport)


@pytest.fixture
def client_factory(client):
    """Factory handed to the tool registry; a MagicMock so calls can be asserted."""
    return MagicMock(return_value=client)
