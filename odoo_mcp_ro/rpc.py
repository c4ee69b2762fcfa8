"""
Low-level transports for the Odoo external API (XML-RPC and JSON-RPC).

Both transports expose the same ``call(service, method, args)`` primitive and
translate failures into the exceptions from ``odoo_mcp_ro.exceptions``.
"""

import http.client
import itertools
import logging
import threading
import xmlrpc.client
from typing import Any

import requests

from .exceptions import ConfigurationError, OdooRemoteError, OdooTransportError

logger = logging.getLogger(__name__)


class _TimeoutMixin:
    """Applies a socket timeout to each XML-RPC connection."""

    def __init__(self, timeout: float):
        super().__init__()
        self.timeout = timeout

    def make_connection(self, host):
        conn = super().make_connection(host)
        conn.timeout = self.timeout
        return conn


class _TimeoutTransport(_TimeoutMixin, xmlrpc.client.Transport):
    pass


class _SafeTimeoutTransport(_TimeoutMixin, xmlrpc.client.SafeTransport):
    pass


def _fault_message(fault_string: str) -> str:
    """
    Extract the readable part of an Odoo fault.

    Server crashes arrive as a full traceback whose last line names the
    error; user-facing errors (UserError, AccessError) are the bare
    message and are kept whole.
    """
    text = str(fault_string).strip()
    if not text:
        return "Odoo error"
    if not text.startswith("Traceback"):
        return text
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return lines[-1]


class XmlRpcTransport:
    """Calls Odoo through ``/xmlrpc/2/<service>``.

    Proxies keep one HTTP connection each, so calls are serialised.
    """

    def __init__(self, url: str, timeout: float = 120):
        self.url = url.rstrip("/")
        self.timeout = timeout
        self._proxies: dict[str, xmlrpc.client.ServerProxy] = {}
        self._lock = threading.Lock()

    def _proxy(self, service: str) -> xmlrpc.client.ServerProxy:
        if service not in self._proxies:
            endpoint = f"{self.url}/xmlrpc/2/{service}"
            if endpoint.startswith("https://"):
                transport = _SafeTimeoutTransport(self.timeout)
            else:
                transport = _TimeoutTransport(self.timeout)
            self._proxies[service] = xmlrpc.client.ServerProxy(
                endpoint, transport=transport, allow_none=True
            )
        return self._proxies[service]

    def call(self, service: str, method: str, args: list) -> Any:
        with self._lock:
            proxy = self._proxy(service)
            try:
                return getattr(proxy, method)(*args)
            except xmlrpc.client.Fault as e:
                raise OdooRemoteError(_fault_message(e.faultString)) from e
            except xmlrpc.client.ProtocolError as e:
                raise OdooTransportError(f"HTTP {e.errcode}: {e.errmsg}") from e
            except http.client.HTTPException as e:
                raise OdooTransportError(f"{e.__class__.__name__}: {e}") from e
            except OSError as e:
                # socket.timeout and ConnectionRefusedError are both OSError
                raise OdooTransportError(str(e) or e.__class__.__name__) from e


class JsonRpcTransport:
    """Calls Odoo through the ``/jsonrpc`` endpoint."""

    def __init__(self, url: str, timeout: float = 120):
        self.url = url.rstrip("/")
        self.timeout = timeout
        self._request_ids = itertools.count(1)
        self._session = requests.Session()

    def call(self, service: str, method: str, args: list) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "method": "call",
            "params": {"service": service, "method": method, "args": args},
            "id": next(self._request_ids),
        }
        try:
            response = self._session.post(
                f"{self.url}/jsonrpc",
                json=payload,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise OdooTransportError(f"Request timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise OdooTransportError(str(e)) from e

        if not response.ok:
            raise OdooTransportError(f"HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise OdooTransportError("Invalid JSON in Odoo response") from e

        if not isinstance(body, dict):
            raise OdooTransportError("Unexpected JSON-RPC response from Odoo")

        error = body.get("error")
        if error:
            raise OdooRemoteError(_jsonrpc_error_message(error))
        return body.get("result")


def _jsonrpc_error_message(error) -> str:
    """Best-effort message from a JSON-RPC error member."""
    if not isinstance(error, dict):
        return str(error)
    data = error.get("data")
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    if isinstance(data, str) and data:
        return data
    return str(error.get("message") or "Odoo error")


TRANSPORTS = {
    "xmlrpc": XmlRpcTransport,
    "jsonrpc": JsonRpcTransport,
}


def make_transport(protocol: str, url: str, timeout: float):
    """Build the transport registered for ``protocol``."""
    try:
        transport_cls = TRANSPORTS[protocol]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported protocol '{protocol}' (expected one of: {', '.join(sorted(TRANSPORTS))})"
        )
    logger.debug("Using %s transport for %s", protocol, url)
    return transport_cls(url, timeout=timeout)
