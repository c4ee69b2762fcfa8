"""
Configuration and constants for the MCP server.
"""

import os
import threading
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .odoo_client import OdooClient, OdooConfig


DEFAULT_TIMEOUT = 120
DEFAULT_PROTOCOL = "xmlrpc"

REQUIRED_VARIABLES = ("ODOO_URL", "ODOO_DB", "ODOO_USERNAME")


def load_config(environ: Optional[Mapping[str, str]] = None) -> OdooConfig:
    """Build an OdooConfig from environment variables."""
    if environ is None:
        # Values already in the environment win over the .env file
        load_dotenv(override=False)
        environ = os.environ

    missing = [name for name in REQUIRED_VARIABLES if not environ.get(name)]
    if not environ.get("ODOO_PASSWORD") and not environ.get("ODOO_API_KEY"):
        missing.append("ODOO_PASSWORD or ODOO_API_KEY")
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    raw_timeout = environ.get("ODOO_TIMEOUT") or str(DEFAULT_TIMEOUT)
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigurationError(f"ODOO_TIMEOUT must be a number, got '{raw_timeout}'")
    if timeout <= 0:
        raise ConfigurationError(f"ODOO_TIMEOUT must be positive, got '{raw_timeout}'")

    return OdooConfig(
        url=environ["ODOO_URL"],
        database=environ["ODOO_DB"],
        username=environ["ODOO_USERNAME"],
        password=environ.get("ODOO_PASSWORD") or None,
        api_key=environ.get("ODOO_API_KEY") or None,
        timeout=timeout,
        protocol=(environ.get("ODOO_PROTOCOL") or DEFAULT_PROTOCOL).lower(),
    )


_client: Optional[OdooClient] = None
_client_lock = threading.Lock()


def get_odoo_client() -> OdooClient:
    """Create the process-wide Odoo client from environment variables.

    The client authenticates lazily on its first call. Failures are not
    cached, so a later call retries from scratch.
    """
    global _client
    if _client is None:
        with _client_lock:
            if _client is None:
                _client = OdooClient(load_config())
    return _client
