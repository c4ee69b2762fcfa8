"""
Odoo client for read-only record access.
"""

import logging
import threading
from typing import Any, Optional, Union
from dataclasses import dataclass

from .exceptions import AuthenticationError, ConfigurationError, OdooTransportError
from .rpc import make_transport

logger = logging.getLogger(__name__)


@dataclass
class OdooConfig:
    """Odoo connection configuration."""
    url: str
    database: str
    username: str
    password: Optional[str] = None
    api_key: Optional[str] = None  # takes precedence over password
    timeout: float = 120
    protocol: str = "xmlrpc"

    def __post_init__(self):
        self.url = self.url.rstrip("/")
        if not self.password and not self.api_key:
            raise ConfigurationError("Either password or api_key must be provided")

    @property
    def secret(self) -> str:
        """Credential sent with every call."""
        return self.api_key or self.password


class OdooClient:
    """Client for querying Odoo through its external API."""

    def __init__(self, config: OdooConfig, transport=None):
        self.config = config
        self.transport = transport or make_transport(
            config.protocol, config.url, config.timeout
        )
        self._uid: Optional[int] = None
        self._auth_lock = threading.Lock()

    @property
    def uid(self) -> Optional[int]:
        """Cached user ID, or None before the first successful authentication."""
        return self._uid

    def authenticate(self) -> int:
        """Return the cached user ID, authenticating first if needed."""
        if self._uid:
            return self._uid

        with self._auth_lock:
            if self._uid:
                return self._uid
            try:
                uid = self.transport.call(
                    "common",
                    "authenticate",
                    [self.config.database, self.config.username, self.config.secret, {}],
                )
            except OdooTransportError as e:
                raise OdooTransportError(f"Connection failed: {e.message}") from e

            if not uid:
                logger.warning(
                    "Authentication rejected for %s on database %s",
                    self.config.username, self.config.database
                )
                raise AuthenticationError("Authentication failed: Invalid credentials")

            logger.info(
                "Authenticated %s on %s (uid=%s)",
                self.config.username, self.config.database, uid
            )
            self._uid = uid
            return uid

    def execute(
        self,
        model: str,
        method: str,
        *args,
        **kwargs
    ) -> Any:
        """Execute a method on an Odoo model."""
        uid = self.authenticate()
        logger.debug("execute_kw %s.%s args=%r kwargs=%r", model, method, args, kwargs)
        return self.transport.call(
            "object",
            "execute_kw",
            [
                self.config.database,
                uid,
                self.config.secret,
                model,
                method,
                list(args),
                kwargs,
            ],
        )

    def search(
        self,
        model: str,
        domain: list,
        limit: Optional[int] = None,
        offset: int = 0,
        order: Optional[str] = None
    ) -> list[int]:
        """Search for records matching domain."""
        kwargs = {"offset": offset}
        if limit:
            kwargs["limit"] = limit
        if order:
            kwargs["order"] = order
        return self.execute(model, "search", domain, **kwargs)

    def read(
        self,
        model: str,
        ids: Union[int, list[int]],
        fields: Optional[list[str]] = None
    ) -> Union[dict, list[dict], None]:
        """
        Read records by IDs.

        A single ID returns the record itself (or None when Odoo returns
        nothing); several IDs return the list in the order Odoo sends it.
        """
        if not isinstance(ids, (list, tuple)):
            ids = [ids]
        ids = list(ids)
        kwargs = {}
        if fields:
            kwargs["fields"] = fields
        records = self.execute(model, "read", ids, **kwargs)
        if len(ids) == 1:
            return records[0] if records else None
        return records

    def search_read(
        self,
        model: str,
        domain: list,
        fields: Optional[list[str]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        order: Optional[str] = None
    ) -> list[dict]:
        """Search and read records in one call."""
        kwargs = {"offset": offset}
        if fields:
            kwargs["fields"] = fields
        if limit:
            kwargs["limit"] = limit
        if order:
            kwargs["order"] = order
        return self.execute(model, "search_read", domain, **kwargs)

    def fields_get(
        self,
        model: str,
        fields: Optional[list[str]] = None
    ) -> dict[str, dict]:
        """Get field definitions, optionally restricted to a subset."""
        kwargs = {}
        if fields:
            kwargs["allfields"] = fields
        return self.execute(model, "fields_get", **kwargs)

    def get_model_list(self) -> list[dict]:
        """Get every model registered in ir.model."""
        return self.search_read(
            "ir.model",
            [],
            ["model", "name", "transient"]
        )
