"""
Exceptions raised while talking to Odoo.
"""


class OdooError(Exception):
    """Base exception for all Odoo access errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(OdooError):
    """Raised when the connection settings are missing or invalid."""
    pass


class OdooTransportError(OdooError):
    """Raised when the request never got a usable answer (HTTP status, timeout, network)."""
    pass


class OdooRemoteError(OdooError):
    """Raised when Odoo answered with an error of its own."""
    pass


class AuthenticationError(OdooError):
    """Raised when Odoo rejects the configured credentials."""
    pass
