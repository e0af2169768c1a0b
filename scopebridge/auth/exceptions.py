"""
Authentication and authorization exceptions.
"""

from scopebridge.utils.exceptions import ScopeBridgeError, ConfigurationError


class AuthenticationError(ScopeBridgeError):
    """Raised when a token cannot be turned into an authenticated principal."""
    pass


class InvalidTokenError(AuthenticationError):
    """Raised when a token is malformed or cannot be decoded."""
    pass


class PreconditionError(AuthenticationError):
    """Raised when an operation is not allowed in the component's current state."""
    pass


__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "InvalidTokenError",
    "PreconditionError",
]
