"""
Authentication and authorization module for ScopeBridge.

This module turns the scopes of verified tokens into application authorities
through swappable extractors, and models token exchange requests.
"""

from .interfaces import (
    AuthoritiesExtractor,
    AuthenticatedPrincipal,
)
from .token import Token
from .extractors import DefaultAuthoritiesExtractor, LocalAuthoritiesExtractor
from .converter import TokenAuthenticationConverter
from .token_request import (
    TokenExchangeRequest,
    TokenType,
    TYPE_USER_TOKEN,
    TYPE_CLIENT_CREDENTIALS_TOKEN,
)
from .config import (
    ServiceConfiguration,
    create_authentication_converter,
    load_service_configuration,
)
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    InvalidTokenError,
    PreconditionError,
)

__all__ = [
    # Interfaces
    "AuthoritiesExtractor",
    "AuthenticatedPrincipal",
    "Token",

    # Implementations
    "DefaultAuthoritiesExtractor",
    "LocalAuthoritiesExtractor",
    "TokenAuthenticationConverter",

    # Token requests
    "TokenExchangeRequest",
    "TokenType",
    "TYPE_USER_TOKEN",
    "TYPE_CLIENT_CREDENTIALS_TOKEN",

    # Configuration
    "ServiceConfiguration",
    "create_authentication_converter",
    "load_service_configuration",

    # Exceptions
    "AuthenticationError",
    "ConfigurationError",
    "InvalidTokenError",
    "PreconditionError",
]
