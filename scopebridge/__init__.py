"""
ScopeBridge - OAuth2 scope to authority conversion

ScopeBridge turns the scopes of a verified identity token into application
authorities, optionally keeping only the scopes of the current application
with their application id prefix stripped, and models the requests used to
exchange credentials for access tokens.
"""

__version__ = "0.1.0"
__author__ = "ScopeBridge Team"
__description__ = "OAuth2 scope to authority conversion and token exchange requests"

# Core imports for easy access
from scopebridge.auth.converter import TokenAuthenticationConverter
from scopebridge.auth.extractors import DefaultAuthoritiesExtractor, LocalAuthoritiesExtractor
from scopebridge.auth.interfaces import AuthenticatedPrincipal, AuthoritiesExtractor
from scopebridge.auth.token import Token
from scopebridge.auth.token_request import TokenExchangeRequest, TokenType
from scopebridge.auth.config import ServiceConfiguration
from scopebridge.utils.config import Config
from scopebridge.utils.exceptions import ScopeBridgeError

__all__ = [
    # Core classes
    "TokenAuthenticationConverter",
    "DefaultAuthoritiesExtractor",
    "LocalAuthoritiesExtractor",
    "AuthoritiesExtractor",

    # Types
    "AuthenticatedPrincipal",
    "Token",
    "TokenExchangeRequest",
    "TokenType",

    # Config
    "Config",
    "ServiceConfiguration",
    "ScopeBridgeError",

    # Version info
    "__version__",
]
