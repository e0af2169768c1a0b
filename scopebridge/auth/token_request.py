"""
Token exchange request model.

A TokenExchangeRequest describes how to obtain an access token from the
authorization server: which client authenticates, at which endpoint, for
which kind of token, and with which additional authorization attributes.
It is configured here and executed by an external token client.
"""

import warnings
from enum import IntEnum
from typing import Dict, Mapping, Optional, Union
from urllib.parse import urlsplit

from .exceptions import ConfigurationError

MAX_CLIENT_ID_LENGTH = 255
TOKEN_ENDPOINT_PATH = "/oauth/token"


class TokenType(IntEnum):
    """Kinds of token a request can ask for."""
    USER_TOKEN = 0
    CLIENT_CREDENTIALS_TOKEN = 1


# Legacy integer constants, use TokenType instead
TYPE_USER_TOKEN = int(TokenType.USER_TOKEN)
TYPE_CLIENT_CREDENTIALS_TOKEN = int(TokenType.CLIENT_CREDENTIALS_TOKEN)


def is_absolute_http_uri(value: object) -> bool:
    if not isinstance(value, str):
        return False
    parts = urlsplit(value)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def _check_uri(value: str, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{name} must be a string, got {type(value).__name__}")
    if not is_absolute_http_uri(value):
        raise ConfigurationError(
            f"{name} must be an absolute http(s) URI",
            details={name: value}
        )
    return value


def _coerce_token_type(value: Union[TokenType, int]) -> TokenType:
    # bool is an int subclass but never a meaningful token type
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"Token type must be a TokenType or int, got {type(value).__name__}"
        )
    try:
        return TokenType(value)
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown token type: {value}",
            details={"allowed": [int(t) for t in TokenType]}
        ) from e


class TokenExchangeRequest:
    """
    Mutable description of a token exchange.

    Setters validate shape and return the same instance so calls can be
    chained. Validity is computed from the current fields every time
    ``is_valid`` is called. Instances are meant to be owned by a single
    exchange attempt and are not thread-safe.
    """

    def __init__(self, base_uri: Optional[str] = None):
        """
        Initialize the request.

        Args:
            base_uri: Authorization server root URI, used to resolve the token
                endpoint when none is set explicitly

        Raises:
            ConfigurationError: If base_uri is not an absolute http(s) URI
        """
        self._base_uri = _check_uri(base_uri, "base_uri") if base_uri is not None else None
        self._client_id: Optional[str] = None
        self._client_secret: Optional[str] = None
        self._token_endpoint: Optional[str] = None
        self._additional_authorization_attributes: Optional[Dict[str, str]] = None
        self._token_type: Optional[TokenType] = None

    # -- base URI ----------------------------------------------------------

    @property
    def base_uri(self) -> Optional[str]:
        return self._base_uri

    def get_base_uri(self) -> Optional[str]:
        return self._base_uri

    # -- client ------------------------------------------------------------

    @property
    def client_id(self) -> Optional[str]:
        return self._client_id

    def get_client_id(self) -> Optional[str]:
        return self._client_id

    def set_client_id(self, client_id: Optional[str]) -> "TokenExchangeRequest":
        """
        Set the OAuth 2.0 client id used to authenticate the token request.

        Args:
            client_id: Client id, no more than 255 characters, or None

        Returns:
            This request

        Raises:
            ConfigurationError: If the client id is not a string or too long
        """
        if client_id is not None:
            if not isinstance(client_id, str):
                raise ConfigurationError(
                    f"client_id must be a string, got {type(client_id).__name__}"
                )
            if len(client_id) > MAX_CLIENT_ID_LENGTH:
                raise ConfigurationError(
                    f"client_id must not exceed {MAX_CLIENT_ID_LENGTH} characters",
                    details={"length": len(client_id)}
                )
        self._client_id = client_id
        return self

    @property
    def client_secret(self) -> Optional[str]:
        return self._client_secret

    def get_client_secret(self) -> Optional[str]:
        return self._client_secret

    def set_client_secret(self, client_secret: Optional[str]) -> "TokenExchangeRequest":
        if client_secret is not None and not isinstance(client_secret, str):
            raise ConfigurationError(
                f"client_secret must be a string, got {type(client_secret).__name__}"
            )
        self._client_secret = client_secret
        return self

    # -- endpoint ----------------------------------------------------------

    @property
    def token_endpoint(self) -> Optional[str]:
        return self._token_endpoint

    def get_token_endpoint(self) -> Optional[str]:
        return self._token_endpoint

    def set_token_endpoint(self, token_endpoint: Optional[str]) -> "TokenExchangeRequest":
        """
        Set the token endpoint, e.g. ``https://<server>:<port>/uaa/oauth/token``.

        Raises:
            ConfigurationError: If the value is not an absolute http(s) URI
        """
        if token_endpoint is not None:
            token_endpoint = _check_uri(token_endpoint, "token_endpoint")
        self._token_endpoint = token_endpoint
        return self

    def resolve_token_endpoint(self) -> Optional[str]:
        """
        Endpoint a token client should call.

        Returns:
            The explicit token endpoint, else the default endpoint below the
            base URI, else None
        """
        if self._token_endpoint:
            return self._token_endpoint
        if self._base_uri:
            return self._base_uri.rstrip("/") + TOKEN_ENDPOINT_PATH
        return None

    # -- authorization attributes -----------------------------------------

    @property
    def additional_authorization_attributes(self) -> Optional[Dict[str, str]]:
        return self.get_additional_authorization_attributes()

    def get_additional_authorization_attributes(self) -> Optional[Dict[str, str]]:
        if self._additional_authorization_attributes is None:
            return None
        return dict(self._additional_authorization_attributes)

    def set_additional_authorization_attributes(
        self,
        attributes: Optional[Mapping[str, str]]
    ) -> "TokenExchangeRequest":
        """
        Set additional authorization attributes to put into the access token.

        Args:
            attributes: Attribute names mapped to values, or None to clear

        Returns:
            This request

        Raises:
            ConfigurationError: If attributes is not a str to str mapping
        """
        if attributes is None:
            self._additional_authorization_attributes = None
            return self

        if not isinstance(attributes, Mapping):
            raise ConfigurationError(
                "additional authorization attributes must be a mapping, "
                f"got {type(attributes).__name__}"
            )
        invalid = [
            key for key, value in attributes.items()
            if not isinstance(key, str) or not isinstance(value, str)
        ]
        if invalid:
            raise ConfigurationError(
                "additional authorization attributes must map strings to strings",
                details={"invalid_keys": [repr(key) for key in invalid]}
            )

        self._additional_authorization_attributes = dict(attributes)
        return self

    # -- token type --------------------------------------------------------

    @property
    def token_type(self) -> Optional[TokenType]:
        return self._token_type

    def set_token_type(self, token_type: Optional[TokenType]) -> "TokenExchangeRequest":
        """
        Set the requested token type.

        Raises:
            ConfigurationError: If token_type is not a TokenType; legacy
                integers go through set_type
        """
        if token_type is not None and not isinstance(token_type, TokenType):
            raise ConfigurationError(
                f"token_type must be a TokenType, got {type(token_type).__name__}"
            )
        self._token_type = token_type
        return self

    def get_type(self) -> Optional[int]:
        """
        Return the requested token type as a legacy integer.

        .. deprecated:: use the ``token_type`` property.
        """
        warnings.warn(
            "get_type() is deprecated, use the token_type property",
            DeprecationWarning,
            stacklevel=2,
        )
        return int(self._token_type) if self._token_type is not None else None

    def set_type(self, token_type: Union[TokenType, int]) -> "TokenExchangeRequest":
        """
        Set the requested token type from TYPE_USER_TOKEN or
        TYPE_CLIENT_CREDENTIALS_TOKEN.

        .. deprecated:: use ``set_token_type``.

        Raises:
            ConfigurationError: If the value is not a known token type
        """
        warnings.warn(
            "set_type() is deprecated, use set_token_type()",
            DeprecationWarning,
            stacklevel=2,
        )
        self._token_type = _coerce_token_type(token_type)
        return self

    # -- validity ----------------------------------------------------------

    def is_valid(self) -> bool:
        """
        Check if this request holds enough information to retrieve a token.

        A token endpoint must be resolvable; client-credentials requests also
        need a non-empty client id.
        """
        if not self.resolve_token_endpoint():
            return False
        if self._token_type == TokenType.CLIENT_CREDENTIALS_TOKEN and not self._client_id:
            return False
        return True

    def __repr__(self) -> str:
        secret = "'***'" if self._client_secret is not None else "None"
        token_type = self._token_type.name if self._token_type is not None else None
        return (
            f"TokenExchangeRequest(base_uri={self._base_uri!r}, "
            f"token_endpoint={self._token_endpoint!r}, client_id={self._client_id!r}, "
            f"client_secret={secret}, token_type={token_type!r})"
        )
