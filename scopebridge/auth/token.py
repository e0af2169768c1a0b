"""
Verified token abstraction.

A Token is an immutable view over the claim set of an access token whose
signature and expiry were checked by the caller. Nothing in this module
verifies anything.
"""

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

import jwt

from .exceptions import InvalidTokenError

# Claim names
CLAIM_SCOPES = "scope"
CLAIM_SUBJECT = "sub"
CLAIM_CLIENT_ID = "cid"
CLAIM_AUTHORIZED_PARTY = "azp"
CLAIM_USER_NAME = "user_name"
CLAIM_EMAIL = "email"
CLAIM_GRANT_TYPE = "grant_type"
CLAIM_ZONE_ID = "zid"
CLAIM_ISSUER = "iss"
CLAIM_AUDIENCE = "aud"
CLAIM_EXPIRATION = "exp"
CLAIM_ISSUED_AT = "iat"

GRANT_TYPE_CLIENT_CREDENTIALS = "client_credentials"


class Token:
    """
    Read-only wrapper around the claims of a verified token.

    The claims mapping is copied on construction, so later changes to the
    caller's dictionary are never observed.
    """

    __slots__ = ("_claims", "_encoded")

    def __init__(self, claims: Mapping[str, Any], encoded: Optional[str] = None):
        """
        Create a token from its claims.

        Args:
            claims: Claim set of an already verified token
            encoded: The encoded token the claims were read from, if known

        Raises:
            InvalidTokenError: If claims is not a mapping
        """
        if not isinstance(claims, Mapping):
            raise InvalidTokenError(
                f"Token claims must be a mapping, got {type(claims).__name__}"
            )
        self._claims = MappingProxyType(dict(claims))
        self._encoded = encoded

    @classmethod
    def from_jwt(cls, encoded: str) -> "Token":
        """
        Read the claims of an encoded JWT that was verified elsewhere.

        Args:
            encoded: Compact-serialized JWT

        Returns:
            Token over the decoded payload

        Raises:
            InvalidTokenError: If the value is not a decodable JWT
        """
        try:
            claims = jwt.decode(
                encoded,
                options={"verify_signature": False, "verify_exp": False, "verify_aud": False},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Cannot decode token: {e}") from e
        return cls(claims, encoded=encoded)

    @property
    def claims(self) -> Mapping[str, Any]:
        """All claims, read-only."""
        return self._claims

    @property
    def encoded(self) -> Optional[str]:
        return self._encoded

    def has_claim(self, name: str) -> bool:
        return name in self._claims

    def get_claim(self, name: str, default: Any = None) -> Any:
        return self._claims.get(name, default)

    def get_string_list(self, name: str) -> List[str]:
        """
        Read a claim as a list of strings.

        Lists keep their order and drop non-string entries; a string is split
        on whitespace; a missing or null claim gives an empty list.
        """
        value = self._claims.get(name)
        if value is None:
            return []
        if isinstance(value, str):
            return value.split()
        if isinstance(value, (list, tuple)):
            return [item for item in value if isinstance(item, str)]
        return []

    @property
    def scopes(self) -> List[str]:
        """Scope claim in token order."""
        return self.get_string_list(CLAIM_SCOPES)

    @property
    def subject(self) -> Optional[str]:
        return self._claims.get(CLAIM_SUBJECT)

    @property
    def client_id(self) -> Optional[str]:
        for claim in (CLAIM_CLIENT_ID, "client_id", CLAIM_AUTHORIZED_PARTY):
            value = self._claims.get(claim)
            if value:
                return value
        return None

    @property
    def user_name(self) -> Optional[str]:
        return self._claims.get(CLAIM_USER_NAME)

    @property
    def email(self) -> Optional[str]:
        return self._claims.get(CLAIM_EMAIL)

    @property
    def grant_type(self) -> Optional[str]:
        return self._claims.get(CLAIM_GRANT_TYPE)

    @property
    def zone_id(self) -> Optional[str]:
        return self._claims.get(CLAIM_ZONE_ID)

    @property
    def issuer(self) -> Optional[str]:
        return self._claims.get(CLAIM_ISSUER)

    @property
    def audience(self) -> List[str]:
        return self.get_string_list(CLAIM_AUDIENCE)

    @property
    def expires_at(self) -> Optional[datetime]:
        return self._timestamp(CLAIM_EXPIRATION)

    @property
    def issued_at(self) -> Optional[datetime]:
        return self._timestamp(CLAIM_ISSUED_AT)

    @property
    def is_client_credentials(self) -> bool:
        return self.grant_type == GRANT_TYPE_CLIENT_CREDENTIALS

    @property
    def principal_name(self) -> Optional[str]:
        """
        Name of the authenticated party.

        The user name for user tokens, the client id for client-credentials
        tokens (or tokens carrying no user), the subject otherwise.
        """
        if self.user_name and not self.is_client_credentials:
            return self.user_name
        return self.client_id or self.subject

    def _timestamp(self, name: str) -> Optional[datetime]:
        value = self._claims.get(name)
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return datetime.fromtimestamp(value, tz=timezone.utc)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return dict(self._claims) == dict(other._claims)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Token(principal={self.principal_name!r}, scopes={len(self.scopes)})"


def as_token(token: Any) -> Token:
    """
    Coerce a Token or a claims mapping into a Token.

    Raises:
        InvalidTokenError: For any other input
    """
    if isinstance(token, Token):
        return token
    if isinstance(token, Mapping):
        return Token(token)
    raise InvalidTokenError(
        f"Expected a Token or a claims mapping, got {type(token).__name__}"
    )


__all__ = [
    "Token",
    "as_token",
    "CLAIM_SCOPES",
    "GRANT_TYPE_CLIENT_CREDENTIALS",
]
