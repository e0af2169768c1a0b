"""
Token to principal conversion.

This module provides the converter that turns a verified token into an
AuthenticatedPrincipal, removing the application id prefix
(e.g. ``my-application-demo!t1229``) from scopes when local scope extraction
is enabled.
"""

from typing import Any, Mapping, Optional, Protocol, Union

from scopebridge.utils.logging import get_logger
from .exceptions import PreconditionError
from .extractors import DefaultAuthoritiesExtractor, LocalAuthoritiesExtractor
from .interfaces import AuthenticatedPrincipal, AuthoritiesExtractor
from .token import Token, as_token


class AppIdSource(Protocol):
    """Anything that knows the application id, e.g. a ServiceConfiguration."""

    def get_app_id(self) -> Optional[str]:
        ...


class TokenAuthenticationConverter:
    """
    Converts verified tokens into authenticated principals.

    The converter starts with global extraction (all scopes, fully qualified)
    unless an explicit extractor is given. When constructed with an
    ``app_id`` it can be switched to local extraction at any time.

    ``convert`` may be called concurrently on a shared instance; each call
    reads the active extractor exactly once. Switching the extraction mode
    replaces the extractor reference in a single assignment, so callers that
    need a switch to happen before a particular conversion must order those
    calls themselves.
    """

    def __init__(
        self,
        authorities_extractor: Optional[AuthoritiesExtractor] = None,
        *,
        app_id: Optional[str] = None,
    ):
        """
        Initialize the converter.

        Args:
            authorities_extractor: Extractor used to turn token scopes into
                authorities (defaults to DefaultAuthoritiesExtractor)
            app_id: Application id, e.g. "myXsAppname!t123"; required for
                local scope extraction
        """
        if authorities_extractor is None:
            authorities_extractor = DefaultAuthoritiesExtractor()
        self._authorities_extractor: AuthoritiesExtractor = authorities_extractor
        self._app_id = app_id

        self._logger = get_logger(__name__, component="token_converter")

    @classmethod
    def from_configuration(cls, configuration: AppIdSource) -> "TokenAuthenticationConverter":
        """
        Create a converter with global extraction and the configured app id.

        Args:
            configuration: Object exposing get_app_id()

        Returns:
            TokenAuthenticationConverter instance
        """
        return cls(app_id=configuration.get_app_id())

    @property
    def app_id(self) -> Optional[str]:
        return self._app_id

    @property
    def authorities_extractor(self) -> AuthoritiesExtractor:
        return self._authorities_extractor

    @property
    def local_scopes_only(self) -> bool:
        """True when only local scopes are turned into authorities."""
        return isinstance(self._authorities_extractor, LocalAuthoritiesExtractor)

    def convert(self, token: Union[Token, Mapping[str, Any]]) -> AuthenticatedPrincipal:
        """
        Convert a verified token into an authenticated principal.

        Args:
            token: Verified token or its claims mapping

        Returns:
            AuthenticatedPrincipal with the token and its authorities
        """
        token = as_token(token)
        extractor = self._authorities_extractor
        authorities = extractor.get_authorities(token)

        self._logger.debug(
            "Token converted",
            extractor=type(extractor).__name__,
            authorities=len(authorities),
        )
        return AuthenticatedPrincipal(token=token, authorities=tuple(authorities))

    __call__ = convert

    def set_local_scope_as_authorities(self, extract_local_scopes_only: bool) -> None:
        """
        Switch between local and global scope extraction.

        Local scopes are the scopes of this application, returned without the
        app id prefix, e.g. "Display". All other scopes are filtered out.

        Args:
            extract_local_scopes_only: True for local extraction, False to
                restore the default (global) extraction

        Raises:
            PreconditionError: If local extraction is requested but no app_id
                was provided; the active extractor stays unchanged
        """
        if extract_local_scopes_only:
            if not self._app_id:
                raise PreconditionError(
                    "For local scope extraction 'app_id' must be provided to "
                    "TokenAuthenticationConverter"
                )
            extractor: AuthoritiesExtractor = LocalAuthoritiesExtractor(self._app_id)
        else:
            extractor = DefaultAuthoritiesExtractor()

        self._authorities_extractor = extractor
        self._logger.info(
            "Authorities extraction mode changed",
            local_scopes_only=extract_local_scopes_only,
            app_id=self._app_id,
        )

    def __repr__(self) -> str:
        return (
            f"TokenAuthenticationConverter(app_id={self._app_id!r}, "
            f"extractor={self._authorities_extractor!r})"
        )
