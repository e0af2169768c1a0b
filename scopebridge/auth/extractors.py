"""
Authority extractor implementations.
"""

from typing import List

import structlog

from .exceptions import ConfigurationError
from .interfaces import AuthoritiesExtractor, unique_in_order
from .token import Token

logger = structlog.get_logger(__name__)

DEFAULT_SCOPE_SEPARATOR = "."


class DefaultAuthoritiesExtractor(AuthoritiesExtractor):
    """
    Uses every scope of the token as an authority, fully qualified.

    No filtering and no prefix stripping happens.
    """

    def get_authorities(self, token: Token) -> List[str]:
        return unique_in_order(token.scopes)

    def __repr__(self) -> str:
        return "DefaultAuthoritiesExtractor()"


class LocalAuthoritiesExtractor(AuthoritiesExtractor):
    """
    Keeps only the scopes of one application and strips its prefix.

    A scope is local when it starts with ``app_id`` followed by the
    separator, e.g. ``"my-app!t123.Display"`` for app id ``"my-app!t123"``
    yields ``"Display"``. Scopes of other applications, scopes without a
    separator and scopes with nothing after the prefix are dropped.
    """

    def __init__(self, app_id: str, separator: str = DEFAULT_SCOPE_SEPARATOR):
        """
        Initialize the extractor.

        Args:
            app_id: Application id scopes must be qualified with, e.g. "my-app!t123"
            separator: Separator between application id and scope name

        Raises:
            ConfigurationError: If app_id or separator is missing or empty
        """
        if not isinstance(app_id, str) or not app_id:
            raise ConfigurationError(
                "Local scope extraction requires a non-empty 'app_id'",
                details={"app_id": app_id}
            )
        if not isinstance(separator, str) or not separator:
            raise ConfigurationError(
                "Local scope extraction requires a non-empty separator",
                details={"separator": separator}
            )

        self._app_id = app_id
        self._separator = separator
        self._prefix = app_id + separator

    @property
    def app_id(self) -> str:
        return self._app_id

    @property
    def separator(self) -> str:
        return self._separator

    def get_authorities(self, token: Token) -> List[str]:
        scopes = token.scopes
        local_scopes = [
            scope[len(self._prefix):]
            for scope in scopes
            if scope.startswith(self._prefix) and len(scope) > len(self._prefix)
        ]

        dropped = len(scopes) - len(local_scopes)
        if dropped:
            logger.debug(
                "Dropped non-local scopes",
                app_id=self._app_id,
                kept=len(local_scopes),
                dropped=dropped,
            )

        return unique_in_order(local_scopes)

    def __repr__(self) -> str:
        return f"LocalAuthoritiesExtractor(app_id={self._app_id!r})"
