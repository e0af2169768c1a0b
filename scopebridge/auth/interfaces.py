"""
Authorization interfaces for ScopeBridge.

This module defines the interface authority extractors implement, allowing
the strategy that turns token scopes into authorities to be swapped on a
converter, and the principal value the converter produces.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .token import Token


class AuthoritiesExtractor(ABC):
    """
    Abstract interface for authority extraction.

    Implementations must be immutable after construction; converters share
    one instance across all concurrent conversions.
    """

    @abstractmethod
    def get_authorities(self, token: Token) -> List[str]:
        """
        Derive the authorities granted by a token.

        Args:
            token: Verified token

        Returns:
            Authority strings in order of first occurrence, without duplicates
        """
        pass


def unique_in_order(values: Iterable[str]) -> List[str]:
    """Drop repeated values, keeping the first occurrence of each."""
    return list(dict.fromkeys(values))


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    """An authenticated caller: the verified token plus its derived authorities."""
    token: Token
    authorities: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Normalize authorities into an ordered, duplicate-free tuple."""
        object.__setattr__(self, "authorities", tuple(unique_in_order(self.authorities)))

    def __hash__(self) -> int:
        # Token claims may hold lists; hash on values equal principals share
        return hash((self.token.principal_name, self.authorities))

    @property
    def name(self) -> Optional[str]:
        """Principal name taken from the token."""
        return self.token.principal_name

    def has_authority(self, authority: str) -> bool:
        """Check if the principal was granted a specific authority."""
        return authority in self.authorities

    def has_any_authority(self, *authorities: str) -> bool:
        """Check if the principal was granted at least one of the authorities."""
        return any(authority in self.authorities for authority in authorities)
