"""
ScopeBridge exception classes.
"""

from typing import Any, Dict, Optional


class ScopeBridgeError(Exception):
    """Base exception for all ScopeBridge errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ScopeBridgeError):
    """Raised when a component is set up with missing or out-of-bounds values."""
    pass
