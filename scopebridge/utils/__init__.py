"""
Utilities package for ScopeBridge.
"""

from scopebridge.utils.config import Config, get_config, set_config, reset_config
from scopebridge.utils.exceptions import ScopeBridgeError, ConfigurationError

__all__ = [
    # Config
    "Config",
    "get_config",
    "set_config",
    "reset_config",

    # Exceptions
    "ScopeBridgeError",
    "ConfigurationError",
]
