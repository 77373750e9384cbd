"""
Configuration and error types for autoflutter.

Settings live in autoflutter.config.settings (imported lazily by callers,
since it pulls in pydantic and PyYAML).
"""

from .errors import (
    ProvisioningError,
    RequiredCommandMissing,
    ConfigurationError,
    ConfigValidationError,
    ConfigFileError,
)

__all__ = [
    "ProvisioningError",
    "RequiredCommandMissing",
    "ConfigurationError",
    "ConfigValidationError",
    "ConfigFileError",
]
