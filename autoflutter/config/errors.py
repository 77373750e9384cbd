"""
Custom exceptions for autoflutter.

These exceptions provide clear, actionable error messages for provisioning
and configuration failures.
"""

from typing import Any


class ProvisioningError(Exception):
    """Base exception for all provisioning errors."""
    pass


class RequiredCommandMissing(ProvisioningError):
    """
    Raised when a required command is still unresolvable after its install step.

    Only a small whitelist of commands (``pod``, ``sdkmanager``) is required;
    their absence aborts the whole run.
    """

    def __init__(self, command: str, tool: str = None):
        self.command = command
        self.tool = tool
        super().__init__(f"Missing command: {command}")


class ConfigurationError(ProvisioningError):
    """Base exception for all configuration errors."""
    pass


class ConfigValidationError(ConfigurationError):
    """
    Raised when configuration validation fails.

    Provides context about which field failed and what value was provided.
    """

    def __init__(self, message: str, field: str = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message)

    def __str__(self):
        if self.field:
            return f"Validation error for '{self.field}': {self.args[0]} (got: {self.value!r})"
        return self.args[0]


class ConfigFileError(ConfigurationError):
    """
    Raised when a YAML settings file cannot be read or parsed.

    Includes the file path and, when available, the line number reported by
    the YAML parser.
    """

    def __init__(self, path, message: str, line: int = None):
        self.path = path
        self.line = line
        location = f"{path}:{line}" if line is not None else f"{path}"
        super().__init__(f"{location}: {message}")
