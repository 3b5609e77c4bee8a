"""Application-level exception types for tristream."""

from __future__ import annotations


class TristreamError(Exception):
    """Base exception for tristream."""


class ConfigurationError(TristreamError):
    """Base exception for configuration and startup validation errors."""


class EndpointNotConfiguredError(ConfigurationError):
    """Raised when the Triton endpoint address is blank."""


class ModelNotConfiguredError(ConfigurationError):
    """Raised when the backend or router model name is blank."""


class OutputLayoutError(TristreamError):
    """Raised when the requested outputs cannot be mapped onto raw buffer positions."""


class InvalidSettingError(ConfigurationError):
    """Raised when a configured value cannot be parsed or is not supported."""
