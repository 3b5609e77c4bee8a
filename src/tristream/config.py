"""Configuration management for tristream."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import EndpointNotConfiguredError, InvalidSettingError, ModelNotConfiguredError

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        protected_namespaces=(),
    )

    # Endpoint Configuration
    triton_url: str = Field(default="localhost:8001", description="Triton gRPC endpoint address")
    timeout_seconds: Optional[float] = Field(None, description="Deadline for the whole streaming call")

    # Model Configuration
    model_name: str = Field(default="gpt-oss-20b", description="Backend model the router forwards to")
    router_model: str = Field(default="llm-router", description="Triton model that receives the request")
    system_prompt: str = Field(default="You are a helpful assistant.", description="System turn of the conversation")
    request_id: str = Field(default="req-1", description="Identifier attached to the inference request")

    # Logging Configuration
    log_level: str = Field(
        default="WARNING",
        validation_alias=AliasChoices("tristream_log_level", "log_level"),
        description="Log level",
    )


def get_settings(**overrides: Any) -> Settings:
    """Get application settings.

    Args:
        overrides: Values that take precedence over the environment; ``None`` entries are ignored

    Returns:
        Validated settings instance
    """
    try:
        settings = Settings(**{key: value for key, value in overrides.items() if value is not None})
    except ValidationError as exc:
        raise InvalidSettingError(f"Invalid configuration: {exc}") from exc

    if not settings.triton_url.strip():
        raise EndpointNotConfiguredError("Triton endpoint is empty. Set TRITON_URL or pass --url.")
    if not settings.model_name.strip():
        raise ModelNotConfiguredError("Backend model is empty. Set MODEL_NAME or pass --model.")
    if not settings.router_model.strip():
        raise ModelNotConfiguredError("Router model is empty. Set ROUTER_MODEL or pass --router-model.")
    if settings.log_level.upper() not in LOG_LEVELS:
        raise InvalidSettingError(
            f"Unknown log level {settings.log_level!r}. Set TRISTREAM_LOG_LEVEL to one of {', '.join(LOG_LEVELS)}."
        )
    return settings
