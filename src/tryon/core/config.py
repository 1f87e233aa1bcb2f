"""Environment-backed settings for the Masterpiece X integration.

Variable names match the deployment environment of the storefront backend
(``MASTERPIECE_X_API_URL``, ``ENABLE_3D_GENERATION`` ...), so each field
declares its environment name explicitly instead of relying on a prefix.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


class MasterpieceSettings(BaseSettings):
    """Pydantic settings container for the image-to-3D client."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    api_url: str | None = Field(
        default=None,
        validation_alias="MASTERPIECE_X_API_URL",
        description="Root URL of the Masterpiece X REST API.",
    )
    api_key: str | None = Field(
        default=None,
        validation_alias="MASTERPIECE_X_API_KEY",
        description="Bearer token sent with every request.",
    )
    app_id: str | None = Field(
        default=None,
        validation_alias="MASTERPIECE_X_APP_ID",
        description="Optional application id sent as X-App-Id.",
    )
    enabled: bool = Field(
        default=False,
        validation_alias="ENABLE_3D_GENERATION",
        description="Feature switch; generation refuses to run unless true.",
    )
    poll_interval_ms: int = Field(
        default=5_000,
        ge=0,
        validation_alias="MASTERPIECE_POLL_INTERVAL_MS",
        description="Delay between status polls in milliseconds.",
    )
    max_poll_attempts: int = Field(
        default=240,
        ge=1,
        validation_alias="MASTERPIECE_MAX_POLL_ATTEMPTS",
        description="Retry-eligible poll responses tolerated before timing out.",
    )
    request_timeout_ms: int = Field(
        default=30_000,
        ge=1,
        validation_alias="MASTERPIECE_REQUEST_TIMEOUT_MS",
        description="Timeout applied to each individual HTTP request (ms).",
    )
    generate_paths: str | None = Field(
        default=None,
        validation_alias="MASTERPIECE_GENERATE_PATHS",
        description="Comma-separated job creation paths tried before defaults.",
    )
    status_paths: str | None = Field(
        default=None,
        validation_alias="MASTERPIECE_STATUS_PATHS",
        description="Comma-separated status paths tried before defaults.",
    )
    asset_paths: str | None = Field(
        default=None,
        validation_alias="MASTERPIECE_ASSET_PATHS",
        description="Comma-separated asset creation paths tried before defaults.",
    )
    force_asset_upload: bool = Field(
        default=False,
        validation_alias="MASTERPIECE_FORCE_ASSET_UPLOAD",
        description="Fail generation when the asset upload handshake fails.",
    )
    try_asset_upload: bool = Field(
        default=True,
        validation_alias="MASTERPIECE_TRY_ASSET_UPLOAD",
        description="Attempt the asset upload handshake before job creation.",
    )

    @field_validator("enabled", "force_asset_upload", "try_asset_upload", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any, info: ValidationInfo) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip().lower()
        if not text:
            return cls.model_fields[info.field_name].default
        return text in TRUE_VALUES

    @field_validator("poll_interval_ms", "max_poll_attempts", "request_timeout_ms", mode="before")
    @classmethod
    def _parse_number(cls, value: Any, info: ValidationInfo) -> Any:
        if not isinstance(value, str):
            return value
        try:
            return int(value.strip())
        except ValueError:
            return cls.model_fields[info.field_name].default


__all__ = ["MasterpieceSettings"]
