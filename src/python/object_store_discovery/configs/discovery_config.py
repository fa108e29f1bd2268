"""Configuration model and loader for object-store discovery."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from .authentication_type import AuthenticationType

logger = logging.getLogger(__name__)


class DiscoveryConfig(BaseModel):
    """Validated discovery settings.

    Field aliases match the hyphenated keys used in the YAML file, so
    both ``file-prefix`` and ``file_prefix`` are accepted.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    bucket_name: str = Field(..., alias="s3-bucket-name", min_length=1)
    bucket_region: str = Field(..., alias="s3-bucket-region", min_length=1)
    endpoint_url: Optional[str] = Field(
        default=None, alias="s3-endpoint-url", description="Override for S3-compatible stores."
    )
    file_prefix: str = Field(default="", alias="file-prefix")
    file_expiration: int = Field(
        default=0, alias="file-expiration", description="Announcement expiration in minutes (0 disables)."
    )
    update_interval: int = Field(
        default=0, alias="update-interval", description="Announcement refresh interval in minutes (0 disables)."
    )
    credentials_type: AuthenticationType = Field(default=AuthenticationType.DEFAULT, alias="credentials-type")
    credentials_access_key_id: Optional[str] = Field(default=None, alias="credentials-access-key-id")
    credentials_secret_access_key: Optional[str] = Field(
        default=None, alias="credentials-secret-access-key", repr=False
    )
    credentials_session_token: Optional[str] = Field(
        default=None, alias="credentials-session-token", repr=False
    )
    credentials_profile: Optional[str] = Field(default=None, alias="credentials-profile")
    resolve_threads: int = Field(default=2, alias="resolve-threads", ge=1)

    @field_validator("file_prefix", mode="before")
    @classmethod
    def _default_prefix(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("file_expiration", "update_interval", mode="before")
    @classmethod
    def _non_negative_minutes(cls, value: Any, info: ValidationInfo) -> int:
        if value is None:
            return 0
        try:
            minutes = int(value)
        except (TypeError, ValueError):
            logger.error("Not able to parse %s configuration '%s', disabling it", info.field_name, value)
            return 0
        if minutes < 0:
            logger.error("Value for %s configuration must be positive or zero, disabling it", info.field_name)
            return 0
        return minutes

    @model_validator(mode="after")
    def _check_credentials(self) -> "DiscoveryConfig":
        if self.credentials_type in (AuthenticationType.ACCESS_KEY, AuthenticationType.TEMPORARY_SESSION):
            if not self.credentials_access_key_id or not self.credentials_secret_access_key:
                raise ValueError(
                    f"credentials-type '{self.credentials_type}' requires "
                    "credentials-access-key-id and credentials-secret-access-key"
                )
        if self.credentials_type == AuthenticationType.TEMPORARY_SESSION and not self.credentials_session_token:
            raise ValueError("credentials-type 'temporary_session' requires credentials-session-token")
        return self

    @property
    def expiration_minutes(self) -> int:
        return self.file_expiration

    @property
    def update_interval_minutes(self) -> int:
        return self.update_interval


def load_config(path: Path | str) -> DiscoveryConfig:
    """Load a :class:`DiscoveryConfig` from a YAML file.

    Settings may sit at the top level of the document or under a
    ``discovery:`` key.
    """
    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f) or {}

    section = raw_config.get("discovery", raw_config) if isinstance(raw_config, dict) else {}
    config = DiscoveryConfig.model_validate(section or {})
    logger.info("DiscoveryConfig loaded from %s", config_path)
    return config
