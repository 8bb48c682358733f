"""Typed configuration loaded from environment variables at startup."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

logger: logging.Logger = logging.getLogger(__name__)


class CloudProvider(StrEnum):
    """Supported cloud provider deployment targets."""

    AWS = "aws"
    GCP = "gcp"
    AZURE = "azure"


class StackConfig(BaseSettings):
    """Fully validated VM connection stack configuration.

    All values are sourced from environment variables at startup.
    Raises ``ValidationError`` on missing or invalid values.
    """

    model_config = SettingsConfigDict(
        env_prefix="VMCONN_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    cloud_provider: CloudProvider
    subscription_id: str = ""
    vm_id: str = ""
    windows: bool | None = None
    lookup_timeout: float | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    environment: Literal["prod", "staging", "dev"] = "prod"

    @classmethod
    def load(cls) -> StackConfig:
        """Load and validate configuration from the environment.

        Logs each resolved setting at DEBUG level.
        Raises ``pydantic.ValidationError`` on missing or invalid values.
        """
        config = cls()  # type: ignore[call-arg]  # env vars supply required fields
        logger.debug(
            "stack_config_loaded",
            extra={
                "cloud_provider": config.cloud_provider.value,
                "vm_id": config.vm_id,
                "windows": config.windows,
                "lookup_timeout": config.lookup_timeout,
                "environment": config.environment,
            },
        )
        return config

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)
