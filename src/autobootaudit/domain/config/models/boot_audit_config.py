"""
Boot audit configuration domain model.

Settings that control how targets are queried: remoting connection
parameters, event-log failure policy and batch parallelism.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import EventLogPolicy

logger = logging.getLogger(__name__)


class ConnectionSettings(BaseModel):
    """
    WinRM connection settings.

    Timeouts are applied at the remoting session; the resolver itself has none.
    """

    timeout_seconds: int = Field(
        default=30,
        description="Seconds the HTTP read waits beyond the operation timeout",
        ge=1,
        le=300,
    )
    operation_timeout_sec: int = Field(
        default=120,
        description="WS-Management operation timeout in seconds",
        ge=5,
        le=600,
    )
    port_http: int = Field(default=5985, ge=1, le=65535)
    port_https: int = Field(default=5986, ge=1, le=65535)
    verify_ssl: bool = Field(default=True, description="Validate HTTPS certificates first")
    max_retries_per_combo: int = Field(
        default=1,
        description="Attempts per transport/auth combination",
        ge=1,
        le=5,
    )

    @field_validator("operation_timeout_sec")
    @classmethod
    def warn_long_timeout(cls, v: int) -> int:
        """Warn about very long operation timeouts."""
        if v > 300:
            logger.warning("Operation timeout of %s is very high - consider network conditions", v)
        return v


class BootAuditConfig(BaseModel):
    """
    Domain model for boot audit configuration.
    """

    model_config = ConfigDict(use_enum_values=False, extra="ignore")

    event_log_policy: EventLogPolicy = Field(
        default=EventLogPolicy.ABSORB,
        description="How to treat an unreadable shutdown event log",
    )
    max_parallel_targets: int = Field(
        default=1,
        description="Targets resolved concurrently (1 = sequential)",
        ge=1,
        le=20,
    )
    connection: ConnectionSettings = Field(default_factory=ConnectionSettings)
    os_credentials_ref: Optional[str] = Field(
        None,
        description="Default OS credentials file reference",
    )

    @field_validator("event_log_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Accept policy names case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower()
        return v
