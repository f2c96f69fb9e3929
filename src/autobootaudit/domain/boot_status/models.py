"""
Boot status domain models.

This module defines the facts collected from a target computer, the shutdown
events read from its System log, and the normalized record derived from both.
"""

from datetime import datetime, timedelta
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .duration import format_duration

# Returned as the last shutdown time when no shutdown event is available
UNKNOWN_SHUTDOWN_TIME = datetime(1900, 1, 1, 0, 0, 0)


class ShutdownEventId(IntEnum):
    """System log event IDs that mark the end of the previous session."""

    KERNEL_POWER = 41
    UNEXPECTED_SHUTDOWN = 6008
    USER_INITIATED = 1074


SHUTDOWN_EVENT_IDS: tuple[int, ...] = tuple(int(e) for e in ShutdownEventId)


class ShutdownType(Enum):
    """How the previous session ended."""

    NORMAL = "Normal"
    UNEXPECTED = "Unexpected"
    UNKNOWN = "Unknown"


class OsTimingFacts(BaseModel):
    """
    Operating system timing facts for one target.

    Timestamps are the target's local wall clock.
    """

    model_config = ConfigDict(frozen=True)

    reported_name: str = Field(..., description="Host name reported by the target")
    last_boot_up_time: datetime = Field(..., description="When the OS last started")
    local_date_time: datetime = Field(..., description="Target clock at query time")
    install_date: datetime = Field(..., description="OS install date")

    @field_validator("reported_name")
    @classmethod
    def validate_reported_name(cls, v: str) -> str:
        """Reported name cannot be blank."""
        if not v or not v.strip():
            raise ValueError("Reported name cannot be empty")
        return v.strip()


class ShutdownLogEvent(BaseModel):
    """A single shutdown-related event from the System log."""

    model_config = ConfigDict(frozen=True)

    event_id: int = Field(..., ge=0, description="Event log identifier")
    time_created: datetime = Field(..., description="When the event was written")


class BootStatusRecord(BaseModel):
    """
    Normalized boot status for one target.

    Downtime is only measured after a normal (operator initiated) shutdown;
    for every other outcome it stays zero.
    """

    model_config = ConfigDict(frozen=True)

    computer_name: str
    last_shutdown_time: datetime
    last_shutdown_type: ShutdownType
    downtime: timedelta
    last_boot_up_time: datetime
    uptime: timedelta
    install_date: datetime
    downtime_days: str
    uptime_days: str

    @field_validator("computer_name")
    @classmethod
    def validate_computer_name(cls, v: str) -> str:
        """Computer name cannot be blank."""
        if not v or not v.strip():
            raise ValueError("Computer name cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def check_consistency(self) -> "BootStatusRecord":
        """Downtime and formatted durations must agree with the shutdown type."""
        if self.last_shutdown_type is not ShutdownType.NORMAL and self.downtime != timedelta(0):
            raise ValueError(
                f"Downtime must be zero for a {self.last_shutdown_type.value} shutdown"
            )
        if self.downtime_days != format_duration(self.downtime):
            raise ValueError("downtime_days does not match downtime")
        if self.uptime_days != format_duration(self.uptime):
            raise ValueError("uptime_days does not match uptime")
        return self
