"""
Boot target domain model.

This module defines the BootTarget domain entity representing
a Windows computer whose boot status can be queried.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BootTarget(BaseModel):
    """
    Domain model for a target computer.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(..., description="Human-readable display name")
    server: str = Field(..., description="Host name or IP address")
    enabled: bool = Field(True, description="Whether this target is queried")
    tags: List[str] = Field(default_factory=list, description="Tags for filtering/grouping")
    os_credentials_ref: Optional[str] = Field(
        None,
        description="Reference to OS credentials file",
        alias="os_credential_file",
    )

    @field_validator("server")
    @classmethod
    def validate_server(cls, v: str) -> str:
        """Validate server name format."""
        if not v or not v.strip():
            raise ValueError("Server name cannot be empty")
        return v.strip()
