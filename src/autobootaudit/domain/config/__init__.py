"""
Configuration domain package.

This package contains the domain layer for configuration management.
"""

from typing import List

from .models import (
    AuthMethod,
    BootAuditConfig,
    BootTarget,
    ConnectionSettings,
    Credential,
    EventLogPolicy,
    Transport,
)

BootTargets = List[BootTarget]

__all__ = [
    "AuthMethod",
    "BootAuditConfig",
    "BootTarget",
    "BootTargets",
    "ConnectionSettings",
    "Credential",
    "EventLogPolicy",
    "Transport",
]
