"""
Configuration domain models package.

This package contains all domain models for the configuration system.
"""

from .boot_audit_config import BootAuditConfig, ConnectionSettings
from .boot_target import BootTarget
from .credential import Credential
from .enums import AuthMethod, EventLogPolicy, Transport

__all__ = [
    "AuthMethod",
    "BootAuditConfig",
    "BootTarget",
    "ConnectionSettings",
    "Credential",
    "EventLogPolicy",
    "Transport",
]
