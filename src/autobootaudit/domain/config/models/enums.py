"""
Domain enums for configuration system.

This module defines all enumeration types used in the configuration domain.
"""

from enum import Enum


class EventLogPolicy(Enum):
    """What to do when the shutdown event log cannot be read."""

    ABSORB = "absorb"  # report the shutdown as Unknown
    PROPAGATE = "propagate"  # fail the target


class AuthMethod(Enum):
    """WinRM authentication methods."""

    NEGOTIATE = "negotiate"
    KERBEROS = "kerberos"
    NTLM = "ntlm"
    BASIC = "basic"


class Transport(Enum):
    """WinRM transport protocols."""

    HTTPS = "https"
    HTTP = "http"
