"""
AutoBootAudit - Boot and uptime diagnostics for Windows computers.

Queries remote Windows computers over PowerShell remoting for last boot
time, uptime, last shutdown time and type, install date and downtime.

Usage:
    # CLI
    autobootaudit status HOST1 HOST2

    # Programmatic
    from autobootaudit.application.container import Container

    resolver = Container().resolver
    outcomes = resolver.resolve_many(["HOST1", "HOST2"])
"""

__version__ = "0.1.0"
__author__ = "AutoBootAudit Team"

__all__ = ["__version__"]
