"""
Target Parser micro-component.
Normalizes target identifiers (host names or addresses).
"""

from __future__ import annotations

from dataclasses import dataclass

from autobootaudit.infrastructure.results import Result, Success, Failure

LOCALHOST_ALIASES = frozenset({"localhost", "127.0.0.1", "::1", ".", "(local)"})


@dataclass(frozen=True)
class ParsedTarget:
    """Parsed target information."""
    hostname: str


@dataclass(frozen=True)
class TargetParser:
    """
    Parses target identifiers.
    Railway-oriented: returns Success with parsed target or Failure.
    """

    def parse_target_id(self, target_id: str) -> Result[ParsedTarget, str]:
        """
        Parse a target identifier into a host name.

        Accepts a bare host name, FQDN, IPv4 or IPv6 address. Surrounding
        whitespace is stripped; embedded whitespace and path separators
        are rejected.
        """
        if not target_id or not target_id.strip():
            return Failure("Empty or invalid target ID")

        hostname = target_id.strip()

        if any(ch.isspace() for ch in hostname):
            return Failure(f"Invalid target format: {target_id!r}")

        if "/" in hostname or "\\" in hostname:
            return Failure(f"Invalid target format: {target_id!r}")

        return Success(ParsedTarget(hostname=hostname))
