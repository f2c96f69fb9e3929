"""
PSRemote Client - Resilient pywinrm Wrapper.

Walks a connection plan of transport and authentication combinations
until one answers, then reuses that session for every script run on
the host. Localhost targets skip WinRM and run powershell.exe directly.

Connection plan:
1. HTTPS (5986) with certificate validation  - Negotiate, Kerberos, NTLM
2. HTTPS (5986) without certificate validation - Negotiate, Kerberos, NTLM, Basic
3. HTTP (5985) - Negotiate, Kerberos, NTLM (never Basic)
"""

from __future__ import annotations

import logging
import os
import socket
import subprocess
import tempfile
import threading
from dataclasses import dataclass, field
from typing import Any

import winrm  # pywinrm

from autobootaudit.domain.config.models import AuthMethod, ConnectionSettings, Transport
from autobootaudit.domain.targets import LOCALHOST_ALIASES

logger = logging.getLogger(__name__)

_SECURE_AUTHS = (AuthMethod.NEGOTIATE, AuthMethod.KERBEROS, AuthMethod.NTLM)


@dataclass
class ConnectionConfig:
    """Configuration for PSRemote connection."""

    hostname: str
    username: str | None = None
    password: str | None = None
    port_http: int = 5985
    port_https: int = 5986
    timeout_seconds: int = 30
    operation_timeout_sec: int = 120
    max_retries_per_combo: int = 1
    verify_ssl: bool = True

    @classmethod
    def from_settings(
        cls,
        hostname: str,
        settings: ConnectionSettings,
        username: str | None = None,
        password: str | None = None,
    ) -> ConnectionConfig:
        """Build a connection config from the configured connection settings."""
        return cls(
            hostname=hostname,
            username=username,
            password=password,
            port_http=settings.port_http,
            port_https=settings.port_https,
            timeout_seconds=settings.timeout_seconds,
            operation_timeout_sec=settings.operation_timeout_sec,
            max_retries_per_combo=settings.max_retries_per_combo,
            verify_ssl=settings.verify_ssl,
        )


@dataclass
class PSRemoteResult:
    """Result from PSRemote operation."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    return_code: int = -1
    transport_used: str = ""
    auth_used: str = ""
    error: str = ""
    attempts: list[dict[str, Any]] = field(default_factory=list)


class PSRemoteClient:
    """
    PSRemote client using pywinrm.

    Tries each combination of the connection plan until one works and
    caches the winning combination per host and user for later clients.
    """

    # Class-level cache of successful connections, shared across worker threads
    _connection_cache: dict[str, tuple[Transport, AuthMethod, bool]] = {}
    _cache_lock = threading.Lock()

    def __init__(self, config: ConnectionConfig) -> None:
        """Initialize with connection config."""
        self.config = config
        self._session: winrm.Session | None = None
        self._working_transport: Transport | None = None
        self._working_auth: AuthMethod | None = None
        self._attempts: list[dict[str, Any]] = []
        self.is_localhost: bool = self._detect_localhost()

    def _detect_localhost(self) -> bool:
        """Detect whether the hostname refers to this machine."""
        hostname = self.config.hostname.lower().strip()

        if hostname in LOCALHOST_ALIASES:
            logger.info("Localhost detected: %s - will use local PowerShell", hostname)
            return True

        try:
            local_name = socket.gethostname().lower()
        except OSError:
            return False

        if hostname in (local_name, local_name.split(".")[0]):
            logger.info("Local machine name detected: %s - will use local PowerShell", hostname)
            return True

        return False

    @property
    def cache_key(self) -> str:
        return f"{self.config.hostname.lower()}:{self.config.username}"

    def connection_plan(self) -> list[tuple[Transport, AuthMethod, bool]]:
        """
        Ordered (transport, auth, verify_ssl) combinations to try.

        Validated HTTPS is skipped when certificate validation is disabled.
        """
        plan: list[tuple[Transport, AuthMethod, bool]] = []
        if self.config.verify_ssl:
            plan.extend((Transport.HTTPS, auth, True) for auth in _SECURE_AUTHS)
        plan.extend((Transport.HTTPS, auth, False) for auth in (*_SECURE_AUTHS, AuthMethod.BASIC))
        plan.extend((Transport.HTTP, auth, False) for auth in _SECURE_AUTHS)
        return plan

    def connect(self) -> bool:
        """
        Establish a session, trying the cached combination first.

        Returns:
            True if a session is established (always True for localhost)
        """
        if self.is_localhost:
            return True

        with self._cache_lock:
            cached = self._connection_cache.get(self.cache_key)
        if cached:
            transport, auth, verify_ssl = cached
            logger.info("Using cached connection for %s: %s + %s",
                        self.config.hostname, transport.value, auth.value)
            if self._try_connect(transport, auth, verify_ssl):
                return True
            self._forget_cached(cached)

        for transport, auth, verify_ssl in self.connection_plan():
            if self._try_connect(transport, auth, verify_ssl):
                with self._cache_lock:
                    self._connection_cache[self.cache_key] = (transport, auth, verify_ssl)
                if transport is Transport.HTTP:
                    logger.warning("Connected to %s over HTTP - message encryption depends on auth",
                                   self.config.hostname)
                elif not verify_ssl:
                    logger.warning("Connected to %s with SSL verification DISABLED",
                                   self.config.hostname)
                return True

        logger.error("All connection attempts failed for %s", self.config.hostname)
        return False

    def _forget_cached(self, stale: tuple[Transport, AuthMethod, bool]) -> None:
        """Drop a cached combination unless another client already replaced it."""
        with self._cache_lock:
            if self._connection_cache.get(self.cache_key) == stale:
                self._connection_cache.pop(self.cache_key, None)

    def _try_connect(self, transport: Transport, auth: AuthMethod, verify_ssl: bool) -> bool:
        """Try a single transport+auth combination."""
        port = self.config.port_https if transport is Transport.HTTPS else self.config.port_http
        endpoint = f"{transport.value}://{self.config.hostname}:{port}/wsman"

        logger.debug("Trying: %s with %s (SSL verify: %s)", endpoint, auth.value, verify_ssl)

        for attempt in range(self.config.max_retries_per_combo):
            try:
                session = winrm.Session(
                    target=endpoint,
                    auth=(self.config.username, self.config.password),
                    transport=auth.value,
                    server_cert_validation="validate" if verify_ssl else "ignore",
                    operation_timeout_sec=self.config.operation_timeout_sec,
                    read_timeout_sec=self.config.operation_timeout_sec + self.config.timeout_seconds,
                )

                probe = session.run_cmd("hostname")
                if probe.status_code == 0:
                    logger.info("Connected to %s: %s + %s",
                                self.config.hostname, transport.value, auth.value)
                    self._session = session
                    self._working_transport = transport
                    self._working_auth = auth
                    return True

                self._record_attempt(transport, auth, verify_ssl, f"probe exit code {probe.status_code}")

            except Exception as e:  # pylint: disable=broad-except
                logger.debug("Attempt %d failed: %s - %s", attempt + 1, type(e).__name__, str(e)[:100])
                self._record_attempt(transport, auth, verify_ssl, f"{type(e).__name__}: {e}")

        return False

    def _record_attempt(self, transport: Transport, auth: AuthMethod, verify_ssl: bool, error: str) -> None:
        self._attempts.append(
            {"transport": transport.value, "auth": auth.value, "ssl": verify_ssl, "error": error}
        )

    def _result(self, **kwargs: Any) -> PSRemoteResult:
        return PSRemoteResult(
            transport_used=self._working_transport.value if self._working_transport else "",
            auth_used=self._working_auth.value if self._working_auth else "",
            attempts=list(self._attempts),
            **kwargs,
        )

    def run_ps(self, script: str) -> PSRemoteResult:
        """
        Execute PowerShell script on the target.

        Args:
            script: PowerShell script content

        Returns:
            PSRemoteResult with output and status
        """
        if self.is_localhost:
            return self._run_local_ps(script)

        if not self._session and not self.connect():
            return self._result(
                success=False,
                error=f"Failed to establish connection to {self.config.hostname}",
            )

        try:
            result = self._session.run_ps(script)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("PowerShell execution failed on %s: %s", self.config.hostname, e)
            return self._result(success=False, error=str(e))

        return self._result(
            success=result.status_code == 0,
            stdout=result.std_out.decode("utf-8", errors="replace"),
            stderr=result.std_err.decode("utf-8", errors="replace"),
            return_code=result.status_code,
        )

    def _run_local_ps(self, script: str) -> PSRemoteResult:
        """
        Execute PowerShell script locally.

        Writes the script to a temp file and runs it with ExecutionPolicy Bypass.
        """
        logger.info("Running PowerShell locally (localhost bypass)")

        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".ps1", delete=False, encoding="utf-8"
        ) as f:
            f.write(script)
            script_path = f.name

        cmd = [
            "powershell.exe",
            "-NoProfile",
            "-NonInteractive",
            "-ExecutionPolicy",
            "Bypass",
            "-File",
            script_path,
        ]

        try:
            logger.debug("Executing: %s", " ".join(cmd))
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.config.operation_timeout_sec,
                check=False,
            )
        except subprocess.TimeoutExpired:
            return PSRemoteResult(
                success=False,
                error=f"Script timed out after {self.config.operation_timeout_sec}s",
                transport_used="local",
                auth_used="local",
            )
        except OSError as e:
            return PSRemoteResult(
                success=False,
                error=f"Cannot start local PowerShell: {e}",
                transport_used="local",
                auth_used="local",
            )
        finally:
            try:
                os.unlink(script_path)
            except OSError:
                logger.debug("Could not remove temp script %s", script_path)

        return PSRemoteResult(
            success=result.returncode == 0,
            stdout=result.stdout,
            stderr=result.stderr,
            return_code=result.returncode,
            transport_used="local",
            auth_used="local",
        )

    def close(self) -> None:
        """Close the session."""
        self._session = None
