"""
Dependency injection container for the application.

Creates the configuration repository, the WinRM collectors and the
boot status resolver from one configuration directory.
"""

import logging
from pathlib import Path
from typing import Optional

from autobootaudit.application.boot_status import BootStatusResolver
from autobootaudit.domain.config import BootAuditConfig, BootTargets, Credential, EventLogPolicy
from autobootaudit.infrastructure.collectors import WinRmOsTimingQuery, WinRmShutdownEventQuery
from autobootaudit.infrastructure.config import ConfigRepository

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container.

    Manages the creation and lifecycle of application services and infrastructure components.
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        event_log_policy: Optional[EventLogPolicy] = None,
        max_parallel_targets: Optional[int] = None,
    ):
        """
        Initialize the container.

        Args:
            config_dir: Base directory for configuration files
            event_log_policy: Overrides the configured event-log policy
            max_parallel_targets: Overrides the configured parallelism
        """
        self.config_dir = config_dir or Path.cwd() / "config"
        self._event_log_policy = event_log_policy
        self._max_parallel_targets = max_parallel_targets

        self._config_repository: Optional[ConfigRepository] = None
        self._audit_config: Optional[BootAuditConfig] = None
        self._resolver: Optional[BootStatusResolver] = None

    @property
    def config_repository(self) -> ConfigRepository:
        """Get the configuration repository."""
        if self._config_repository is None:
            self._config_repository = ConfigRepository(self.config_dir)
        return self._config_repository

    @property
    def audit_config(self) -> BootAuditConfig:
        """Get the boot audit configuration with CLI overrides applied."""
        if self._audit_config is None:
            config = self.config_repository.load_audit_config()
            overrides = {}
            if self._event_log_policy is not None:
                overrides["event_log_policy"] = self._event_log_policy
            if self._max_parallel_targets is not None:
                overrides["max_parallel_targets"] = self._max_parallel_targets
            if overrides:
                config = BootAuditConfig.model_validate({**config.model_dump(), **overrides})
            self._audit_config = config
        return self._audit_config

    @property
    def resolver(self) -> BootStatusResolver:
        """Get the boot status resolver."""
        if self._resolver is None:
            config = self.audit_config
            self._resolver = BootStatusResolver(
                timing_query=WinRmOsTimingQuery(config.connection),
                event_query=WinRmShutdownEventQuery(config.connection),
                event_log_policy=config.event_log_policy,
                max_parallel_targets=config.max_parallel_targets,
            )
            logger.debug("Resolver ready (policy=%s, parallel=%d)",
                         config.event_log_policy.value, config.max_parallel_targets)
        return self._resolver

    def load_enabled_targets(self, tag: Optional[str] = None) -> BootTargets:
        """Enabled targets from the targets file, optionally filtered by tag."""
        targets = [t for t in self.config_repository.load_targets() if t.enabled]
        if tag:
            targets = [t for t in targets if tag in t.tags]
        return targets

    def load_default_credential(self) -> Optional[Credential]:
        """Credential referenced by the boot audit config, if any."""
        ref = self.audit_config.os_credentials_ref
        if not ref:
            return None
        return self.config_repository.load_credential(ref)
