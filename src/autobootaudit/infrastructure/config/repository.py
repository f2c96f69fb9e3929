"""
Configuration repository for loading config files.

This module provides the infrastructure layer for configuration persistence.
It handles file I/O operations and converts raw JSON into domain models.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from autobootaudit.domain.config import BootAuditConfig, BootTarget, BootTargets, Credential

logger = logging.getLogger(__name__)

AUDIT_CONFIG_FILE = "boot_audit"
TARGETS_FILE = "targets"

# Whole-line // comments only; string contents are left alone
_LINE_COMMENT = re.compile(r"^\s*//.*$", re.MULTILINE)


class ConfigError(ValueError):
    """Raised when a configuration file is missing, unreadable or invalid."""


def _strip_comments(jsonc_content: str) -> str:
    """Strip whole-line comments from JSONC content."""
    return _LINE_COMMENT.sub("", jsonc_content)


class ConfigRepository:
    """
    Repository for configuration file operations.

    Handles loading of configuration files with support for
    JSON and JSONC formats.
    """

    def __init__(self, config_dir: Path):
        """
        Initialize the config repository.

        Args:
            config_dir: Base directory for configuration files
        """
        self.config_dir = Path(config_dir)

    def find_config_file(self, filename: str) -> Path | None:
        """Return the .json or .jsonc file for ``filename`` if one exists."""
        for ext in (".json", ".jsonc"):
            path = self.config_dir / f"{filename}{ext}"
            if path.exists():
                return path
        return None

    def load_json_file(self, filename: str) -> Any:
        """
        Load a JSON or JSONC file.

        Args:
            filename: Name of the file to load (without extension)

        Returns:
            Parsed JSON data

        Raises:
            ConfigError: If the file doesn't exist or cannot be parsed
        """
        path = self.find_config_file(filename)
        if path is None:
            raise ConfigError(
                f"Config file '{filename}.json' or '{filename}.jsonc' not found in {self.config_dir}"
            )

        content = path.read_text(encoding="utf-8")
        if path.suffix == ".jsonc":
            content = _strip_comments(content)

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse config file %s: %s", path, e)
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    def load_audit_config(self) -> BootAuditConfig:
        """
        Load boot audit configuration.

        A missing file yields the default configuration.

        Raises:
            ConfigError: If config cannot be parsed or validated
        """
        if self.find_config_file(AUDIT_CONFIG_FILE) is None:
            logger.debug("No %s config in %s, using defaults", AUDIT_CONFIG_FILE, self.config_dir)
            return BootAuditConfig()

        data = self.load_json_file(AUDIT_CONFIG_FILE)
        try:
            return BootAuditConfig.model_validate(data)
        except ValidationError as e:
            logger.error("Failed to load boot audit config: %s", e)
            raise ConfigError(f"Invalid boot audit configuration: {e}") from e

    def load_targets(self) -> BootTargets:
        """
        Load targets configuration.

        Accepts either a bare array or an object with a ``targets`` array.

        Raises:
            ConfigError: If config cannot be loaded or validated
        """
        data = self.load_json_file(TARGETS_FILE)
        targets_data = data.get("targets") if isinstance(data, dict) else data

        if not isinstance(targets_data, list):
            raise ConfigError("targets must contain a 'targets' array or be an array")

        targets = []
        for i, target_data in enumerate(targets_data):
            try:
                targets.append(BootTarget.model_validate(target_data))
            except ValidationError as e:
                logger.error("Invalid target at index %d: %s", i, e)
                raise ConfigError(f"Invalid target at index {i}: {e}") from e

        return targets

    def load_credential(self, cred_ref: str) -> Credential:
        """
        Load a credential file from ``<config_dir>/credentials/<ref>.json``.

        Raises:
            ConfigError: If credential cannot be loaded or validated
        """
        name = cred_ref.replace("credentials/", "").removesuffix(".json")
        path = self.config_dir / "credentials" / f"{name}.json"

        if not path.exists():
            raise ConfigError(f"Credential file '{cred_ref}' not found at {path}")

        try:
            cred_data: Dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in credential file {path}: {e}") from e

        logger.debug("Loaded credential from %s", path)

        # Support both formats: direct object or wrapped in "credentials"
        if isinstance(cred_data, dict) and "credentials" in cred_data:
            cred_data = cred_data["credentials"]

        try:
            return Credential.model_validate(cred_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid credential '{cred_ref}': {e}") from e
