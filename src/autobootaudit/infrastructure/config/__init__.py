"""
Configuration infrastructure package.
"""

from autobootaudit.infrastructure.config.repository import ConfigError, ConfigRepository

__all__ = ["ConfigError", "ConfigRepository"]
