"""
CLI command functions.
"""

from .config import config_app
from .status import boot_status

__all__ = ["boot_status", "config_app"]
