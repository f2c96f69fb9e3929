"""
Infrastructure layer package.

Remote execution, configuration files and logging.
"""

from autobootaudit.infrastructure.logging_config import setup_logging
from autobootaudit.infrastructure.results import Failure, Result, Success

__all__ = ["Failure", "Result", "Success", "setup_logging"]
