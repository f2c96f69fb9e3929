"""
Domain Targets Package.
Target identifier parsing components.
"""

from autobootaudit.domain.targets.parser import LOCALHOST_ALIASES, ParsedTarget, TargetParser

__all__ = ["LOCALHOST_ALIASES", "ParsedTarget", "TargetParser"]
