from .boot_status_formatter import BootStatusFormatter

__all__ = ["BootStatusFormatter"]
