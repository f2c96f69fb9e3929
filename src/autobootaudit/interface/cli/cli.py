"""
CLI main entry point.
"""


def main() -> int:
    """
    Main entry point for AutoBootAudit CLI.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    from .orchestrator import app

    try:
        app()
    except SystemExit as e:
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1
    return 0
