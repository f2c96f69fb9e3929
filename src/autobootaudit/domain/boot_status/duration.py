"""
Duration formatting for boot status records.
"""

from datetime import timedelta


def format_duration(value: timedelta) -> str:
    """
    Render a duration as ``days.hours:minutes:seconds``.

    Each component is zero padded to two digits (days widen past 99).
    Fractional seconds are truncated. Negative durations keep a leading
    ``-`` in front of the formatted absolute value.

    Args:
        value: Duration to render

    Returns:
        Formatted string, e.g. ``01.02:03:04``
    """
    sign = "-" if value < timedelta(0) else ""
    total_seconds = int(abs(value).total_seconds())

    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    return f"{sign}{days:02d}.{hours:02d}:{minutes:02d}:{seconds:02d}"
