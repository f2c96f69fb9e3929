"""
PowerShell scripts run on target computers.

Each script writes a single compressed JSON object to stdout with a
``success`` flag. Timestamps are rendered in the target's local time
with the invariant culture so they parse the same on every host.
"""

from __future__ import annotations

from typing import Iterable

_PRELUDE = r"""
$ErrorActionPreference = 'Stop'
$inv = [System.Globalization.CultureInfo]::InvariantCulture
$fmt = 'yyyy-MM-ddTHH:mm:ss.fff'
"""

OS_TIMING_SCRIPT = _PRELUDE + r"""
try {
    $os = Get-CimInstance -ClassName Win32_OperatingSystem
    [pscustomobject]@{
        success           = $true
        reported_name     = $os.CSName
        last_boot_up_time = $os.LastBootUpTime.ToString($fmt, $inv)
        local_date_time   = $os.LocalDateTime.ToString($fmt, $inv)
        install_date      = $os.InstallDate.ToString($fmt, $inv)
    } | ConvertTo-Json -Compress
} catch {
    [pscustomobject]@{ success = $false; error = $_.Exception.Message } | ConvertTo-Json -Compress
}
"""

_SHUTDOWN_EVENTS_TEMPLATE = _PRELUDE + r"""
$eventIds = @({event_ids})
$maxPerId = {max_per_id}
try {{
    $events = @()
    foreach ($id in $eventIds) {{
        try {{
            $found = Get-WinEvent -FilterHashtable @{{ LogName = 'System'; Id = $id }} -MaxEvents $maxPerId
        }} catch {{
            if ($_.FullyQualifiedErrorId -like 'NoMatchingEventsFound*') {{ continue }}
            throw
        }}
        foreach ($e in @($found)) {{
            $events += [pscustomobject]@{{
                event_id     = $e.Id
                time_created = $e.TimeCreated.ToString($fmt, $inv)
            }}
        }}
    }}
    [pscustomobject]@{{ success = $true; events = @($events) }} | ConvertTo-Json -Compress -Depth 3
}} catch {{
    [pscustomobject]@{{ success = $false; error = $_.Exception.Message }} | ConvertTo-Json -Compress
}}
"""


def build_shutdown_events_script(event_ids: Iterable[int], max_per_id: int) -> str:
    """
    Render the System log query for the given event IDs.

    Args:
        event_ids: Event identifiers to look up
        max_per_id: Most recent matches kept per identifier

    Raises:
        ValueError: If no IDs are given or max_per_id is not positive
    """
    ids = [int(event_id) for event_id in event_ids]
    if not ids:
        raise ValueError("At least one event ID is required")
    if max_per_id < 1:
        raise ValueError("max_per_id must be at least 1")

    return _SHUTDOWN_EVENTS_TEMPLATE.format(
        event_ids=", ".join(str(event_id) for event_id in ids),
        max_per_id=int(max_per_id),
    )
