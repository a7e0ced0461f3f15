"""Timestamps for reports, with a fixed value for reproducible output.

With ``--deterministic`` the report timestamp is pinned so that two runs
over the same tree produce byte-identical JSON.
"""

from __future__ import annotations

from datetime import datetime, timezone

# Fixed timestamp for deterministic mode (ISO 8601 with timezone)
FIXED_TIMESTAMP = "2000-01-01T00:00:00+00:00"


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601, second precision."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def report_timestamp(deterministic: bool = False) -> str:
    return FIXED_TIMESTAMP if deterministic else utc_timestamp()
