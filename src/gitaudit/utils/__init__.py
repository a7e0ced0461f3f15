"""Shared utilities for gitaudit."""

from gitaudit.utils.determinism import FIXED_TIMESTAMP, report_timestamp, utc_timestamp
from gitaudit.utils.exit_codes import ExitCode
from gitaudit.utils.json_norm import stable_json_dump, stable_json_dumps

__all__ = [
    "FIXED_TIMESTAMP",
    "ExitCode",
    "report_timestamp",
    "stable_json_dump",
    "stable_json_dumps",
    "utc_timestamp",
]
