"""Centralized exit-code contract for the CLI.

Code  Meaning
----  -------
  0   Success — no critical issue in the reported (filtered) set
  1   Violation — at least one critical issue
  2   Error — target not found, remote unreachable, usage or config error
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
