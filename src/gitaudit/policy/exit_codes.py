"""Exit-code policy — worst reported severity → process exit code.

Philosophy:
  - Computed over the issues actually reported (after filtering)
  - Stable mapping: only ``critical`` fails the run
  - No hidden magic inside CLI glue
"""

from __future__ import annotations

from typing import Iterable, Optional

from gitaudit.model import Severity
from gitaudit.model.issue import Issue
from gitaudit.utils.exit_codes import ExitCode


def worst_severity(issues: Iterable[Issue]) -> Optional[Severity]:
    """Highest severity present, or ``None`` for an empty issue set."""
    worst: Optional[Severity] = None
    for issue in issues:
        if worst is None or issue.severity.rank > worst.rank:
            worst = issue.severity
    return worst


def exit_code_for_issues(issues: Iterable[Issue]) -> ExitCode:
    """``VIOLATION`` if any issue is critical, else ``SUCCESS``."""
    if worst_severity(issues) is Severity.CRITICAL:
        return ExitCode.VIOLATION
    return ExitCode.SUCCESS
