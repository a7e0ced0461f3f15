"""Engine façade: the stateful API collaborators drive one file at a time.

Internally every call folds into an immutable ``AuditState``; the engine
only holds the current value.  One engine instance belongs to one run at a
time; use separate instances for concurrent runs.
"""

from __future__ import annotations

import logging
from typing import Optional

from gitaudit.core.state import AuditState, analyze_source
from gitaudit.insights.scoring import compute_scores
from gitaudit.model.report import Report
from gitaudit.reports.assembler import assemble_report
from gitaudit.rules.catalog import RuleCatalog, load_catalog
from gitaudit.utils.determinism import utc_timestamp

_logger = logging.getLogger(__name__)


class AuditEngine:
    """Classify, apply rules, deduplicate and score files for one run."""

    def __init__(
        self,
        *,
        catalog: Optional[RuleCatalog] = None,
        rule_budget_seconds: float = 0.0,
    ) -> None:
        self._catalog = catalog or load_catalog()
        self._budget = rule_budget_seconds
        self._state = AuditState.initial()

    @property
    def state(self) -> AuditState:
        return self._state

    @property
    def catalog(self) -> RuleCatalog:
        return self._catalog

    def reset(self) -> None:
        """Discard every issue, file record and counter."""
        self._state = AuditState.initial()

    def declare_total_files(self, total_files: int) -> None:
        self._state = self._state.with_total_files(total_files)

    def analyze_file(self, relative_path: str, content: str) -> None:
        """Analyze one file.  Unclassified paths are ignored and not counted."""
        self._state = analyze_source(
            self._state,
            relative_path,
            content,
            catalog=self._catalog,
            budget_seconds=self._budget,
        )

    def generate_report(self, label: str, *, timestamp: Optional[str] = None) -> Report:
        """Score the current issues and assemble the report.

        Calling it again without further ``analyze_file`` calls returns an
        equal report (given the same *timestamp*).
        """
        scores = compute_scores(self._state.issues)
        _logger.debug(
            "Report for %s: %d issue(s), overall %d",
            label,
            len(self._state.issues),
            scores.overall,
        )
        return assemble_report(
            self._state, label, scores, timestamp=timestamp or utc_timestamp()
        )
