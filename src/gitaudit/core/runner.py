"""Runner: drives a file source through the engine and builds the report."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from gitaudit.contracts.load import validate_instance
from gitaudit.core.config import AuditConfig
from gitaudit.core.engine import AuditEngine
from gitaudit.model.report import Report
from gitaudit.sources import FileSource
from gitaudit.utils.json_norm import stable_json_dumps

_logger = logging.getLogger(__name__)


def run_audit(
    source: FileSource,
    *,
    config: Optional[AuditConfig] = None,
    engine: Optional[AuditEngine] = None,
    timestamp: Optional[str] = None,
) -> Report:
    """Analyze every document of *source* and return the validated report.

    Files are analyzed one at a time.  A file whose analysis raises is
    logged and skipped; the run itself never aborts on a single file.
    """
    config = config or AuditConfig()
    if engine is None:
        engine = AuditEngine(rule_budget_seconds=config.rule_budget_seconds)
    else:
        engine.reset()

    # ── 1. discovery ────────────────────────────────────────────────
    total = source.total_files()
    engine.declare_total_files(total)
    _logger.info("Auditing %s: %d file(s)", source.label, total)

    # ── 2. per-file analysis ────────────────────────────────────────
    for document in source.iter_documents():
        try:
            engine.analyze_file(document.relative_path, document.content)
        except Exception:
            _logger.exception("Analysis of %s failed; skipped", document.relative_path)

    # ── 3. assemble and validate ────────────────────────────────────
    report = engine.generate_report(source.label, timestamp=timestamp)
    validate_instance(report.to_dict(), "report.schema.json")
    return report


def write_report(report: Report, path: Path) -> Path:
    """Write *report* as canonical JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(stable_json_dumps(report.to_dict()), encoding="utf-8")
    return path
