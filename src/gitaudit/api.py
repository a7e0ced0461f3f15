"""
gitaudit.api
============

Programmatic entrypoints for using gitaudit as a library.

Goals:
  - No argparse / CLI dependencies
  - Deterministic mode support (fixed timestamp)
  - Stable, JSON-friendly outputs that match ``report.schema.json``

Usage::

    from gitaudit.api import audit_target

    report, report_dict = audit_target(".", deterministic=True)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from gitaudit.core.config import AuditConfig, load_config
from gitaudit.core.runner import run_audit
from gitaudit.errors import TargetNotFoundError
from gitaudit.model.report import Report
from gitaudit.sources.github import GitHubSource, parse_repo_target
from gitaudit.sources.local import LocalSource
from gitaudit.sources.memory import Documents, MemorySource
from gitaudit.utils.determinism import report_timestamp

_logger = logging.getLogger(__name__)


def audit_target(
    target: str | Path,
    *,
    config: Optional[AuditConfig] = None,
    deterministic: bool = False,
) -> tuple[Report, dict[str, Any]]:
    """Audit a local directory or a GitHub repository.

    An existing local path always wins over a repository reference, so
    ``src/app`` is audited locally when it exists.

    Returns
    -------
    ``(Report, report_dict)``

    Raises
    ------
    TargetNotFoundError
        *target* is neither an existing path nor ``owner/repo`` / a
        github.com URL.
    RepositoryUnreachableError
        The repository tree could not be listed.
    """
    text = str(target)
    path = Path(text).expanduser()
    timestamp = report_timestamp(deterministic)

    if path.exists():
        if config is None:
            config = load_config(root=path if path.is_dir() else path.parent)
        report = run_audit(LocalSource(path, config), config=config, timestamp=timestamp)
        return report, report.to_dict()

    repo = parse_repo_target(text)
    if repo is None:
        raise TargetNotFoundError(text)
    if config is None:
        config = load_config()
    with GitHubSource(*repo, config) as source:
        report = run_audit(source, config=config, timestamp=timestamp)
    return report, report.to_dict()


def audit_sources(
    label: str,
    documents: Documents,
    *,
    config: Optional[AuditConfig] = None,
    deterministic: bool = False,
) -> tuple[Report, dict[str, Any]]:
    """Audit in-memory ``{relative_path: content}`` documents."""
    report = run_audit(
        MemorySource(label, documents),
        config=config or AuditConfig(),
        timestamp=report_timestamp(deterministic),
    )
    return report, report.to_dict()
