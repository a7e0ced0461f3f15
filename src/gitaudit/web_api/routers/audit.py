"""
Audit Router
============
Run an audit against a local path or a GitHub repository.
"""
from pathlib import Path

from fastapi import APIRouter, HTTPException

from gitaudit import api as core_api
from gitaudit.errors import (
    GitHubError,
    RateLimitError,
    RepositoryUnreachableError,
    TargetNotFoundError,
)
from gitaudit.reports.filters import filter_report
from gitaudit.web_api.config import settings
from gitaudit.web_api.schemas.audit import AuditRequest, AuditResponse, AuditSummary

router = APIRouter()


@router.post("", response_model=AuditResponse)
def run_audit(request: AuditRequest):
    """
    Audit a repository.

    - **target**: local path, `owner/repo` or a github.com URL
    - **minSeverity**: optional minimum severity of returned issues
    - **category**: optional category of returned issues
    """
    if not settings.ALLOW_LOCAL_TARGETS and Path(request.target).exists():
        raise HTTPException(status_code=403, detail="Local targets are disabled")

    try:
        report, _ = core_api.audit_target(
            request.target, deterministic=settings.DETERMINISTIC
        )
    except TargetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RateLimitError as e:
        raise HTTPException(status_code=429, detail=str(e))
    except (RepositoryUnreachableError, GitHubError) as e:
        raise HTTPException(status_code=502, detail=str(e))

    shown = filter_report(
        report, min_severity=request.min_severity, category=request.category
    )
    return AuditResponse(
        status="complete",
        summary=AuditSummary(
            files_analyzed=report.statistics.analyzed_files,
            lines_analyzed=report.statistics.analyzed_lines,
            issues_found=report.counts.total,
            critical_issues=report.counts.critical,
            overall_score=report.scores.overall,
            text=report.summary,
        ),
        report=shown.to_dict(),
    )
