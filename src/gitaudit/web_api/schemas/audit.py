"""
Audit Schemas
=============
Request and response models for the audit endpoint.
"""
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuditRequest(BaseModel):
    """Request to audit a repository"""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "target": "octocat/Hello-World",
                "minSeverity": "warning",
                "category": "security",
            }
        },
    )

    target: str = Field(..., min_length=1, description="Local path, owner/repo or GitHub URL")
    min_severity: Optional[Literal["info", "warning", "critical"]] = Field(
        default=None, alias="minSeverity"
    )
    category: Optional[
        Literal["security", "performance", "quality", "dead_code", "unused"]
    ] = Field(default=None)


class AuditSummary(BaseModel):
    """Headline numbers of an audit"""

    files_analyzed: int = Field(default=0)
    lines_analyzed: int = Field(default=0)
    issues_found: int = Field(default=0)
    critical_issues: int = Field(default=0)
    overall_score: int = Field(default=100)
    text: str = Field(default="")


class AuditResponse(BaseModel):
    """Response from an audit"""

    status: str = Field(..., description="Audit status")
    summary: AuditSummary
    report: Dict[str, Any] = Field(default_factory=dict)
