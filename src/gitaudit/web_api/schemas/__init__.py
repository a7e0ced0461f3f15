"""
Pydantic Schemas
===============
Request and response models for the API.
"""
from .audit import AuditRequest, AuditResponse, AuditSummary

__all__ = ["AuditRequest", "AuditResponse", "AuditSummary"]
