"""
GitAudit Web API
================
FastAPI-based REST API around the audit engine.

Quick Start:
    uvicorn gitaudit.web_api.main:app --reload
"""
from .main import app

__all__ = ["app"]
