"""Shared fixtures: the bundled catalog and a one-file analysis helper."""

from __future__ import annotations

import pytest

from gitaudit.core.state import AuditState, analyze_source
from gitaudit.rules import load_catalog


@pytest.fixture(scope="session")
def catalog():
    return load_catalog()


@pytest.fixture
def analyze(catalog):
    """Analyze one file and return its issues."""

    def _analyze(path: str, content: str):
        return analyze_source(AuditState.initial(), path, content, catalog=catalog).issues

    return _analyze


@pytest.fixture
def titles(analyze):
    """Analyze one file and return its issue titles."""

    def _titles(path: str, content: str):
        return [issue.title for issue in analyze(path, content)]

    return _titles


@pytest.fixture
def rule_ids(analyze):
    """Analyze one file and return its issue rule ids."""

    def _rule_ids(path: str, content: str):
        return [issue.rule_id for issue in analyze(path, content)]

    return _rule_ids
