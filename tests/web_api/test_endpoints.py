"""
Web API Endpoint Tests
======================
Integration tests for the health and audit endpoints.

Usage:
    pip install gitaudit[api]
    pytest tests/web_api/test_endpoints.py -v
"""
import pytest


# Skip entire module if FastAPI not installed
pytest.importorskip("fastapi")


from fastapi.testclient import TestClient
from gitaudit.web_api.config import settings
from gitaudit.web_api.main import app

SECRET_JS = 'const apiKey = "sk-' + "a" * 46 + '";\n'


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def repo(tmp_path):
    """A small tree with one critical and some lesser issues."""
    (tmp_path / "app.js").write_text(SECRET_JS, encoding="utf-8")
    (tmp_path / "loop.py").write_text(
        "for i in range(len(items)):\n    print(items[i])\n", encoding="utf-8"
    )
    return tmp_path


# ============================================================================
# HEALTH ENDPOINTS
# ============================================================================

class TestHealthEndpoint:
    """Tests for GET /health and GET /ready"""

    def test_health_returns_ok_status(self, client):
        """Health endpoint returns status: ok."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_health_includes_version(self, client):
        """Health endpoint includes version field."""
        from gitaudit import __version__

        assert client.get("/health").json()["version"] == __version__

    def test_ready_reports_rule_count(self, client):
        data = client.get("/ready").json()
        assert data["status"] == "ready"
        assert data["rules"] > 0

    def test_root(self, client):
        assert client.get("/").json()["name"] == "GitAudit API"


# ============================================================================
# AUDIT ENDPOINT
# ============================================================================

class TestAuditEndpoint:
    """Tests for POST /audit"""

    def test_audit_returns_complete_status(self, client, repo):
        response = client.post("/audit", json={"target": str(repo)})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "complete"
        assert data["summary"]["files_analyzed"] == 2
        assert data["summary"]["critical_issues"] == 1
        assert data["report"]["repository"] == repo.name

    def test_min_severity_filters_issues_only(self, client, repo):
        data = client.post(
            "/audit", json={"target": str(repo), "minSeverity": "critical"}
        ).json()
        issues = data["report"]["issues"]
        assert [i["severity"] for i in issues] == ["critical"]
        assert data["summary"]["issues_found"] == data["report"]["statistics"]["totalIssues"]
        assert data["summary"]["issues_found"] > 1

    def test_unused_category_alias(self, client, tmp_path):
        (tmp_path / "m.py").write_text("import os\n", encoding="utf-8")
        data = client.post(
            "/audit", json={"target": str(tmp_path), "category": "unused"}
        ).json()
        assert {i["category"] for i in data["report"]["issues"]} == {"dead_code"}

    def test_invalid_path_returns_404(self, client, tmp_path):
        response = client.post("/audit", json={"target": str(tmp_path / "missing")})
        assert response.status_code == 404

    def test_invalid_min_severity_returns_422(self, client, repo):
        response = client.post(
            "/audit", json={"target": str(repo), "minSeverity": "urgent"}
        )
        assert response.status_code == 422

    def test_empty_target_returns_422(self, client):
        assert client.post("/audit", json={"target": ""}).status_code == 422

    def test_local_targets_can_be_disabled(self, client, repo, monkeypatch):
        monkeypatch.setattr(settings, "ALLOW_LOCAL_TARGETS", False)
        response = client.post("/audit", json={"target": str(repo)})
        assert response.status_code == 403
