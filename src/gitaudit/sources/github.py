"""GitHub repository source: tree listing plus batched content fetches.

Only the file tree is fatal: if it cannot be listed the run cannot start.
Every per-file failure is logged and the file is skipped.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterator, Optional
from urllib.parse import quote

import httpx

from gitaudit.core.config import AuditConfig
from gitaudit.errors import GitHubError, RateLimitError, RepositoryUnreachableError
from gitaudit.languages import classify, is_binary_path, should_ignore_dir
from gitaudit.sources import SourceDocument

_logger = logging.getLogger(__name__)

RAW_BASE = "https://raw.githubusercontent.com"

_URL_RE = re.compile(r"github\.com[/:]([^/\s]+)/([^/\s]+?)(?:\.git)?(?:[/#?]|$)")
_SHORT_RE = re.compile(r"^([A-Za-z0-9_.-]+)/([A-Za-z0-9_.-]+)$")


def parse_repo_target(text: str) -> Optional[tuple[str, str]]:
    """Extract ``(owner, repo)`` from a github.com URL or ``owner/repo``."""
    text = text.strip()
    m = _URL_RE.search(text) or _SHORT_RE.match(text)
    if m is None:
        return None
    owner, repo = m.group(1), m.group(2)
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not owner or not repo or owner in {".", ".."} or repo in {".", ".."}:
        return None
    return owner, repo


def _is_rate_limited(response: httpx.Response) -> bool:
    if response.status_code == 429:
        return True
    if response.status_code != 403:
        return False
    if response.headers.get("x-ratelimit-remaining") == "0":
        return True
    return "rate limit" in response.text.lower()


class GitHubSource:
    """Audit the default branch of ``owner/repo`` through the REST API."""

    def __init__(
        self,
        owner: str,
        repo: str,
        config: Optional[AuditConfig] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.config = config or AuditConfig()
        self.skipped = 0
        self._client = client or httpx.Client(
            base_url=self.config.github_api_base,
            timeout=self.config.request_timeout,
            follow_redirects=True,
        )
        self._owns_client = client is None
        self._branch: Optional[str] = None
        self._paths: Optional[list[str]] = None

    @property
    def label(self) -> str:
        return f"{self.owner}/{self.repo}"

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "GitHubSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── HTTP ────────────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github.v3+json"}
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    def _get_json(self, endpoint: str) -> Any:
        try:
            response = self._client.get(endpoint, headers=self._headers())
        except httpx.HTTPError as exc:
            raise GitHubError(f"GitHub request failed: {exc}") from exc
        if _is_rate_limited(response):
            raise RateLimitError(
                "GitHub API rate limit exceeded. Set a GITHUB_TOKEN to raise the limit.",
                status_code=response.status_code,
            )
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = (body.get("message") or "") if isinstance(body, dict) else ""
            raise GitHubError(
                message or f"GitHub API {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise GitHubError(
                f"invalid JSON from {endpoint}", status_code=response.status_code
            ) from exc

    # ── discovery ───────────────────────────────────────────────────

    def default_branch(self) -> str:
        if self._branch is None:
            try:
                data = self._get_json(f"/repos/{self.owner}/{self.repo}")
                branch = data.get("default_branch") if isinstance(data, dict) else None
                self._branch = branch or "main"
            except GitHubError as exc:
                _logger.warning("Cannot read default branch of %s: %s", self.label, exc)
                self._branch = "main"
        return self._branch

    def _auditable(self, entry: dict) -> bool:
        if entry.get("type") != "blob":
            return False
        path = entry.get("path") or ""
        if any(should_ignore_dir(part) for part in path.split("/")[:-1]):
            return False
        if is_binary_path(path) or not classify(path).analyzable:
            return False
        return int(entry.get("size") or 0) <= self.config.max_file_bytes

    def _discover(self) -> list[str]:
        try:
            tree = self._get_json(
                f"/repos/{self.owner}/{self.repo}/git/trees/HEAD?recursive=1"
            )
        except RateLimitError:
            raise
        except GitHubError as exc:
            raise RepositoryUnreachableError(
                f"Cannot list {self.label}: {exc}", status_code=exc.status_code
            ) from exc
        if not isinstance(tree, dict):
            raise RepositoryUnreachableError(
                f"Cannot list {self.label}: unexpected tree payload"
            )
        if tree.get("truncated"):
            _logger.warning("Tree of %s is truncated by the API", self.label)

        paths: list[str] = []
        for entry in tree.get("tree") or ():
            if self._auditable(entry):
                paths.append(entry["path"])
            elif entry.get("type") == "blob":
                self.skipped += 1
        if len(paths) > self.config.max_files_warn:
            _logger.warning(
                "%s holds %d auditable files; this may take a while",
                self.label,
                len(paths),
            )
        return paths

    def _paths_list(self) -> list[str]:
        if self._paths is None:
            self._paths = self._discover()
        return self._paths

    def total_files(self) -> int:
        return len(self._paths_list())

    # ── content ─────────────────────────────────────────────────────

    def fetch_file(self, path: str) -> str:
        """Fetch one file, falling back to the raw host for large blobs."""
        ref = self.default_branch()
        endpoint = f"/repos/{self.owner}/{self.repo}/contents/{quote(path)}?ref={ref}"
        try:
            data = self._get_json(endpoint)
            if not isinstance(data, dict):
                raise GitHubError(f"unexpected contents payload for {path}")
            if data.get("encoding") == "base64" and data.get("content"):
                return base64.b64decode(data["content"]).decode("utf-8")
            if data.get("content"):
                return data["content"]
        except RateLimitError:
            raise
        except (GitHubError, binascii.Error, UnicodeDecodeError) as exc:
            _logger.debug("Contents API failed for %s: %s", path, exc)

        raw_url = f"{RAW_BASE}/{self.owner}/{self.repo}/{ref}/{quote(path)}"
        try:
            response = self._client.get(raw_url, headers=self._headers())
        except httpx.HTTPError as exc:
            raise GitHubError(f"Cannot fetch {path}: {exc}") from exc
        if response.is_error:
            raise GitHubError(
                f"Cannot fetch {path}: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response.text

    def _fetch_or_none(self, path: str) -> Optional[str]:
        try:
            return self.fetch_file(path)
        except GitHubError as exc:
            _logger.warning("Skipping %s: %s", path, exc)
            return None

    def iter_documents(self) -> Iterator[SourceDocument]:
        """Fetch files in windows of ``batch_size``; yield them in tree order."""
        paths = self._paths_list()
        self.default_branch()
        size = self.config.batch_size
        with ThreadPoolExecutor(max_workers=size) as pool:
            for start in range(0, len(paths), size):
                window = paths[start : start + size]
                for path, content in zip(window, pool.map(self._fetch_or_none, window)):
                    if content is None:
                        self.skipped += 1
                        continue
                    yield SourceDocument(path, content)
