"""Tests for local directory discovery and reading."""

from __future__ import annotations

import os

import pytest

from gitaudit.core.config import AuditConfig
from gitaudit.sources.local import LocalSource
from gitaudit.sources.memory import MemorySource
from gitaudit.sources import SourceDocument


def _write(root, rel: str, content="x = 1\n") -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def tree(tmp_path):
    _write(tmp_path, "app.py")
    _write(tmp_path, "src/util.js", "export const a = 1;\n")
    _write(tmp_path, "src/deep/main.go", "package main\n")
    _write(tmp_path, "node_modules/lib/index.js", "module.exports = {};\n")
    _write(tmp_path, ".git/config.py")
    _write(tmp_path, "build/out.py")
    _write(tmp_path, "logo.png", b"\x89PNG\r\n")
    _write(tmp_path, "package-lock.json", "{}\n")
    _write(tmp_path, "README", "hello\n")
    return tmp_path


class TestDiscovery:
    def test_walk_order_and_exclusions(self, tree):
        source = LocalSource(tree)
        paths = [d.relative_path for d in source.iter_documents()]
        assert paths == ["app.py", "src/util.js", "src/deep/main.go"]
        assert source.total_files() == 3

    def test_skipped_counts_excluded_files(self, tree):
        source = LocalSource(tree)
        source.total_files()
        # logo.png, package-lock.json and README; ignored dirs are never entered
        assert source.skipped == 3

    def test_content_is_decoded(self, tree):
        docs = {d.relative_path: d.content for d in LocalSource(tree).iter_documents()}
        assert docs["src/util.js"] == "export const a = 1;\n"

    def test_label_is_directory_name(self, tree):
        assert LocalSource(tree).label == tree.name

    def test_size_limit(self, tmp_path):
        _write(tmp_path, "small.py", "x = 1\n")
        _write(tmp_path, "big.py", "x = 1\n" * 100)
        source = LocalSource(tmp_path, AuditConfig(max_file_bytes=50))
        assert [d.relative_path for d in source.iter_documents()] == ["small.py"]

    def test_non_utf8_is_skipped(self, tmp_path):
        _write(tmp_path, "latin.py", "s = 'caf\xe9'\n".encode("latin-1"))
        _write(tmp_path, "ok.py")
        source = LocalSource(tmp_path)
        assert [d.relative_path for d in source.iter_documents()] == ["ok.py"]
        assert source.skipped == 1

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinks_are_not_followed(self, tmp_path):
        _write(tmp_path, "real.py")
        try:
            os.symlink(tmp_path / "real.py", tmp_path / "link.py")
        except OSError:
            pytest.skip("cannot create symlinks here")
        assert [d.relative_path for d in LocalSource(tmp_path).iter_documents()] == ["real.py"]

    def test_single_file_root(self, tmp_path):
        _write(tmp_path, "one.py", "print(1)\n")
        docs = list(LocalSource(tmp_path / "one.py").iter_documents())
        assert docs == [SourceDocument("one.py", "print(1)\n")]

    def test_single_unclassified_file_root(self, tmp_path):
        _write(tmp_path, "notes", "hello\n")
        source = LocalSource(tmp_path / "notes")
        assert list(source.iter_documents()) == []
        assert source.skipped == 1

    def test_many_files_warns(self, tmp_path, caplog):
        for n in range(3):
            _write(tmp_path, f"m{n}.py")
        LocalSource(tmp_path, AuditConfig(max_files_warn=2)).total_files()
        assert "3 auditable files" in caplog.text


class TestMemorySource:
    def test_mapping(self):
        source = MemorySource("mem", {"a.py": "x = 1\n", "b.go": "package b\n"})
        assert source.label == "mem"
        assert source.total_files() == 2
        assert [d.relative_path for d in source.iter_documents()] == ["a.py", "b.go"]

    def test_pairs_and_documents(self):
        source = MemorySource("mem", [("a.py", "x"), SourceDocument("b.py", "y")])
        assert list(source.iter_documents()) == [
            SourceDocument("a.py", "x"),
            SourceDocument("b.py", "y"),
        ]
