"""Tests for path → language classification and exclusion helpers."""

from __future__ import annotations

import pytest

from gitaudit.languages import (
    LANGUAGES,
    OTHER,
    classify,
    is_binary_path,
    should_ignore_dir,
)


class TestClassify:
    @pytest.mark.parametrize(
        "path, name, family",
        [
            ("src/app.js", "JavaScript", "js"),
            ("src/app.ts", "TypeScript", "ts"),
            ("pkg/main.go", "Go", "go"),
            ("scripts/deploy.sh", "Shell", "shell"),
            ("lib/thing.rb", "Ruby", "ruby"),
            ("infra/main.tf", "Terraform", "hcl"),
        ],
    )
    def test_extension_lookup(self, path, name, family):
        lang = classify(path)
        assert lang.name == name
        assert lang.family == family

    def test_filename_beats_extension(self):
        assert classify("docker/Dockerfile").family == "docker"
        assert classify("Gemfile").family == "ruby"

    def test_extension_is_case_insensitive(self):
        assert classify("LEGACY.JS").family == "js"

    def test_unknown_extension_is_other(self):
        assert classify("notes.unknownext") is OTHER
        assert classify("LICENSE") is OTHER
        assert not OTHER.analyzable

    def test_windows_separators(self):
        assert classify("src\\app.py").family == classify("src/app.py").family

    def test_never_raises_on_odd_input(self):
        for path in ("", ".", "...", "a.", ".hidden"):
            assert classify(path) is not None

    def test_every_known_extension_is_analyzable(self):
        assert all(lang.analyzable for lang in LANGUAGES.values())


class TestExclusions:
    @pytest.mark.parametrize(
        "path",
        ["logo.png", "font.woff2", "bundle.min.js", "package-lock.json", "Cargo.lock", "app.js.map"],
    )
    def test_binary_and_generated(self, path):
        assert is_binary_path(path)

    def test_source_is_not_binary(self):
        assert not is_binary_path("src/app.js")

    @pytest.mark.parametrize("name", ["node_modules", "vendor", "dist", "__pycache__", ".git", ".anything"])
    def test_ignored_dirs(self, name):
        assert should_ignore_dir(name)

    def test_regular_dir_not_ignored(self):
        assert not should_ignore_dir("src")
