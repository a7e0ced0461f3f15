"""Local directory source: recursive walk with exclusion rules."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Optional

from gitaudit.core.config import AuditConfig
from gitaudit.languages import classify, is_binary_path, should_ignore_dir
from gitaudit.sources import SourceDocument

_logger = logging.getLogger(__name__)


class LocalSource:
    """Audit files under *root*.

    Discovery prunes ignored directories, binary and lock files,
    unclassified files and files larger than ``config.max_file_bytes``.
    ``skipped`` counts every excluded file, including those that later
    fail to read or decode.
    """

    def __init__(self, root: Path, config: Optional[AuditConfig] = None) -> None:
        self.root = Path(root)
        self.config = config or AuditConfig()
        self.skipped = 0
        self._paths: Optional[list[Path]] = None

    @property
    def label(self) -> str:
        return self.root.resolve().name or str(self.root)

    def _discover(self) -> list[Path]:
        found: list[Path] = []
        if self.root.is_file():
            if self._excluded(self.root):
                self.skipped += 1
                return found
            return [self.root]
        for dirpath, dirnames, filenames in os.walk(self.root):
            # prune in place; sorted for a stable traversal order
            dirnames[:] = sorted(d for d in dirnames if not should_ignore_dir(d))
            for name in sorted(filenames):
                path = Path(dirpath) / name
                if self._excluded(path):
                    self.skipped += 1
                    continue
                found.append(path)
        if len(found) > self.config.max_files_warn:
            _logger.warning(
                "%s holds %d auditable files; this may take a while",
                self.root,
                len(found),
            )
        return found

    def _excluded(self, path: Path) -> bool:
        rel = self._relative(path)
        if is_binary_path(rel) or not classify(rel).analyzable:
            return True
        if path.is_symlink() or not path.is_file():
            return True
        try:
            size = path.stat().st_size
        except OSError as exc:
            _logger.warning("Cannot stat %s: %s", rel, exc)
            return True
        if size > self.config.max_file_bytes:
            _logger.debug("Skipping %s (%d bytes)", rel, size)
            return True
        return False

    def _relative(self, path: Path) -> str:
        if path == self.root:
            return path.name
        return path.relative_to(self.root).as_posix()

    def _paths_list(self) -> list[Path]:
        if self._paths is None:
            self._paths = self._discover()
        return self._paths

    def total_files(self) -> int:
        return len(self._paths_list())

    def iter_documents(self) -> Iterator[SourceDocument]:
        for path in self._paths_list():
            rel = self._relative(path)
            try:
                content = path.read_bytes().decode("utf-8")
            except OSError as exc:
                _logger.warning("Cannot read %s: %s", rel, exc)
                self.skipped += 1
                continue
            except UnicodeDecodeError:
                _logger.debug("Skipping %s: not UTF-8", rel)
                self.skipped += 1
                continue
            yield SourceDocument(rel, content)
