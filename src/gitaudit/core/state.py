"""Immutable run accumulator and the per-file analysis fold.

A run is ``reduce(analyze_source, files, AuditState.initial())``: every step
returns a new state and never touches the previous one, so two runs share
nothing and a state can be inspected at any point.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Optional

from gitaudit.core.matching import SourceFile, apply_rule
from gitaudit.languages import LanguageDescriptor, classify
from gitaudit.model.issue import Candidate, Issue
from gitaudit.model.report import FileRecord, Statistics
from gitaudit.rules.catalog import RuleCatalog, load_catalog

_logger = logging.getLogger(__name__)

Fingerprint = tuple[str, str, int]


@dataclass(frozen=True, slots=True)
class AuditState:
    """Issues, file records and statistics of one run."""

    issues: tuple[Issue, ...] = ()
    files: tuple[FileRecord, ...] = ()
    statistics: Statistics = field(default_factory=Statistics)
    fingerprints: frozenset[Fingerprint] = frozenset()

    @classmethod
    def initial(cls, total_files: int = 0) -> "AuditState":
        return cls(statistics=Statistics(total_files=total_files))

    # ── deduplication ───────────────────────────────────────────────

    def add(self, candidate: Candidate) -> tuple["AuditState", bool]:
        """Insert *candidate* unless an issue with its fingerprint exists.

        Returns the new state and whether the candidate was inserted.
        """
        state, inserted = self.add_all((candidate,))
        return state, inserted == 1

    def add_all(self, candidates: Iterable[Candidate]) -> tuple["AuditState", int]:
        """Insert candidates in order, skipping duplicates.  Ids stay sequential."""
        seen = set(self.fingerprints)
        fresh: list[Issue] = []
        next_id = len(self.issues) + 1
        for candidate in candidates:
            key = candidate.fingerprint
            if key in seen:
                continue
            seen.add(key)
            fresh.append(Issue.from_candidate(candidate, next_id))
            next_id += 1
        if not fresh:
            return self, 0
        state = replace(
            self,
            issues=self.issues + tuple(fresh),
            fingerprints=frozenset(seen),
        )
        return state, len(fresh)

    # ── statistics ──────────────────────────────────────────────────

    def record_file(
        self,
        path: str,
        language: LanguageDescriptor,
        line_count: int,
        byte_size: int,
    ) -> "AuditState":
        stats = self.statistics
        languages = dict(stats.languages)
        languages[language.name] = languages.get(language.name, 0) + 1
        analyzed = stats.analyzed_files + 1
        statistics = replace(
            stats,
            # a recorded file was necessarily discovered
            total_files=max(stats.total_files, analyzed),
            analyzed_files=analyzed,
            analyzed_lines=stats.analyzed_lines + line_count,
            languages=languages,
        )
        record = FileRecord(
            path=path,
            language=language.name,
            family=language.family,
            line_count=line_count,
            byte_size=byte_size,
        )
        return replace(self, files=self.files + (record,), statistics=statistics)

    def with_total_files(self, total_files: int) -> "AuditState":
        stats = self.statistics
        total = max(total_files, stats.analyzed_files)
        return replace(self, statistics=replace(stats, total_files=total))


def analyze_source(
    state: AuditState,
    path: str,
    content: str,
    *,
    catalog: Optional[RuleCatalog] = None,
    budget_seconds: float = 0.0,
    clock: Callable[[], float] = time.monotonic,
) -> AuditState:
    """Fold one file into *state*.

    Unclassified paths leave the state unchanged.  Rules run in catalog
    order; a rule that raises is logged and skipped.  With a positive
    *budget_seconds*, the remaining rules of a file are skipped once the
    budget is spent.
    """
    language = classify(path)
    if not language.analyzable:
        _logger.debug("Skipping unclassified file %s", path)
        return state

    source = SourceFile.from_text(path, content, language)
    state = state.record_file(
        path,
        language,
        line_count=len(source.lines),
        byte_size=len(content.encode("utf-8", errors="replace")),
    )

    rules = (catalog or load_catalog()).for_family(language.family)
    deadline = clock() + budget_seconds if budget_seconds > 0 else None
    candidates: list[Candidate] = []
    for index, rule in enumerate(rules):
        if deadline is not None and clock() > deadline:
            _logger.warning(
                "Rule budget of %.1fs exhausted on %s; skipped %d remaining rule(s)",
                budget_seconds,
                path,
                len(rules) - index,
            )
            break
        try:
            candidates.extend(list(apply_rule(rule, source)))
        except Exception:
            _logger.exception("Rule %s failed on %s; skipped", rule.rule_id, path)

    state, inserted = state.add_all(candidates)
    _logger.debug("%s: %d rule(s), %d new issue(s)", path, len(rules), inserted)
    return state
