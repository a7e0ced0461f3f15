"""Match engine: turns rule matches into positioned candidate issues."""

from __future__ import annotations

from dataclasses import dataclass
from string import Template
from typing import TYPE_CHECKING, Iterator, Mapping, Optional, Sequence

from gitaudit.languages import LanguageDescriptor, classify
from gitaudit.model.issue import Candidate, ContextLine

if TYPE_CHECKING:
    from gitaudit.rules.catalog import Rule


@dataclass(frozen=True, slots=True)
class SourceFile:
    """One file as the rules see it: path, raw text, split lines, language."""

    path: str
    content: str
    lines: tuple[str, ...]
    language: LanguageDescriptor

    @classmethod
    def from_text(
        cls,
        path: str,
        content: str,
        language: Optional[LanguageDescriptor] = None,
    ) -> "SourceFile":
        return cls(
            path=path,
            content=content,
            lines=tuple(content.split("\n")),
            language=language or classify(path),
        )

    @property
    def family(self) -> str:
        return self.language.family


def line_at(content: str, offset: int) -> int:
    """1-based line number of the character at *offset*."""
    return content.count("\n", 0, offset) + 1


def context_window(
    lines: Sequence[str], line: int, radius: int = 1
) -> tuple[ContextLine, ...]:
    """Lines ``line - radius`` … ``line + radius`` clipped to the file."""
    first = max(1, line - radius)
    last = min(len(lines), line + radius)
    return tuple(
        ContextLine(number=n, text=lines[n - 1], is_highlighted=n == line)
        for n in range(first, last + 1)
    )


def _fill(template: str, values: Mapping[str, object]) -> str:
    if "$" not in template:
        return template
    return Template(template).safe_substitute(values)


def _candidate(
    rule: "Rule", source: SourceFile, line: int, values: Mapping[str, object]
) -> Candidate:
    return Candidate(
        rule_id=rule.rule_id,
        category=rule.category,
        severity=rule.severity,
        title=_fill(rule.title, values),
        description=_fill(rule.description, values),
        file=source.path,
        line=line,
        context_lines=context_window(source.lines, line, rule.context),
        remediation=_fill(rule.remediation, values) if rule.remediation else None,
    )


def apply_rule(rule: "Rule", source: SourceFile) -> Iterator[Candidate]:
    """Yield one candidate per pattern match or detector hit.

    Pattern rules report at the line where the match starts; named groups
    fill the rule's ``${placeholders}``.  Detector rules report wherever the
    detector says, with the detector's values filling the placeholders.
    """
    if rule.pattern is not None:
        content = source.content
        for match in rule.pattern.finditer(content):
            values = {k: v for k, v in match.groupdict().items() if v is not None}
            yield _candidate(rule, source, line_at(content, match.start()), values)
        return

    for hit in rule.detector(source, **rule.params):
        yield _candidate(rule, source, hit.line, hit.values)
