"""Function/method boundary strategies used by the long-function detector.

Each strategy walks a file's lines once and yields the blocks it can find.
These are heuristics over text, not parsers: braces inside strings or
comments are counted like any other brace.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol, Sequence


@dataclass(frozen=True, slots=True)
class Block:
    """A function-like region.  ``start`` is the 0-based header line."""

    name: str
    start: int
    length: int


class BlockStrategy(Protocol):
    def iter_blocks(self, lines: Sequence[str]) -> Iterator[Block]: ...


# ── brace counting ──────────────────────────────────────────────────

_BRACE_HEADER = re.compile(
    r"(?:function\s+(\w+)"
    r"|(?:const|let|var|val|fun|func|fn|def|void|int|string|bool|auto|pub)\s+(\w+)\s*"
    r"(?:\([^)]*\)|=\s*(?:async\s+)?(?:function|\([^)]*\)\s*=>)))"
)


class BraceBlocks:
    """Header regex, then brace counting until the depth returns to zero.

    The length includes both the header and the closing line.
    """

    def iter_blocks(self, lines: Sequence[str]) -> Iterator[Block]:
        start: Optional[int] = None
        name = ""
        depth = 0
        for i, line in enumerate(lines):
            if start is None:
                m = _BRACE_HEADER.search(line)
                if m:
                    start = i
                    name = m.group(1) or m.group(2) or "anonymous"
                    depth = 0
            if start is not None:
                depth += line.count("{") - line.count("}")
                if depth <= 0 and i > start:
                    yield Block(name, start, i - start + 1)
                    start = None


# ── indentation tracking ────────────────────────────────────────────

_DEF_HEADER = re.compile(r"^(\s*)(?:async\s+)?def\s+(\w+)")


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


class IndentBlocks:
    """``def`` headers closed by the first code line at or left of the header.

    Blank, comment and decorator lines never close a block.  The length runs
    from the header to the line before the closing one; a block still open
    at end of file runs to its last non-blank line.
    """

    def iter_blocks(self, lines: Sequence[str]) -> Iterator[Block]:
        start: Optional[int] = None
        indent = 0
        name = ""
        last_code = 0
        for i, line in enumerate(lines):
            m = _DEF_HEADER.match(line)
            if m:
                if start is not None:
                    yield Block(name, start, i - start)
                start, indent, name = i, len(m.group(1)), m.group(2)
                last_code = i
                continue
            stripped = line.strip()
            if start is None or not stripped:
                continue
            if _indent(line) <= indent and not stripped.startswith(("#", "@")):
                yield Block(name, start, i - start)
                start = None
            else:
                last_code = i
        if start is not None:
            yield Block(name, start, last_code - start + 1)


# ── keyword counting ────────────────────────────────────────────────

_KEYWORD_HEADER = re.compile(r"^def\s+([\w.?!=]+)")
_KEYWORD_OPENER = re.compile(
    r"^(?:def|class|module|do|if|unless|case|begin|while|until|for)\b"
)
_TRAILING_DO = re.compile(r"\bdo\s*(?:\|[^|]*\|)?\s*$")


class KeywordBlocks:
    """``def … end`` with opener/``end`` keyword counting (Ruby)."""

    def iter_blocks(self, lines: Sequence[str]) -> Iterator[Block]:
        start: Optional[int] = None
        name = ""
        depth = 0
        for i, raw in enumerate(lines):
            line = raw.strip()
            m = _KEYWORD_HEADER.match(line)
            if m:
                start, name, depth = i, m.group(1), 1
                continue
            if start is None:
                continue
            if _KEYWORD_OPENER.match(line) or _TRAILING_DO.search(line):
                depth += 1
            if line == "end":
                depth -= 1
            if depth == 0:
                yield Block(name, start, i - start + 1)
                start = None


_BRACE_FAMILIES = frozenset(
    {
        "js", "ts", "java", "kotlin", "csharp", "cpp", "c", "go", "rust",
        "swift", "dart", "php", "scala", "groovy",
    }
)

_STRATEGIES: dict[str, BlockStrategy] = {
    "python": IndentBlocks(),
    "ruby": KeywordBlocks(),
    **{family: BraceBlocks() for family in _BRACE_FAMILIES},
}


def strategy_for(family: str) -> Optional[BlockStrategy]:
    """Return the block strategy for *family*, or ``None`` when it has none."""
    return _STRATEGIES.get(family)
