"""Structural detectors: the rules that a single regex cannot express.

A detector is a function ``(source, **params) -> Iterator[Hit]`` registered
under the name that catalog entries reference in their ``detector`` key.
``params`` come straight from the catalog entry.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Iterator, NamedTuple

from gitaudit.core.matching import SourceFile, line_at
from gitaudit.rules.blocks import strategy_for


class Hit(NamedTuple):
    """A detector finding: 1-based line plus template values."""

    line: int
    values: dict[str, object]


Detector = Callable[..., Iterator[Hit]]

DETECTORS: dict[str, Detector] = {}


def detector(name: str) -> Callable[[Detector], Detector]:
    def register(fn: Detector) -> Detector:
        if name in DETECTORS:
            raise ValueError(f"duplicate detector name: {name}")
        DETECTORS[name] = fn
        return fn

    return register


def _occurrences(content: str, name: str) -> int:
    return len(re.findall(rf"\b{re.escape(name)}\b", content))


# ── quality ─────────────────────────────────────────────────────────


@detector("long_line")
def long_line(source: SourceFile, *, max_length: int = 120) -> Iterator[Hit]:
    """Lines over *max_length*, except comment-only and URL-bearing lines."""
    for number, text in enumerate(source.lines, 1):
        if len(text) <= max_length or "http" in text:
            continue
        if text.strip().startswith(("//", "#")):
            continue
        yield Hit(number, {"line": number, "length": len(text), "max_length": max_length})


@detector("long_function")
def long_function(source: SourceFile, *, max_lines: int = 50) -> Iterator[Hit]:
    strategy = strategy_for(source.family)
    if strategy is None:
        return
    for block in strategy.iter_blocks(source.lines):
        if block.length > max_lines:
            yield Hit(block.start + 1, {"name": block.name, "length": block.length})


_MARKER = re.compile(
    r"\b(TODO|FIXME|HACK|XXX|BUG|OPTIMIZE)\b[:\t ]*(.*)", re.IGNORECASE
)


@detector("marker_comment")
def marker_comment(source: SourceFile, *, tags: Iterable[str]) -> Iterator[Hit]:
    wanted = {t.upper() for t in tags}
    for m in _MARKER.finditer(source.content):
        tag = m.group(1).upper()
        if tag not in wanted:
            continue
        text = m.group(2).strip() or "(no description)"
        yield Hit(line_at(source.content, m.start()), {"tag": tag, "text": text})


# digit runs longer than 18 never match
_NUMBER = re.compile(r"(?<![.\w'\"\\])(\d{2,18})(?![.\w'\"`])")
_DECLARATION = re.compile(r"(?:const|let|var|final|val)\s")


@detector("magic_number")
def magic_number(
    source: SourceFile,
    *,
    limit: int = 10,
    min_value: int = 11,
    allowed: Iterable[int] = (),
) -> Iterator[Hit]:
    """Numeric literals outside the allow-list and outside declarations.

    At most *limit* are reported per file.
    """
    allowed_values = frozenset(allowed)
    reported = 0
    for m in _NUMBER.finditer(source.content):
        if reported >= limit:
            return
        value = int(m.group(1))
        if value < min_value or value in allowed_values:
            continue
        number = line_at(source.content, m.start())
        text = source.lines[number - 1]
        if text.strip().startswith(("//", "#", "*")) or _DECLARATION.search(text):
            continue
        reported += 1
        yield Hit(number, {"value": value})


_CODE_KEYWORD = re.compile(
    r"\b(?:function|class|if|else|for|while|return|import|export|const|let|var"
    r"|def|end|do|begin|module|require|include|use|package|pub|fn|impl|struct|enum)\b"
)
_COMMENT_LEAD = re.compile(r"^(?://|#|--)")
_NOT_CODE_PREFIXES = ("TODO", "FIXME", "NOTE", "HACK")


def _is_line_comment(trimmed: str, marker: str | None) -> bool:
    if trimmed.startswith("//"):
        return not trimmed.startswith("///")
    if trimmed.startswith("#"):
        return not trimmed.startswith(("#!", "#include"))
    return trimmed.startswith("--") and marker == "--"


@detector("commented_code")
def commented_code(source: SourceFile, *, limit: int = 5) -> Iterator[Hit]:
    reported = 0
    for number, text in enumerate(source.lines, 1):
        if reported >= limit:
            return
        trimmed = text.strip()
        if not _is_line_comment(trimmed, source.language.comment):
            continue
        body = _COMMENT_LEAD.sub("", trimmed, count=1).strip()
        if len(body) <= 5 or body.startswith(_NOT_CODE_PREFIXES):
            continue
        if _CODE_KEYWORD.search(body):
            reported += 1
            yield Hit(number, {})


@detector("deep_nesting")
def deep_nesting(source: SourceFile, *, max_depth: int = 5) -> Iterator[Hit]:
    """First line where the running brace depth exceeds *max_depth*."""
    depth = 0
    for number, text in enumerate(source.lines, 1):
        depth += text.count("{") - text.count("}")
        if depth > max_depth:
            yield Hit(number, {"depth": depth, "line": number})
            return


@detector("missing_text")
def missing_text(
    source: SourceFile, *, needle: str, min_lines: int = 1
) -> Iterator[Hit]:
    """Single-shot: the file has at least *min_lines* lines but no *needle*."""
    if len(source.lines) >= min_lines and needle not in source.content:
        yield Hit(1, {})


_FROM_LINE = re.compile(r"^FROM\s", re.MULTILINE)
_FROM_TAGGED = re.compile(r"^FROM\s+\S+:\S+", re.MULTILINE)
_FROM_LATEST = re.compile(r"^FROM\s+\S+:latest\b", re.MULTILINE)


@detector("unpinned_base_image")
def unpinned_base_image(source: SourceFile) -> Iterator[Hit]:
    """Single-shot: FROM lines exist but none is tagged, or one is :latest."""
    content = source.content
    if not _FROM_LINE.search(content):
        return
    if not _FROM_TAGGED.search(content) or _FROM_LATEST.search(content):
        yield Hit(1, {})


# ── dead code ───────────────────────────────────────────────────────

_JS_DECLARATION = re.compile(r"\b(?:const|let|var)\s+(\w+)\s*=")


@detector("unused_variable")
def unused_variable(source: SourceFile) -> Iterator[Hit]:
    """Declared names that never appear again in the file.

    ``_``-prefixed names are treated as intentionally unused.
    """
    content = source.content
    declared: dict[str, int] = {}
    for m in _JS_DECLARATION.finditer(content):
        declared.setdefault(m.group(1), line_at(content, m.start()))
    for name, line in declared.items():
        if name.startswith("_"):
            continue
        if _occurrences(content, name) <= 1:
            yield Hit(line, {"name": name})


class _Import(NamedTuple):
    offset: int
    name: str
    module: str


_JS_IMPORT = re.compile(r"import\s+(?:\{([^}]+)\}|(\w+))\s+from")
_PY_IMPORT = re.compile(r"^(?:from\s+(\S+)\s+)?import\s+(.+)", re.MULTILINE)
_JAVA_IMPORT = re.compile(r"^import\s+(?:static\s+)?([^;]+);", re.MULTILINE)
_GO_IMPORT_BLOCK = re.compile(r"\bimport\s*\(([^)]*)\)")
_GO_IMPORT_LINE = re.compile(r"^import\s+((?:\w+\s+)?\"[^\"]+\")", re.MULTILINE)
_GO_SPEC = re.compile(r"(?:([\w.]+)\s+)?\"([^\"]+)\"")
_RUST_USE = re.compile(r"\buse\s+([^;]+);")
_CSHARP_USING = re.compile(r"^using\s+([\w.]+);", re.MULTILINE)


def _js_imports(content: str) -> Iterator[_Import]:
    for m in _JS_IMPORT.finditer(content):
        for part in (m.group(1) or m.group(2)).split(","):
            name = re.split(r"\s+as\s+", part.strip())[-1].strip()
            if name:
                yield _Import(m.start(), name, name)


def _python_imports(content: str) -> Iterator[_Import]:
    for m in _PY_IMPORT.finditer(content):
        package = m.group(1)
        if package == "__future__":
            continue
        names = m.group(2).split("#", 1)[0].strip(" \t()\\")
        for part in names.split(","):
            part = part.strip(" \t()\\")
            if not part or part == "*":
                continue
            module = part.split()[0]
            bound = re.split(r"\s+as\s+", part)[-1].strip()
            if package is None and " as " not in part:
                # ``import os.path`` binds ``os``
                bound = bound.split(".")[0]
            yield _Import(m.start(), bound, module)


def _java_imports(content: str) -> Iterator[_Import]:
    for m in _JAVA_IMPORT.finditer(content):
        full = m.group(1).strip()
        simple = full.split(".")[-1]
        if simple != "*":
            yield _Import(m.start(), simple, full)


def _go_specs(text: str, base: int) -> Iterator[_Import]:
    offset = base
    for raw in text.split("\n"):
        spec = _GO_SPEC.search(raw.strip())
        if spec:
            path = spec.group(2)
            alias = spec.group(1) or path.split("/")[-1]
            if alias not in ("_", "."):
                yield _Import(offset + len(raw) - len(raw.lstrip()), alias, path)
        offset += len(raw) + 1


def _go_imports(content: str) -> Iterator[_Import]:
    for m in _GO_IMPORT_BLOCK.finditer(content):
        yield from _go_specs(m.group(1), m.start(1))
    for m in _GO_IMPORT_LINE.finditer(content):
        yield from _go_specs(m.group(1), m.start(1))


def _rust_imports(content: str) -> Iterator[_Import]:
    for m in _RUST_USE.finditer(content):
        full = m.group(1).strip()
        simple = re.sub(r"[{}]", "", full.split("::")[-1]).strip()
        if simple and simple not in ("*", "self"):
            yield _Import(m.start(), simple, full)


def _csharp_imports(content: str) -> Iterator[_Import]:
    for m in _CSHARP_USING.finditer(content):
        namespace = m.group(1)
        if not namespace.startswith("System"):
            yield _Import(m.start(), namespace.split(".")[-1], namespace)


_IMPORT_SYNTAX: dict[str, Callable[[str], Iterator[_Import]]] = {
    "js": _js_imports,
    "python": _python_imports,
    "java": _java_imports,
    "go": _go_imports,
    "rust": _rust_imports,
    "csharp": _csharp_imports,
}


@detector("unused_import")
def unused_import(source: SourceFile, *, syntax: str) -> Iterator[Hit]:
    """Imported names that occur only at their import site."""
    content = source.content
    for imp in _IMPORT_SYNTAX[syntax](content):
        if _occurrences(content, imp.name) <= 1:
            yield Hit(
                line_at(content, imp.offset),
                {"name": imp.name, "module": imp.module},
            )


@detector("duplicate_block")
def duplicate_block(
    source: SourceFile,
    *,
    block_lines: int = 4,
    min_file_lines: int = 10,
    min_chars: int = 20,
) -> Iterator[Hit]:
    """First repeat of a non-trivial run of *block_lines* lines.

    Lines are compared with surrounding whitespace stripped.  Only the first
    repeat in a file is reported.
    """
    lines = source.lines
    if len(lines) < min_file_lines:
        return
    seen: dict[str, int] = {}
    for i in range(len(lines) - block_lines + 1):
        block = "|".join(line.strip() for line in lines[i : i + block_lines])
        if len(re.sub(r"\s", "", block)) < min_chars:
            continue
        first = seen.get(block)
        if first is not None:
            yield Hit(
                i + 1,
                {
                    "start": i + 1,
                    "end": i + block_lines,
                    "first_start": first + 1,
                    "first_end": first + block_lines,
                },
            )
            return
        seen[block] = i
