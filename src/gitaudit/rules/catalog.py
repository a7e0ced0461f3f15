"""Rule catalog: YAML rule documents compiled into immutable ``Rule`` records.

The rule definitions live in ``gitaudit/data/rules/*.yaml``, one document
per category.  Each document is validated against
``rule_catalog.schema.json`` before compilation, so a malformed entry fails
at load time with ``RuleCatalogError`` instead of silently misfiring.
"""

from __future__ import annotations

import inspect
import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from typing import Any, Iterable, Iterator, Mapping, Optional

import jsonschema
import yaml

from gitaudit.contracts.load import validate_instance
from gitaudit.errors import RuleCatalogError
from gitaudit.model import Category, Severity
from gitaudit.rules.detectors import DETECTORS, Detector

_logger = logging.getLogger(__name__)

RULES_DIR = "data/rules"
CATALOG_SCHEMA = "rule_catalog.schema.json"

# Evaluation order across documents; within a document, entry order wins.
CATEGORY_ORDER: tuple[Category, ...] = (
    Category.SECURITY,
    Category.PERFORMANCE,
    Category.QUALITY,
    Category.DEAD_CODE,
)

_FLAGS = {
    "IGNORECASE": re.IGNORECASE,
    "MULTILINE": re.MULTILINE,
    "DOTALL": re.DOTALL,
}


@dataclass(frozen=True, slots=True)
class Rule:
    """One compiled rule: either a ``pattern`` or a named ``detector``.

    ``families`` is ``None`` for rules that apply to every analyzable family.
    ``title``, ``description`` and ``remediation`` may contain ``${name}``
    placeholders filled from named groups or detector values.
    """

    rule_id: str
    category: Category
    severity: Severity
    title: str
    description: str
    remediation: Optional[str] = None
    families: Optional[frozenset[str]] = None
    context: int = 1
    pattern: Optional[re.Pattern[str]] = None
    detector: Optional[Detector] = field(default=None, compare=False)
    params: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def applies_to(self, family: str) -> bool:
        if family == "other":
            return False
        return self.families is None or family in self.families


class RuleCatalog:
    """Ordered rules plus a memoized family → applicable-rules mapping."""

    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)
        self._by_id: dict[str, Rule] = {}
        for rule in self._rules:
            if rule.rule_id in self._by_id:
                raise RuleCatalogError(f"duplicate rule id: {rule.rule_id}")
            self._by_id[rule.rule_id] = rule
        self._by_family: dict[str, tuple[Rule, ...]] = {}

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._by_id.get(rule_id)

    def for_family(self, family: str) -> tuple[Rule, ...]:
        """Rules applicable to *family*, in evaluation order."""
        cached = self._by_family.get(family)
        if cached is None:
            cached = tuple(r for r in self._rules if r.applies_to(family))
            self._by_family[family] = cached
        return cached


# ── compilation ─────────────────────────────────────────────────────


def _compile_pattern(rule_id: str, entry: Mapping[str, Any]) -> re.Pattern[str]:
    flags = 0
    for name in entry.get("flags", ()):
        flags |= _FLAGS[name]
    try:
        return re.compile(entry["pattern"], flags)
    except re.error as exc:
        raise RuleCatalogError(f"{rule_id}: invalid pattern: {exc}") from exc


def _resolve_detector(rule_id: str, entry: Mapping[str, Any]) -> Detector:
    name = entry["detector"]
    fn = DETECTORS.get(name)
    if fn is None:
        raise RuleCatalogError(f"{rule_id}: unknown detector {name!r}")
    try:
        inspect.signature(fn).bind(None, **entry.get("params", {}))
    except TypeError as exc:
        raise RuleCatalogError(f"{rule_id}: bad params for {name}: {exc}") from exc
    return fn


def _compile_entry(
    category: Category, defaults: Mapping[str, Any], entry: Mapping[str, Any]
) -> Rule:
    merged = {**defaults, **entry}
    rule_id = merged["id"]
    families = merged.get("families", "all")
    is_pattern = "pattern" in entry
    return Rule(
        rule_id=rule_id,
        category=category,
        severity=Severity(merged.get("severity", Severity.INFO.value)),
        title=merged["title"],
        description=merged["description"],
        remediation=merged.get("remediation"),
        families=None if families == "all" else frozenset(families),
        context=merged.get("context", 1),
        pattern=_compile_pattern(rule_id, entry) if is_pattern else None,
        detector=None if is_pattern else _resolve_detector(rule_id, entry),
        params=dict(entry.get("params", {})),
    )


def compile_document(document: Mapping[str, Any], *, source: str = "<document>") -> list[Rule]:
    """Validate and compile one category document."""
    try:
        validate_instance(document, CATALOG_SCHEMA)
    except jsonschema.ValidationError as exc:
        where = "/".join(str(p) for p in exc.absolute_path) or "(root)"
        raise RuleCatalogError(f"{source}: {where}: {exc.message}") from exc

    category = Category(document["category"])
    defaults = document.get("defaults", {})
    return [_compile_entry(category, defaults, entry) for entry in document["rules"]]


def build_catalog(documents: Iterable[Mapping[str, Any]]) -> RuleCatalog:
    """Compile *documents* into a catalog ordered by category."""
    compiled: dict[Category, list[Rule]] = {c: [] for c in CATEGORY_ORDER}
    for index, document in enumerate(documents):
        for rule in compile_document(document, source=f"document {index}"):
            compiled[rule.category].append(rule)
    return RuleCatalog(rule for c in CATEGORY_ORDER for rule in compiled[c])


def _read_document(name: str) -> Any:
    text = (resources.files("gitaudit") / RULES_DIR / name).read_text(encoding="utf-8")
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuleCatalogError(f"{name}: {exc}") from exc


@lru_cache(maxsize=1)
def load_catalog() -> RuleCatalog:
    """Load the bundled catalog once per process."""
    rules: list[Rule] = []
    for category in CATEGORY_ORDER:
        name = f"{category.value}.yaml"
        rules.extend(compile_document(_read_document(name), source=name))
    catalog = RuleCatalog(rules)
    _logger.debug("Loaded %d rules from %s", len(catalog), RULES_DIR)
    return catalog
