"""Rule catalog, detectors and block strategies."""

from gitaudit.rules.catalog import (
    CATEGORY_ORDER,
    Rule,
    RuleCatalog,
    build_catalog,
    compile_document,
    load_catalog,
)

__all__ = [
    "CATEGORY_ORDER",
    "Rule",
    "RuleCatalog",
    "build_catalog",
    "compile_document",
    "load_catalog",
]
