"""gitaudit: heuristic multi-language security, performance and quality audit."""

__all__ = [
    "__version__",
    "AuditEngine",
    "audit_sources",
    "audit_target",
    "validate_instance",
]
__version__ = "0.1.0"

# Programmatic entrypoints
from gitaudit.api import audit_sources, audit_target  # noqa: E402, F401
from gitaudit.contracts.load import validate_instance  # noqa: E402, F401
from gitaudit.core.engine import AuditEngine  # noqa: E402, F401
