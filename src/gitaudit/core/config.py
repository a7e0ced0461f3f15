"""Audit configuration: defaults ← YAML file ← environment ← overrides.

The YAML file is ``.gitaudit.yml`` in the audited directory, or the path
given with ``--config``.  Keys are the ``AuditConfig`` field names.
Environment variables use the ``GITAUDIT_`` prefix (``GITAUDIT_BATCH_SIZE``
…); ``GITHUB_TOKEN`` is honoured when ``GITAUDIT_GITHUB_TOKEN`` is unset.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from gitaudit.errors import ConfigError

_logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (".gitaudit.yml", ".gitaudit.yaml")
ENV_PREFIX = "GITAUDIT_"


@dataclass(frozen=True)
class AuditConfig:
    """Immutable run configuration."""

    max_file_bytes: int = 1024 * 1024
    batch_size: int = 5
    github_api_base: str = "https://api.github.com"
    github_token: Optional[str] = None
    request_timeout: float = 30.0
    rule_budget_seconds: float = 10.0  # 0 = no limit
    max_files_warn: int = 5000

    def __post_init__(self) -> None:
        if self.max_file_bytes <= 0:
            raise ConfigError("max_file_bytes must be positive")
        if self.batch_size <= 0:
            raise ConfigError("batch_size must be positive")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")
        if self.rule_budget_seconds < 0:
            raise ConfigError("rule_budget_seconds must not be negative")
        if self.max_files_warn < 0:
            raise ConfigError("max_files_warn must not be negative")


_FIELD_TYPES: dict[str, type] = {
    "max_file_bytes": int,
    "batch_size": int,
    "github_api_base": str,
    "github_token": str,
    "request_timeout": float,
    "rule_budget_seconds": float,
    "max_files_warn": int,
}


def _coerce(key: str, value: Any, origin: str) -> Any:
    if value is None:
        if key == "github_token":
            return None
        raise ConfigError(f"{origin}: {key} must not be null")
    kind = _FIELD_TYPES[key]
    if kind is str:
        return str(value)
    if isinstance(value, bool):
        raise ConfigError(f"{origin}: {key} must be a number, got {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{origin}: {key} must be {kind.__name__}, got {value!r}") from exc


def _apply(config: AuditConfig, values: Mapping[str, Any], origin: str) -> AuditConfig:
    unknown = sorted(set(values) - set(_FIELD_TYPES))
    if unknown:
        raise ConfigError(f"{origin}: unknown key(s): {', '.join(unknown)}")
    if not values:
        return config
    coerced = {k: _coerce(k, v, origin) for k, v in values.items()}
    return replace(config, **coerced)


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML config file into a mapping (empty file → ``{}``)."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return data


def find_config_file(root: Path) -> Optional[Path]:
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def _env_values(env: Mapping[str, str]) -> dict[str, str]:
    values = {}
    for f in fields(AuditConfig):
        raw = env.get(ENV_PREFIX + f.name.upper())
        if raw:
            values[f.name] = raw
    if "github_token" not in values and env.get("GITHUB_TOKEN"):
        values["github_token"] = env["GITHUB_TOKEN"]
    return values


def load_config(
    *,
    root: Optional[Path] = None,
    config_path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> AuditConfig:
    """Build an ``AuditConfig`` from every layer.

    *config_path* wins over a ``.gitaudit.yml`` found in *root*.
    ``None`` values in *overrides* are ignored.
    """
    config = AuditConfig()

    path = config_path
    if path is None and root is not None and root.is_dir():
        path = find_config_file(root)
    if path is not None:
        _logger.debug("Loading configuration from %s", path)
        config = _apply(config, read_config_file(path), str(path))

    config = _apply(config, _env_values(os.environ if env is None else env), "environment")

    if overrides:
        given = {k: v for k, v in overrides.items() if v is not None}
        config = _apply(config, given, "overrides")
    return config
