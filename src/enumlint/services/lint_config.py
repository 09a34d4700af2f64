"""Configurable settings for the enum lint run."""

from __future__ import annotations

import os
from dataclasses import dataclass

SEVERITIES = ("info", "refactor", "convention", "warning", "error", "fatal")
"""Severity names accepted by the host, lowest first."""

DEFAULT_SEVERITY = "convention"
"""Severity reported when nothing else is configured."""

DEFAULT_MAX_SOURCE_BYTES = 262_144
"""Conservative default for the source buffer size in bytes."""

DEFAULT_MAX_DEPTH = 128
"""Default cap on AST nesting depth."""

ENABLED_ENV = "ENUMLINT_ENUM_NEGATIVE_ENABLED"
SEVERITY_ENV = "ENUMLINT_SEVERITY"
AUTOCORRECT_ENV = "ENUMLINT_AUTOCORRECT"
MAX_SOURCE_BYTES_ENV = "ENUMLINT_MAX_SOURCE_BYTES"
MAX_DEPTH_ENV = "ENUMLINT_MAX_DEPTH"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_int(
    name: str,
    default: int,
    *,
    min_value: int = 0,
    max_value: int | None = None,
) -> int:
    """Return a bounded integer setting sourced from the environment."""

    raw = os.getenv(name)
    if not raw or not raw.strip():
        return default
    try:
        parsed = int(raw)
    except ValueError:
        return default
    if parsed < min_value:
        return default
    if max_value is not None and parsed > max_value:
        return max_value
    return parsed


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def _env_severity(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().lower()
    if raw in SEVERITIES:
        return raw
    return default


@dataclass(frozen=True)
class LintConfig:
    """Container describing every configurable lint setting."""

    enabled: bool
    severity: str
    autocorrect: bool
    max_source_bytes: int
    max_depth: int

    @classmethod
    def from_env(cls) -> "LintConfig":
        """Return settings using the configured environment variables."""

        return cls(
            enabled=_env_bool(ENABLED_ENV, True),
            severity=_env_severity(SEVERITY_ENV, DEFAULT_SEVERITY),
            autocorrect=_env_bool(AUTOCORRECT_ENV, True),
            max_source_bytes=_env_int(
                MAX_SOURCE_BYTES_ENV,
                DEFAULT_MAX_SOURCE_BYTES,
                min_value=1,
            ),
            max_depth=_env_int(
                MAX_DEPTH_ENV,
                DEFAULT_MAX_DEPTH,
                min_value=1,
                max_value=256,
            ),
        )


DEFAULT_LINT_CONFIG = LintConfig(
    True,
    DEFAULT_SEVERITY,
    True,
    DEFAULT_MAX_SOURCE_BYTES,
    DEFAULT_MAX_DEPTH,
)
