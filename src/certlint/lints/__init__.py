# SPDX-License-Identifier: MIT
"""Lint registry and engine — deterministic per-certificate verdicts for every registered lint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from certlint.lints.base import LintCheck, LintDescriptor, LintMetadata, LintSource
from certlint.lints.config import LintProfile, load_config, load_profile
from certlint.lints.engine import LintConfig, LintEngine, Selection
from certlint.lints.engine import check_gate as _check_gate
from certlint.lints.registry import LintRegistry, build_registry, default_registry
from certlint.lints.result import LintResult, LintStatus, ResultSet, Summary

if TYPE_CHECKING:
    from certlint.certificate import Certificate

__all__ = [
    "LintCheck",
    "LintConfig",
    "LintDescriptor",
    "LintEngine",
    "LintMetadata",
    "LintProfile",
    "LintRegistry",
    "LintResult",
    "LintSource",
    "LintStatus",
    "ResultSet",
    "Selection",
    "Summary",
    "build_registry",
    "check_gate",
    "default_registry",
    "lint_certificate",
    "load_config",
    "load_profile",
]


def lint_certificate(cert: Certificate, config: LintConfig | None = None) -> ResultSet:
    """Convenience: run the built-in lints against one certificate."""
    engine = LintEngine()
    return engine.run(cert, config)


def check_gate(result_set: ResultSet, fail_on: LintStatus) -> bool:
    """Convenience: check if any verdict meets the fail_on threshold."""
    return _check_gate(result_set, fail_on)
