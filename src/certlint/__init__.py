"""certlint — X.509 certificate linter. Registry-driven, deterministic per-lint verdicts."""

from certlint.certificate import Certificate
from certlint.errors import (
    CertificateParseError,
    CertlintError,
    DuplicateLintError,
    LintConfigWarning,
    LintInitializationError,
    LintNotFoundError,
    RegistryError,
    RegistryFrozenError,
    RegistryStateError,
)
from certlint.lints import (
    LintConfig,
    LintEngine,
    LintMetadata,
    LintRegistry,
    LintResult,
    LintSource,
    LintStatus,
    ResultSet,
    Summary,
    build_registry,
    check_gate,
    default_registry,
    lint_certificate,
)

__all__ = [
    "Certificate",
    "CertificateParseError",
    "CertlintError",
    "DuplicateLintError",
    "LintConfig",
    "LintConfigWarning",
    "LintEngine",
    "LintInitializationError",
    "LintMetadata",
    "LintNotFoundError",
    "LintRegistry",
    "LintResult",
    "LintSource",
    "LintStatus",
    "RegistryError",
    "RegistryFrozenError",
    "RegistryStateError",
    "ResultSet",
    "Summary",
    "build_registry",
    "check_gate",
    "default_registry",
    "lint_certificate",
]
