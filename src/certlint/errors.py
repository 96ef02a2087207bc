# SPDX-License-Identifier: MIT
"""Exception hierarchy shared by the registry, engine and certificate adapter."""

from __future__ import annotations


class CertlintError(Exception):
    """Base class for certlint errors."""


class RegistryError(CertlintError):
    """Raised when the lint registry is misconfigured or misused."""


class DuplicateLintError(RegistryError):
    """Raised when two catalog entries share a name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Lint {name!r} is already registered")


class RegistryFrozenError(RegistryError):
    """Raised when registering into a registry that has been frozen."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot register {name!r}: registry is frozen")


class RegistryStateError(RegistryError):
    """Raised when an operation needs a frozen registry but got a building one."""


class LintNotFoundError(RegistryError, KeyError):
    """Raised by point lookups for names that are not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No lint named {name!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class LintInitializationError(CertlintError):
    """Raised (and cached) when a lint's one-time initialize() fails."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Lint {name!r} failed to initialize: {reason}")


class CertificateParseError(CertlintError, ValueError):
    """Raised when certificate bytes cannot be decoded or parsed."""


class LintConfigWarning(UserWarning):
    """Issued when a selection config names lints the registry does not know."""
