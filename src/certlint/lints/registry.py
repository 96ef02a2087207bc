# SPDX-License-Identifier: MIT
"""Lint registry — explicit list of lint classes and the name-keyed catalog.

The registry has two phases. While building, entries are registered from a
single thread. ``freeze()`` sorts the catalog by name and ends the build
phase; from then on the registry is read-only and safe to share between
threads without locking. The only mutable state left is the per-lint
one-time initialization guard.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime
from typing import Any

from certlint.errors import (
    DuplicateLintError,
    LintInitializationError,
    LintNotFoundError,
    RegistryFrozenError,
    RegistryStateError,
)
from certlint.lints.base import LintDescriptor, LintMetadata, LintSource
from certlint.lints.dn_whitespace import (
    IssuerDNLeadingWhitespaceLint,
    IssuerDNTrailingWhitespaceLint,
    SubjectDNLeadingWhitespaceLint,
    SubjectDNTrailingWhitespaceLint,
)
from certlint.lints.explicit_text import ExplicitTextIncludesControlLint, ExplicitTextTooLongLint
from certlint.lints.root_ca_key import OldRootCaRsaModulusLint
from certlint.lints.subject_country import SubjectCountryNotIsoLint
from certlint.lints.subject_policy import (
    GivenNameSurnameRequiresIVPolicyLint,
    OVPolicyRequiresCountryLint,
    OVPolicyRequiresOrgLint,
)

log = logging.getLogger(__name__)

# Order here is irrelevant: the registry iterates by name.
LINT_CLASSES: list[type[Any]] = [
    IssuerDNLeadingWhitespaceLint,
    IssuerDNTrailingWhitespaceLint,
    SubjectDNLeadingWhitespaceLint,
    SubjectDNTrailingWhitespaceLint,
    ExplicitTextTooLongLint,
    ExplicitTextIncludesControlLint,
    OldRootCaRsaModulusLint,
    GivenNameSurnameRequiresIVPolicyLint,
    OVPolicyRequiresOrgLint,
    OVPolicyRequiresCountryLint,
    SubjectCountryNotIsoLint,
]

Predicate = Callable[[LintMetadata], bool]


class _InitGuard:
    """Runs a lint's initialize() at most once and remembers the outcome."""

    __slots__ = ("_done", "_error", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = False
        self._error: LintInitializationError | None = None

    def run(self, entry: LintMetadata) -> LintInitializationError | None:
        if self._done:
            return self._error
        with self._lock:
            if not self._done:
                initialize = getattr(entry.lint, "initialize", None)
                try:
                    if initialize is not None:
                        initialize()
                except Exception as exc:
                    self._error = LintInitializationError(entry.name, str(exc) or type(exc).__name__)
                    self._error.__cause__ = exc
                    log.error("Lint %s failed to initialize: %s", entry.name, exc)
                self._done = True
        return self._error


class LintRegistry:
    """Catalog of lints keyed by unique name, iterated in ascending name order."""

    def __init__(self) -> None:
        self._entries: dict[str, LintMetadata] = {}
        self._ordered: tuple[LintMetadata, ...] | None = None
        self._guards: dict[str, _InitGuard] = {}

    # --- Build phase ---

    def register(self, entry: LintMetadata) -> None:
        """Add *entry*. Duplicate names are a fatal configuration error."""
        if self._ordered is not None:
            raise RegistryFrozenError(entry.name)
        if entry.name in self._entries:
            raise DuplicateLintError(entry.name)
        self._entries[entry.name] = entry

    def register_lint(self, lint: Any) -> LintMetadata:
        entry = LintMetadata.from_lint(lint)
        self.register(entry)
        return entry

    def freeze(self) -> LintRegistry:
        """End the build phase. Safe to call more than once."""
        if self._ordered is None:
            self._ordered = tuple(self._entries[name] for name in sorted(self._entries))
            self._guards = {name: _InitGuard() for name in self._entries}
            log.debug("Lint registry frozen with %d lints", len(self._ordered))
        return self

    @property
    def frozen(self) -> bool:
        return self._ordered is not None

    # --- Read phase ---

    def _sorted(self) -> tuple[LintMetadata, ...]:
        if self._ordered is not None:
            return self._ordered
        return tuple(self._entries[name] for name in sorted(self._entries))

    def all(self) -> Iterator[LintMetadata]:
        """Yield every entry in ascending name order. Call again to restart."""
        yield from self._sorted()

    def filter(self, predicate: Predicate) -> Iterator[LintMetadata]:
        """Yield the entries matching *predicate*, in ascending name order."""
        return (entry for entry in self._sorted() if predicate(entry))

    def get(self, name: str) -> LintMetadata:
        try:
            return self._entries[name]
        except KeyError:
            raise LintNotFoundError(name) from None

    def names(self) -> list[str]:
        return [entry.name for entry in self._sorted()]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[LintMetadata]:
        return self.all()

    def describe(self) -> list[LintDescriptor]:
        return [entry.describe() for entry in self._sorted()]

    def to_json_lines(self) -> str:
        """One JSON object per lint, in name order, for --list-lints-json."""
        lines = [
            json.dumps(d.model_dump(mode="json"), separators=(",", ":")) for d in self.describe()
        ]
        return "\n".join(lines) + ("\n" if lines else "")

    def ensure_initialized(self, name: str) -> LintInitializationError | None:
        """Initialize lint *name* once for the registry's lifetime.

        Returns the cached LintInitializationError if initialization failed,
        otherwise None. Concurrent first calls block on a per-lint lock;
        later calls return without locking.
        """
        if self._ordered is None:
            msg = "Lint registry must be frozen before lints are initialized"
            raise RegistryStateError(msg)
        try:
            guard = self._guards[name]
        except KeyError:
            raise LintNotFoundError(name) from None
        return guard.run(self._entries[name])


# --- Predicates for filter() ---


def by_source(*sources: LintSource) -> Predicate:
    wanted = frozenset(sources)
    return lambda entry: entry.source in wanted


def by_names(names: Iterable[str]) -> Predicate:
    wanted = frozenset(names)
    return lambda entry: entry.name in wanted


def effective_between(start: datetime, end: datetime) -> Predicate:
    """Entries whose effective date falls in [start, end)."""
    return lambda entry: start <= entry.effective_date < end


# --- Construction ---


def build_registry(lint_classes: Iterable[type[Any]] | None = None) -> LintRegistry:
    """Instantiate each lint class, register it, and return the frozen registry."""
    registry = LintRegistry()
    for cls in LINT_CLASSES if lint_classes is None else lint_classes:
        registry.register_lint(cls())
    return registry.freeze()


_default_registry: LintRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> LintRegistry:
    """Process-wide registry of the built-in lints, built on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = build_registry(LINT_CLASSES)
    return _default_registry
