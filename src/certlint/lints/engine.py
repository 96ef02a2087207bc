# SPDX-License-Identifier: MIT
"""Lint engine — selects lints from the registry and runs them against a certificate."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from certlint.errors import LintConfigWarning, RegistryStateError
from certlint.lints.base import LintMetadata, LintSource
from certlint.lints.result import LintResult, LintStatus, ResultSet
from certlint.lints.util import ZERO_DATE

if TYPE_CHECKING:
    from certlint.certificate import Certificate
    from certlint.lints.registry import LintRegistry

log = logging.getLogger(__name__)

_NOT_EFFECTIVE = LintResult(LintStatus.NE)
_NOT_APPLICABLE = LintResult(LintStatus.NA)


def issuance_time(cert: Certificate) -> datetime:
    """Default reference time for temporal gating: the certificate's notBefore."""
    return cert.not_before


@dataclass(frozen=True)
class LintConfig:
    """Which lints to run and which timestamp gates their effective dates.

    ``include`` is an allow-list (None means every lint), ``exclude`` a
    deny-list, ``sources`` restricts to the given source families (None means
    all). Excluded lints are absent from the result set, not marked NA.
    """

    include: frozenset[str] | None = None
    exclude: frozenset[str] = frozenset()
    sources: frozenset[LintSource] | None = None
    reference_time: Callable[[Any], datetime] = issuance_time

    def selects(self, entry: LintMetadata) -> bool:
        if self.include is not None and entry.name not in self.include:
            return False
        if entry.name in self.exclude:
            return False
        return self.sources is None or entry.source in self.sources


@dataclass(frozen=True)
class Selection:
    """A config resolved against a registry: the ordered entries to run."""

    entries: tuple[LintMetadata, ...]
    unknown_names: tuple[str, ...] = ()
    reference_time: Callable[[Any], datetime] = issuance_time

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]


class LintEngine:
    """Runs the selected lints of a frozen registry against certificates.

    ``run`` may be called concurrently from many threads. It reads the
    registry without locking; the only lock taken is a lint's one-time
    initialization guard, and only until that lint has initialized.
    """

    def __init__(self, registry: LintRegistry | None = None) -> None:
        if registry is None:
            from certlint.lints.registry import default_registry

            registry = default_registry()
        if not registry.frozen:
            msg = "LintEngine requires a frozen registry; call registry.freeze() first"
            raise RegistryStateError(msg)
        self._registry = registry
        self._everything = Selection(entries=tuple(registry.all()))

    @property
    def registry(self) -> LintRegistry:
        return self._registry

    def select(self, config: LintConfig | None = None) -> Selection:
        """Resolve *config* against the registry.

        Names in the allow- or deny-list that the registry does not know are
        reported through a LintConfigWarning; the rest of the config applies.
        """
        if config is None:
            return self._everything
        named = (config.include or frozenset()) | config.exclude
        unknown = tuple(sorted(n for n in named if n not in self._registry))
        if unknown:
            msg = f"Unknown lint names in selection: {', '.join(unknown)}"
            log.warning("Unknown lint names in selection: %s", ", ".join(unknown))
            warnings.warn(msg, LintConfigWarning, stacklevel=2)
        entries = tuple(self._registry.filter(config.selects))
        return Selection(
            entries=entries,
            unknown_names=unknown,
            reference_time=config.reference_time,
        )

    def run(
        self,
        cert: Certificate,
        config: LintConfig | Selection | None = None,
    ) -> ResultSet:
        """Evaluate every selected lint against *cert*, in registry order.

        A LintConfig is resolved with select() on every call, repeating any
        unknown-name warning. When linting many certificates, call select()
        once and pass the resulting Selection.
        """
        selection = config if isinstance(config, Selection) else self.select(config)
        reference = selection.reference_time(cert)
        return ResultSet.from_results(
            (entry.name, self._evaluate(entry, cert, reference)) for entry in selection.entries
        )

    def _evaluate(self, entry: LintMetadata, cert: Certificate, reference: datetime) -> LintResult:
        if entry.effective_date != ZERO_DATE and reference < entry.effective_date:
            return _NOT_EFFECTIVE

        init_error = self._registry.ensure_initialized(entry.name)
        if init_error is not None:
            return LintResult(LintStatus.INIT_FAILED, details=init_error.reason)

        try:
            if not entry.lint.check_applies(cert):
                return _NOT_APPLICABLE
            outcome = entry.lint.execute(cert)
        except Exception as exc:
            log.warning("Lint %s raised %s: %s", entry.name, type(exc).__name__, exc)
            log.debug("Traceback for lint %s", entry.name, exc_info=True)
            return LintResult(
                LintStatus.FATAL,
                details=f"internal error: {type(exc).__name__}: {exc}",
                internal_error=True,
            )
        return _as_verdict(entry.name, outcome)

    def check_gate(self, result_set: ResultSet, fail_on: LintStatus) -> bool:
        """Return True if any verdict meets or exceeds *fail_on*."""
        return check_gate(result_set, fail_on)


def _as_verdict(name: str, outcome: object) -> LintResult:
    if isinstance(outcome, LintStatus):
        outcome = LintResult(outcome)
    if isinstance(outcome, LintResult) and outcome.status.is_verdict:
        return outcome
    log.warning("Lint %s returned %r instead of a verdict", name, outcome)
    return LintResult(
        LintStatus.FATAL,
        details=f"internal error: lint returned {outcome!r}",
        internal_error=True,
    )


def check_gate(result_set: ResultSet, fail_on: LintStatus) -> bool:
    """Return True if any verdict in *result_set* meets or exceeds *fail_on*."""
    if not fail_on.is_verdict:
        msg = f"fail_on must be a verdict status, got {fail_on.value!r}"
        raise ValueError(msg)
    return any(r.status.is_verdict and r.status >= fail_on for r in result_set.results.values())
