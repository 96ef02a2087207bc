# SPDX-License-Identifier: MIT
"""Lint status taxonomy, per-lint results, and the per-certificate result set."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from pydantic import BaseModel


class LintStatus(StrEnum):
    """Outcome of one lint against one certificate.

    PASS < INFO < WARN < ERROR < FATAL are the verdicts a lint may return and
    are totally ordered by severity. NA, NE and INIT_FAILED are assigned by the
    engine and sit outside the ordering. RESERVED is a placeholder that never
    appears in a finished ResultSet.
    """

    RESERVED = "reserved"
    NA = "NA"
    NE = "NE"
    PASS = "pass"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"
    INIT_FAILED = "init_failed"

    @property
    def is_verdict(self) -> bool:
        return self in _SEVERITY

    @property
    def severity(self) -> int | None:
        """Rank within the verdict ordering, or None for engine-assigned statuses."""
        return _SEVERITY.get(self)

    def _rank(self, other: object) -> tuple[int, int]:
        # str operands must not fall back to lexical comparison.
        if not isinstance(other, LintStatus):
            msg = f"cannot order {self.value!r} against {type(other).__name__}"
            raise TypeError(msg)
        if self.severity is None or other.severity is None:
            msg = f"{self.value!r} and {other.value!r} are not both verdicts"
            raise TypeError(msg)
        return self.severity, other.severity

    def __lt__(self, other: object) -> bool:
        ranks = self._rank(other)
        return ranks[0] < ranks[1]

    def __le__(self, other: object) -> bool:
        ranks = self._rank(other)
        return ranks[0] <= ranks[1]

    def __gt__(self, other: object) -> bool:
        ranks = self._rank(other)
        return ranks[0] > ranks[1]

    def __ge__(self, other: object) -> bool:
        ranks = self._rank(other)
        return ranks[0] >= ranks[1]


_SEVERITY: dict[LintStatus, int] = {
    LintStatus.PASS: 0,
    LintStatus.INFO: 1,
    LintStatus.WARN: 2,
    LintStatus.ERROR: 3,
    LintStatus.FATAL: 4,
}

VERDICTS: tuple[LintStatus, ...] = tuple(_SEVERITY)


@dataclass(frozen=True)
class LintResult:
    """The outcome recorded for a single lint.

    ``internal_error`` is set only by the engine, when the lint itself faulted,
    so that a contained crash can be told apart from a normative FATAL.
    """

    status: LintStatus
    details: str | None = None
    internal_error: bool = False


class Summary(BaseModel):
    """Counts and ordered name lists derived from a ResultSet."""

    passed: int = 0
    info: int = 0
    warn: int = 0
    error: int = 0
    fatal: int = 0
    not_applicable: int = 0
    not_effective: int = 0
    init_failed: int = 0
    infos: list[str] = []
    warnings: list[str] = []
    errors: list[str] = []
    fatals: list[str] = []
    init_failures: list[str] = []
    internal_errors: list[str] = []


_COUNT_FIELDS: dict[LintStatus, str] = {
    LintStatus.PASS: "passed",
    LintStatus.INFO: "info",
    LintStatus.WARN: "warn",
    LintStatus.ERROR: "error",
    LintStatus.FATAL: "fatal",
    LintStatus.NA: "not_applicable",
    LintStatus.NE: "not_effective",
    LintStatus.INIT_FAILED: "init_failed",
}


@dataclass(frozen=True)
class ResultSet:
    """Final status of every selected lint for one certificate, in name order."""

    results: Mapping[str, LintResult]
    infos: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    fatals: tuple[str, ...] = ()
    init_failures: tuple[str, ...] = ()
    internal_errors: tuple[str, ...] = ()

    @classmethod
    def from_results(cls, results: Iterable[tuple[str, LintResult]]) -> ResultSet:
        """Build a ResultSet from (name, result) pairs already in registry order."""
        ordered: dict[str, LintResult] = {}
        buckets: dict[LintStatus, list[str]] = {
            LintStatus.INFO: [],
            LintStatus.WARN: [],
            LintStatus.ERROR: [],
            LintStatus.FATAL: [],
            LintStatus.INIT_FAILED: [],
        }
        internal: list[str] = []
        for name, result in results:
            if result.status is LintStatus.RESERVED:
                msg = f"Lint {name!r} still holds the reserved placeholder status"
                raise ValueError(msg)
            if name in ordered:
                msg = f"Duplicate result for lint {name!r}"
                raise ValueError(msg)
            ordered[name] = result
            if result.status in buckets:
                buckets[result.status].append(name)
            if result.internal_error:
                internal.append(name)
        return cls(
            results=MappingProxyType(ordered),
            infos=tuple(buckets[LintStatus.INFO]),
            warnings=tuple(buckets[LintStatus.WARN]),
            errors=tuple(buckets[LintStatus.ERROR]),
            fatals=tuple(buckets[LintStatus.FATAL]),
            init_failures=tuple(buckets[LintStatus.INIT_FAILED]),
            internal_errors=tuple(internal),
        )

    def __len__(self) -> int:
        return len(self.results)

    def __contains__(self, name: object) -> bool:
        return name in self.results

    def __iter__(self) -> Iterator[str]:
        return iter(self.results)

    def __getitem__(self, name: str) -> LintResult:
        return self.results[name]

    def status(self, name: str) -> LintStatus:
        return self.results[name].status

    def statuses(self) -> dict[str, LintStatus]:
        return {name: r.status for name, r in self.results.items()}

    def summary(self) -> Summary:
        """Count each status and list the non-passing lints in registry order."""
        counts: dict[str, int] = {}
        for r in self.results.values():
            field = _COUNT_FIELDS[r.status]
            counts[field] = counts.get(field, 0) + 1
        return Summary(
            **counts,
            infos=list(self.infos),
            warnings=list(self.warnings),
            errors=list(self.errors),
            fatals=list(self.fatals),
            init_failures=list(self.init_failures),
            internal_errors=list(self.internal_errors),
        )

    def max_verdict(self) -> LintStatus | None:
        """Return the most severe verdict recorded, or None if there is none."""
        verdicts = [r.status for r in self.results.values() if r.status.is_verdict]
        return max(verdicts) if verdicts else None

    def to_dict(self) -> dict[str, str]:
        """Serialize as lint name -> status string."""
        return {name: r.status.value for name, r in self.results.items()}

    def details(self) -> dict[str, str]:
        """Return lint name -> details for entries that carry details."""
        return {name: r.details for name, r in self.results.items() if r.details}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))
