# SPDX-License-Identifier: MIT
"""Lint sources, the lint capability protocol, and catalog entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel

if TYPE_CHECKING:
    from certlint.certificate import Certificate
    from certlint.lints.result import LintResult, LintStatus


class LintSource(StrEnum):
    """Normative document family a lint enforces."""

    UNKNOWN = "Unknown"
    RFC5280 = "RFC5280"
    RFC5480 = "RFC5480"
    RFC5891 = "RFC5891"
    CABF_BASELINE_REQUIREMENTS = "CABF_BR"
    CABF_EV_GUIDELINES = "CABF_EV"
    MOZILLA_ROOT_STORE_POLICY = "Mozilla"
    APPLE_ROOT_STORE_POLICY = "Apple"
    ETSI_ESI = "ETSI_ESI"
    COMMUNITY = "Community"
    AWSLABS = "AWSLabs"


@runtime_checkable
class LintCheck(Protocol):
    """Protocol that every lint must satisfy.

    A lint may also define ``initialize(self) -> None`` for one-time setup;
    the engine calls it at most once, before the first check_applies().
    """

    def check_applies(self, cert: Certificate) -> bool: ...

    def execute(self, cert: Certificate) -> LintResult | LintStatus: ...


class LintDescriptor(BaseModel):
    """Serializable view of a catalog entry, used for lint listings."""

    name: str
    description: str
    citation: str
    source: LintSource
    effective_date: datetime


@dataclass(frozen=True)
class LintMetadata:
    """Immutable catalog entry binding a lint's metadata to its logic."""

    name: str
    description: str
    citation: str
    source: LintSource
    effective_date: datetime
    lint: LintCheck

    def __post_init__(self) -> None:
        if not self.name:
            msg = "Lint name must not be empty"
            raise ValueError(msg)
        if self.effective_date.tzinfo is None:
            msg = f"Lint {self.name!r}: effective_date must be timezone-aware"
            raise ValueError(msg)

    @classmethod
    def from_lint(cls, lint: Any) -> LintMetadata:
        """Build an entry from a lint whose class carries the metadata attributes."""
        return cls(
            name=lint.name,
            description=lint.description,
            citation=lint.citation,
            source=lint.source,
            effective_date=lint.effective_date,
            lint=lint,
        )

    def describe(self) -> LintDescriptor:
        return LintDescriptor(
            name=self.name,
            description=self.description,
            citation=self.citation,
            source=self.source,
            effective_date=self.effective_date,
        )
