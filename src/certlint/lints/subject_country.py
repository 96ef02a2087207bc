# SPDX-License-Identifier: MIT
"""Lint: subject countryName must be an ISO 3166-1 alpha-2 code (BRs 7.1.4.2.2)."""

from __future__ import annotations

from importlib import resources
from typing import TYPE_CHECKING

from cryptography.x509.oid import NameOID

from certlint.lints.base import LintSource
from certlint.lints.result import LintResult, LintStatus
from certlint.lints.util import CABF_EFFECTIVE_DATE, name_attribute_values

if TYPE_CHECKING:
    from certlint.certificate import Certificate

# User-assigned code the BRs allow when no country applies.
_UNSPECIFIED_COUNTRY = "XX"


def load_country_codes(resource: str = "iso3166_alpha2.txt") -> frozenset[str]:
    """Read the alpha-2 code table shipped in ``certlint.lints.data``."""
    text = resources.files("certlint.lints.data").joinpath(resource).read_text(encoding="utf-8")
    codes = frozenset(
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    )
    if not codes:
        msg = f"Country code table {resource!r} is empty"
        raise ValueError(msg)
    return codes


class SubjectCountryNotIsoLint:
    """Reject countryName values outside the ISO 3166-1 alpha-2 table."""

    name = "e_subject_country_not_iso"
    description = (
        "The country name field MUST contain the two-letter ISO 3166-1 country code "
        "or XX where no country applies"
    )
    citation = "BRs: 7.1.4.2.2"
    source = LintSource.CABF_BASELINE_REQUIREMENTS
    effective_date = CABF_EFFECTIVE_DATE

    def __init__(self, resource: str = "iso3166_alpha2.txt") -> None:
        self._resource = resource
        self._codes: frozenset[str] = frozenset()

    def initialize(self) -> None:
        self._codes = load_country_codes(self._resource) | {_UNSPECIFIED_COUNTRY}

    def check_applies(self, cert: Certificate) -> bool:
        return bool(name_attribute_values(cert.subject, NameOID.COUNTRY_NAME))

    def execute(self, cert: Certificate) -> LintResult:
        for value in name_attribute_values(cert.subject, NameOID.COUNTRY_NAME):
            if value.upper() not in self._codes:
                return LintResult(LintStatus.ERROR, details=f"unknown country code {value!r}")
        return LintResult(LintStatus.PASS)
