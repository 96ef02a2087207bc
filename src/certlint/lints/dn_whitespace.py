# SPDX-License-Identifier: MIT
"""Lints: leading/trailing whitespace in issuer and subject attribute values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from certlint.lints.base import LintSource
from certlint.lints.result import LintResult, LintStatus
from certlint.lints.util import ZERO_DATE, rdn_whitespace

if TYPE_CHECKING:
    from cryptography import x509

    from certlint.certificate import Certificate


class _DNWhitespaceLint:
    """Shared logic: WARN when a DN attribute value has whitespace at one end."""

    field = "issuer"
    position = "leading"

    citation = "AWSLabs certlint"
    source = LintSource.AWSLABS
    effective_date = ZERO_DATE

    def check_applies(self, cert: Certificate) -> bool:
        return True

    def execute(self, cert: Certificate) -> LintResult:
        try:
            name: x509.Name = cert.issuer if self.field == "issuer" else cert.subject
            leading, trailing = rdn_whitespace(name)
        except ValueError as exc:
            return LintResult(LintStatus.FATAL, details=f"could not decode {self.field} DN: {exc}")
        found = leading if self.position == "leading" else trailing
        if found:
            return LintResult(
                LintStatus.WARN,
                details=f"{self.field} DN attribute value has {self.position} whitespace",
            )
        return LintResult(LintStatus.PASS)


class IssuerDNLeadingWhitespaceLint(_DNWhitespaceLint):
    name = "w_issuer_dn_leading_whitespace"
    description = (
        "AttributeValue in issuer RelativeDistinguishedName sequence "
        "SHOULD NOT have leading whitespace"
    )


class IssuerDNTrailingWhitespaceLint(_DNWhitespaceLint):
    position = "trailing"

    name = "w_issuer_dn_trailing_whitespace"
    description = (
        "AttributeValue in issuer RelativeDistinguishedName sequence "
        "SHOULD NOT have trailing whitespace"
    )


class SubjectDNLeadingWhitespaceLint(_DNWhitespaceLint):
    field = "subject"

    name = "w_subject_dn_leading_whitespace"
    description = (
        "AttributeValue in subject RelativeDistinguishedName sequence "
        "SHOULD NOT have leading whitespace"
    )


class SubjectDNTrailingWhitespaceLint(_DNWhitespaceLint):
    field = "subject"
    position = "trailing"

    name = "w_subject_dn_trailing_whitespace"
    description = (
        "AttributeValue in subject RelativeDistinguishedName sequence "
        "SHOULD NOT have trailing whitespace"
    )
