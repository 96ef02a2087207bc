# SPDX-License-Identifier: MIT
"""Tests for the issuer/subject DN whitespace lints."""

from __future__ import annotations

from cryptography.x509.oid import NameOID

from certlint.lints.dn_whitespace import (
    IssuerDNLeadingWhitespaceLint,
    IssuerDNTrailingWhitespaceLint,
    SubjectDNLeadingWhitespaceLint,
    SubjectDNTrailingWhitespaceLint,
)
from certlint.lints.result import LintStatus
from certlint.lints.util import rdn_whitespace

_LEADING_ISSUER = (
    (NameOID.COUNTRY_NAME, "US"),
    (NameOID.ORGANIZATION_NAME, " Leading Space CA"),
    (NameOID.COMMON_NAME, "Issuing CA"),
)
_TRAILING_ISSUER = (
    (NameOID.ORGANIZATION_NAME, "Trailing Space CA "),
    (NameOID.COMMON_NAME, "Issuing CA"),
)


class TestIssuerLeadingWhitespace:
    def test_always_applies(self, make_cert) -> None:
        assert IssuerDNLeadingWhitespaceLint().check_applies(make_cert())

    def test_leading_space_warns(self, make_cert) -> None:
        cert = make_cert(issuer=_LEADING_ISSUER)
        result = IssuerDNLeadingWhitespaceLint().execute(cert)
        assert result.status is LintStatus.WARN
        assert "leading" in (result.details or "")

    def test_clean_issuer_passes(self, make_cert) -> None:
        result = IssuerDNLeadingWhitespaceLint().execute(make_cert())
        assert result.status is LintStatus.PASS

    def test_trailing_space_is_not_leading(self, make_cert) -> None:
        cert = make_cert(issuer=_TRAILING_ISSUER)
        assert IssuerDNLeadingWhitespaceLint().execute(cert).status is LintStatus.PASS


class TestIssuerTrailingWhitespace:
    def test_trailing_space_warns(self, make_cert) -> None:
        cert = make_cert(issuer=_TRAILING_ISSUER)
        assert IssuerDNTrailingWhitespaceLint().execute(cert).status is LintStatus.WARN

    def test_leading_space_is_not_trailing(self, make_cert) -> None:
        cert = make_cert(issuer=_LEADING_ISSUER)
        assert IssuerDNTrailingWhitespaceLint().execute(cert).status is LintStatus.PASS


class TestSubjectWhitespace:
    def test_subject_leading(self, make_cert) -> None:
        cert = make_cert(subject=((NameOID.COMMON_NAME, "\texample.com"),))
        assert SubjectDNLeadingWhitespaceLint().execute(cert).status is LintStatus.WARN
        assert SubjectDNTrailingWhitespaceLint().execute(cert).status is LintStatus.PASS

    def test_subject_trailing(self, make_cert) -> None:
        cert = make_cert(subject=((NameOID.COMMON_NAME, "example.com "),))
        assert SubjectDNTrailingWhitespaceLint().execute(cert).status is LintStatus.WARN

    def test_subject_lints_ignore_issuer(self, make_cert) -> None:
        cert = make_cert(issuer=_LEADING_ISSUER)
        assert SubjectDNLeadingWhitespaceLint().execute(cert).status is LintStatus.PASS


class TestRdnWhitespace:
    def test_flags(self, make_cert) -> None:
        cert = make_cert(
            subject=(
                (NameOID.ORGANIZATION_NAME, " Org"),
                (NameOID.COMMON_NAME, "name "),
            )
        )
        assert rdn_whitespace(cert.subject) == (True, True)

    def test_clean(self, make_cert) -> None:
        assert rdn_whitespace(make_cert().subject) == (False, False)

    def test_metadata(self) -> None:
        lint = IssuerDNLeadingWhitespaceLint()
        assert lint.name == "w_issuer_dn_leading_whitespace"
        assert lint.source == "AWSLabs"
