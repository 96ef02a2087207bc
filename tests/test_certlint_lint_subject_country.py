# SPDX-License-Identifier: MIT
"""Tests for e_subject_country_not_iso and its lazily loaded code table."""

from __future__ import annotations

import pytest
from cryptography.x509.oid import NameOID

from certlint.lints import LintEngine
from certlint.lints.registry import LintRegistry
from certlint.lints.result import LintStatus
from certlint.lints.subject_country import SubjectCountryNotIsoLint, load_country_codes


def _country(code: str) -> tuple:
    return ((NameOID.COUNTRY_NAME, code), (NameOID.COMMON_NAME, "example.com"))


class TestLoadCountryCodes:
    def test_table_has_assigned_codes(self) -> None:
        codes = load_country_codes()
        assert {"US", "GB", "DE", "JP"} <= codes
        assert "ZZ" not in codes
        assert all(len(code) == 2 for code in codes)

    def test_missing_table_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_country_codes("no_such_table.txt")


class TestSubjectCountryNotIso:
    def test_not_applicable_without_country(self, make_cert) -> None:
        assert not SubjectCountryNotIsoLint().check_applies(make_cert())

    def test_known_code_passes(self, make_cert) -> None:
        lint = SubjectCountryNotIsoLint()
        lint.initialize()
        cert = make_cert(subject=_country("DE"))
        assert lint.check_applies(cert)
        assert lint.execute(cert).status is LintStatus.PASS

    def test_unspecified_code_passes(self, make_cert) -> None:
        lint = SubjectCountryNotIsoLint()
        lint.initialize()
        assert lint.execute(make_cert(subject=_country("XX"))).status is LintStatus.PASS

    def test_unknown_code_errors(self, make_cert) -> None:
        lint = SubjectCountryNotIsoLint()
        lint.initialize()
        result = lint.execute(make_cert(subject=_country("ZZ")))
        assert result.status is LintStatus.ERROR
        assert "ZZ" in (result.details or "")

    def test_engine_initializes_before_first_use(self, make_cert) -> None:
        registry = LintRegistry()
        registry.register_lint(SubjectCountryNotIsoLint())
        engine = LintEngine(registry.freeze())
        rs = engine.run(make_cert(subject=_country("US")))
        assert rs.status(SubjectCountryNotIsoLint.name) is LintStatus.PASS

    def test_broken_table_reports_init_failed(self, make_cert) -> None:
        registry = LintRegistry()
        registry.register_lint(SubjectCountryNotIsoLint(resource="no_such_table.txt"))
        engine = LintEngine(registry.freeze())
        for _ in range(3):
            rs = engine.run(make_cert(subject=_country("US")))
            assert rs.status(SubjectCountryNotIsoLint.name) is LintStatus.INIT_FAILED
            assert rs.init_failures == (SubjectCountryNotIsoLint.name,)
