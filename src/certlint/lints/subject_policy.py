# SPDX-License-Identifier: MIT
"""Lints: subject content required by the asserted CA/B Forum policy OID (BRs 7.1.4.2.2, 7.1.6.1)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cryptography.x509.oid import NameOID

from certlint.lints.base import LintSource
from certlint.lints.result import LintResult, LintStatus
from certlint.lints.util import (
    BR_INDIVIDUAL_VALIDATED_OID,
    BR_ORGANIZATION_VALIDATED_OID,
    CABF_EFFECTIVE_DATE,
    CABF_GIVEN_NAME_DATE,
    has_given_name_or_surname,
    name_has_attribute,
)

if TYPE_CHECKING:
    from certlint.certificate import Certificate


class GivenNameSurnameRequiresIVPolicyLint:
    """Subscriber certs naming a person must assert the individual-validated policy."""

    name = "e_sub_cert_given_name_surname_contains_correct_policy"
    description = (
        "Subscriber Certificate: A certificate containing a subject:givenName field or "
        "subject:surname field MUST contain the (2.23.140.1.2.3) certPolicy OID."
    )
    citation = "BRs: 7.1.4.2.2"
    source = LintSource.CABF_BASELINE_REQUIREMENTS
    effective_date = CABF_GIVEN_NAME_DATE

    def check_applies(self, cert: Certificate) -> bool:
        return cert.is_subscriber and has_given_name_or_surname(cert.subject)

    def execute(self, cert: Certificate) -> LintResult:
        if BR_INDIVIDUAL_VALIDATED_OID in cert.policy_identifiers:
            return LintResult(LintStatus.PASS)
        return LintResult(LintStatus.ERROR)


class OVPolicyRequiresOrgLint:
    name = "e_cert_policy_ov_requires_org"
    description = (
        "If certificate policy 2.23.140.1.2.2 is included, "
        "organizationName must be included in subject."
    )
    citation = "BRs: 7.1.6.1"
    source = LintSource.CABF_BASELINE_REQUIREMENTS
    effective_date = CABF_EFFECTIVE_DATE

    def check_applies(self, cert: Certificate) -> bool:
        return BR_ORGANIZATION_VALIDATED_OID in cert.policy_identifiers

    def execute(self, cert: Certificate) -> LintResult:
        if name_has_attribute(cert.subject, NameOID.ORGANIZATION_NAME):
            return LintResult(LintStatus.PASS)
        return LintResult(LintStatus.ERROR)


class OVPolicyRequiresCountryLint:
    name = "e_cert_policy_ov_requires_country"
    description = (
        "If certificate policy 2.23.140.1.2.2 is included, "
        "countryName must be included in subject."
    )
    citation = "BRs: 7.1.6.1"
    source = LintSource.CABF_BASELINE_REQUIREMENTS
    effective_date = CABF_EFFECTIVE_DATE

    def check_applies(self, cert: Certificate) -> bool:
        return BR_ORGANIZATION_VALIDATED_OID in cert.policy_identifiers

    def execute(self, cert: Certificate) -> LintResult:
        if name_has_attribute(cert.subject, NameOID.COUNTRY_NAME):
            return LintResult(LintStatus.PASS)
        return LintResult(LintStatus.ERROR)
