# SPDX-License-Identifier: MIT
"""Lint: root CAs issued before 2011 with an RSA modulus under 2048 bits (BRs 6.1.5)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cryptography.hazmat.primitives.asymmetric import rsa

from certlint.lints.base import LintSource
from certlint.lints.result import LintResult, LintStatus
from certlint.lints.util import NO_RSA1024_ROOT_DATE, ZERO_DATE

if TYPE_CHECKING:
    from certlint.certificate import Certificate

MIN_ROOT_RSA_MODULUS_BITS = 2048


class OldRootCaRsaModulusLint:
    """In a validity period beginning on or before 31 Dec 2010, RSA root CAs MUST use 2048 bits."""

    name = "e_old_root_ca_rsa_mod_less_than_2048_bits"
    description = (
        "In a validity period beginning on or before 31 Dec 2010, root CA certificates "
        "using RSA public key algorithm MUST use a 2048 bit modulus"
    )
    citation = "BRs: 6.1.5"
    source = LintSource.CABF_BASELINE_REQUIREMENTS
    effective_date = ZERO_DATE

    def check_applies(self, cert: Certificate) -> bool:
        return (
            cert.public_key_algorithm == "RSA"
            and cert.is_root_ca
            and cert.not_before < NO_RSA1024_ROOT_DATE
        )

    def execute(self, cert: Certificate) -> LintResult:
        key = cert.public_key
        if not isinstance(key, rsa.RSAPublicKey):
            return LintResult(LintStatus.FATAL, details="public key is not RSA")
        if key.key_size < MIN_ROOT_RSA_MODULUS_BITS:
            return LintResult(LintStatus.ERROR, details=f"modulus is {key.key_size} bits")
        return LintResult(LintStatus.PASS)
