# SPDX-License-Identifier: MIT
"""Shared fixtures: on-the-fly certificates built with cryptography's CertificateBuilder."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from certlint.certificate import Certificate

NameSpec = Sequence[tuple[x509.ObjectIdentifier, str]]
PolicySpec = Sequence[str | tuple[str, Sequence[str]]]

DEFAULT_SUBJECT: NameSpec = ((NameOID.COMMON_NAME, "example.com"),)
DEFAULT_ISSUER: NameSpec = (
    (NameOID.COUNTRY_NAME, "US"),
    (NameOID.ORGANIZATION_NAME, "Test CA Org"),
    (NameOID.COMMON_NAME, "Test Issuing CA"),
)
DEFAULT_NOT_BEFORE = datetime(2020, 1, 1, tzinfo=UTC)


def _name(spec: NameSpec) -> x509.Name:
    return x509.Name([x509.NameAttribute(oid, value) for oid, value in spec])


def _policies(spec: PolicySpec) -> x509.CertificatePolicies:
    infos: list[x509.PolicyInformation] = []
    for item in spec:
        if isinstance(item, str):
            infos.append(x509.PolicyInformation(x509.ObjectIdentifier(item), None))
            continue
        oid, texts = item
        qualifiers: list[Any] = [
            x509.UserNotice(notice_reference=None, explicit_text=text) for text in texts
        ]
        infos.append(x509.PolicyInformation(x509.ObjectIdentifier(oid), qualifiers or None))
    return x509.CertificatePolicies(infos)


@pytest.fixture(scope="session")
def ec_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def make_cert(ec_key: ec.EllipticCurvePrivateKey) -> Callable[..., Certificate]:
    """Factory building a signed Certificate.

    ``self_signed=True`` reuses the subject as issuer; otherwise the issuer is
    a fixed test CA name. ``ca`` adds a critical basicConstraints extension.
    """

    def _make(
        *,
        subject: NameSpec = DEFAULT_SUBJECT,
        issuer: NameSpec | None = None,
        self_signed: bool = False,
        not_before: datetime = DEFAULT_NOT_BEFORE,
        not_after: datetime | None = None,
        ca: bool | None = None,
        policies: PolicySpec | None = None,
        key: Any = None,
    ) -> Certificate:
        private_key = key if key is not None else ec_key
        subject_name = _name(subject)
        if self_signed:
            issuer_name = subject_name
        else:
            issuer_name = _name(issuer if issuer is not None else DEFAULT_ISSUER)
        builder = (
            x509.CertificateBuilder()
            .subject_name(subject_name)
            .issuer_name(issuer_name)
            .public_key(private_key.public_key())
            .serial_number(0x1234ABCD)
            .not_valid_before(not_before)
            .not_valid_after(not_after or not_before + timedelta(days=365))
        )
        if ca is not None:
            builder = builder.add_extension(
                x509.BasicConstraints(ca=ca, path_length=None), critical=True
            )
        if policies is not None:
            builder = builder.add_extension(_policies(policies), critical=False)
        return Certificate(builder.sign(private_key, hashes.SHA256()))

    return _make
