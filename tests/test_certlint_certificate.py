# SPDX-License-Identifier: MIT
"""Tests for certlint.certificate — parsing and the fields lints read."""

from __future__ import annotations

import base64
from datetime import UTC, datetime

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.x509.oid import NameOID

from certlint.certificate import Certificate
from certlint.errors import CertificateParseError


class TestParsing:
    def test_der_round_trip(self, make_cert) -> None:
        cert = make_cert()
        again = Certificate.from_der(cert.raw)
        assert again.fingerprint_sha256 == cert.fingerprint_sha256

    def test_pem(self, make_cert) -> None:
        cert = make_cert()
        pem = cert.native.public_bytes(serialization.Encoding.PEM)
        assert Certificate.from_pem(pem).raw == cert.raw

    def test_base64(self, make_cert) -> None:
        cert = make_cert()
        text = base64.b64encode(cert.raw).decode("ascii")
        assert Certificate.from_base64(text).serial_number == 0x1234ABCD

    def test_base64_with_line_breaks(self, make_cert) -> None:
        cert = make_cert()
        text = base64.encodebytes(cert.raw).decode("ascii").replace("\n", "\r\n")
        assert "\r\n" in text
        assert Certificate.from_base64(text).raw == cert.raw

    def test_base64_with_spaces_rejected(self, make_cert) -> None:
        text = base64.b64encode(make_cert().raw).decode("ascii")
        with pytest.raises(CertificateParseError):
            Certificate.from_base64(text[:10] + " " + text[10:])

    def test_invalid_base64(self) -> None:
        with pytest.raises(CertificateParseError, match="base64"):
            Certificate.from_base64("not base64 at all!!")

    def test_garbage_der(self) -> None:
        with pytest.raises(CertificateParseError, match="DER"):
            Certificate.from_der(b"\x30\x03\x02\x01\x00")

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Certificate.from_pem(b"-----BEGIN CERTIFICATE-----\nAAAA\n-----END CERTIFICATE-----\n")


class TestFields:
    def test_validity(self, make_cert) -> None:
        start = datetime(2018, 5, 1, tzinfo=UTC)
        cert = make_cert(not_before=start)
        assert cert.not_before == start
        assert cert.not_before.tzinfo is not None
        assert cert.not_after > cert.not_before

    def test_version_and_algorithm(self, make_cert) -> None:
        cert = make_cert()
        assert cert.version == "v3"
        assert cert.public_key_algorithm == "EC"

    def test_policies(self, make_cert) -> None:
        cert = make_cert(policies=["2.23.140.1.2.1", ("1.2.3.4", ["notice"])])
        assert cert.policy_identifiers == ["2.23.140.1.2.1", "1.2.3.4"]
        assert cert.explicit_texts == [[], ["notice"]]

    def test_no_policies(self, make_cert) -> None:
        cert = make_cert()
        assert cert.policy_identifiers == []
        assert cert.explicit_texts == []


class TestClassification:
    def test_subscriber(self, make_cert) -> None:
        cert = make_cert()
        assert cert.is_subscriber
        assert not cert.is_ca
        assert not cert.is_self_signed

    def test_root_ca(self, make_cert) -> None:
        cert = make_cert(subject=((NameOID.COMMON_NAME, "Root"),), self_signed=True, ca=True)
        assert cert.is_ca
        assert cert.is_self_signed
        assert cert.is_root_ca
        assert not cert.is_subscriber

    def test_intermediate_is_not_root(self, make_cert) -> None:
        cert = make_cert(ca=True)
        assert cert.is_ca
        assert not cert.is_root_ca

    def test_basic_constraints_false(self, make_cert) -> None:
        assert not make_cert(ca=False).is_ca


class TestToDict:
    def test_fields(self, make_cert) -> None:
        data = make_cert(subject=((NameOID.COMMON_NAME, "example.com"),)).to_dict()
        assert data["subject"] == "CN=example.com"
        assert data["issuer"] == "CN=Test Issuing CA,O=Test CA Org,C=US"
        assert data["serial_number"] == str(0x1234ABCD)
        assert data["not_before"].startswith("2020-01-01T00:00:00")
        assert data["is_ca"] is False
        assert len(data["fingerprint_sha256"]) == 64
