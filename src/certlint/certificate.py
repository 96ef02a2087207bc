# SPDX-License-Identifier: MIT
"""Read-only certificate view handed to lints, backed by ``cryptography``.

Decoding DER/PEM is delegated to ``cryptography.x509``; this module only
exposes the fields lints read (names, validity, policies, key material,
CA-ness) under stable names. Nothing here mutates the wrapped certificate.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa
from cryptography.x509.oid import ExtensionOID

from certlint.errors import CertificateParseError

_T = TypeVar("_T")


def _or_default(fn: Callable[[], _T], default: _T) -> _T:
    """Evaluate *fn*, falling back to *default* on malformed certificate content."""
    try:
        return fn()
    except (ValueError, UnsupportedAlgorithm):
        return default


class Certificate:
    """A parsed X.509 certificate as seen by lints."""

    def __init__(self, cert: x509.Certificate) -> None:
        self._cert = cert
        self._raw = cert.public_bytes(serialization.Encoding.DER)

    @classmethod
    def from_der(cls, data: bytes) -> Certificate:
        try:
            return cls(x509.load_der_x509_certificate(data))
        except ValueError as exc:
            msg = f"Could not parse DER certificate: {exc}"
            raise CertificateParseError(msg) from exc

    @classmethod
    def from_pem(cls, data: bytes) -> Certificate:
        try:
            return cls(x509.load_pem_x509_certificate(data))
        except ValueError as exc:
            msg = f"Could not parse PEM certificate: {exc}"
            raise CertificateParseError(msg) from exc

    @classmethod
    def from_base64(cls, text: str) -> Certificate:
        """Parse base64-encoded DER, as found in batch input records.

        Line breaks are ignored so wrapped encodings are accepted; any other
        character outside the base64 alphabet is rejected.
        """
        try:
            der = base64.b64decode(text.replace("\r", "").replace("\n", ""), validate=True)
        except (binascii.Error, ValueError) as exc:
            msg = f"Could not base64-decode certificate: {exc}"
            raise CertificateParseError(msg) from exc
        return cls.from_der(der)

    def __repr__(self) -> str:
        return f"Certificate(sha256={self.fingerprint_sha256[:16]}...)"

    # --- Raw material ---

    @property
    def native(self) -> x509.Certificate:
        """The underlying ``cryptography`` certificate object."""
        return self._cert

    @property
    def raw(self) -> bytes:
        return self._raw

    @property
    def fingerprint_sha256(self) -> str:
        return self._cert.fingerprint(hashes.SHA256()).hex()

    @property
    def serial_number(self) -> int:
        return self._cert.serial_number

    @property
    def version(self) -> str:
        return self._cert.version.name

    # --- Validity ---

    @property
    def not_before(self) -> datetime:
        return self._cert.not_valid_before_utc

    @property
    def not_after(self) -> datetime:
        return self._cert.not_valid_after_utc

    # --- Names ---

    @property
    def subject(self) -> x509.Name:
        return self._cert.subject

    @property
    def issuer(self) -> x509.Name:
        return self._cert.issuer

    @property
    def raw_subject(self) -> bytes:
        return self._cert.subject.public_bytes()

    @property
    def raw_issuer(self) -> bytes:
        return self._cert.issuer.public_bytes()

    # --- Extensions ---

    def extension(self, oid: x509.ObjectIdentifier) -> x509.Extension[Any] | None:
        """Return the extension with *oid*, or None when absent."""
        try:
            return self._cert.extensions.get_extension_for_oid(oid)
        except x509.ExtensionNotFound:
            return None

    @property
    def policy_identifiers(self) -> list[str]:
        """Dotted OIDs asserted in the certificatePolicies extension."""
        ext = self.extension(ExtensionOID.CERTIFICATE_POLICIES)
        if ext is None:
            return []
        return [p.policy_identifier.dotted_string for p in ext.value]

    @property
    def explicit_texts(self) -> list[list[str]]:
        """UserNotice explicitText values, grouped per asserted policy."""
        ext = self.extension(ExtensionOID.CERTIFICATE_POLICIES)
        if ext is None:
            return []
        grouped: list[list[str]] = []
        for policy in ext.value:
            texts = [
                q.explicit_text
                for q in policy.policy_qualifiers or []
                if isinstance(q, x509.UserNotice) and q.explicit_text is not None
            ]
            grouped.append(texts)
        return grouped

    # --- Key material ---

    @property
    def public_key(self) -> Any:
        return self._cert.public_key()

    @property
    def public_key_algorithm(self) -> str:
        key = _or_default(self._cert.public_key, None)
        if isinstance(key, rsa.RSAPublicKey):
            return "RSA"
        if isinstance(key, ec.EllipticCurvePublicKey):
            return "EC"
        if isinstance(key, dsa.DSAPublicKey):
            return "DSA"
        if isinstance(key, ed25519.Ed25519PublicKey):
            return "Ed25519"
        if isinstance(key, ed448.Ed448PublicKey):
            return "Ed448"
        return "unknown"

    # --- Classification ---

    @property
    def is_ca(self) -> bool:
        ext = self.extension(ExtensionOID.BASIC_CONSTRAINTS)
        return ext is not None and bool(ext.value.ca)

    @property
    def is_self_signed(self) -> bool:
        """Subject equals issuer and the signature verifies under the certificate's own key."""
        if self._cert.subject != self._cert.issuer:
            return False
        try:
            self._cert.verify_directly_issued_by(self._cert)
        except (ValueError, TypeError, InvalidSignature, UnsupportedAlgorithm):
            return False
        return True

    @property
    def is_root_ca(self) -> bool:
        return self.is_ca and self.is_self_signed

    @property
    def is_subscriber(self) -> bool:
        return not self.is_ca and not self.is_self_signed

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly parsed view used in batch output records."""
        return {
            "version": self.version,
            "serial_number": str(self.serial_number),
            "subject": _or_default(lambda: self._cert.subject.rfc4514_string(), ""),
            "issuer": _or_default(lambda: self._cert.issuer.rfc4514_string(), ""),
            "not_before": self.not_before.isoformat(),
            "not_after": self.not_after.isoformat(),
            "public_key_algorithm": self.public_key_algorithm,
            "policy_identifiers": _or_default(lambda: self.policy_identifiers, []),
            "is_ca": _or_default(lambda: self.is_ca, False),
            "fingerprint_sha256": self.fingerprint_sha256,
        }
