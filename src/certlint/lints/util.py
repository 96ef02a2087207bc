# SPDX-License-Identifier: MIT
"""Shared constants and certificate predicates used by individual lints."""

from __future__ import annotations

from datetime import UTC, datetime

from cryptography import x509
from cryptography.x509.oid import NameOID

# --- Effective dates ---

# Sentinel: a lint with this effective date applies to every certificate.
ZERO_DATE = datetime(1970, 1, 1, tzinfo=UTC)

RFC5280_DATE = datetime(2008, 5, 1, tzinfo=UTC)
RFC6818_DATE = datetime(2013, 1, 1, tzinfo=UTC)
NO_RSA1024_ROOT_DATE = datetime(2011, 1, 1, tzinfo=UTC)
CABF_EFFECTIVE_DATE = datetime(2012, 7, 1, tzinfo=UTC)
CABF_V130_DATE = datetime(2015, 4, 16, tzinfo=UTC)
CABF_GIVEN_NAME_DATE = datetime(2016, 9, 7, tzinfo=UTC)

# --- Policy OIDs (CA/B Forum reserved arc 2.23.140.1) ---

BR_EXTENDED_VALIDATION_OID = "2.23.140.1.1"
BR_DOMAIN_VALIDATED_OID = "2.23.140.1.2.1"
BR_ORGANIZATION_VALIDATED_OID = "2.23.140.1.2.2"
BR_INDIVIDUAL_VALIDATED_OID = "2.23.140.1.2.3"


def name_has_attribute(name: x509.Name, oid: x509.ObjectIdentifier) -> bool:
    """True if *name* carries at least one attribute of type *oid*."""
    return bool(name.get_attributes_for_oid(oid))


def name_attribute_values(name: x509.Name, oid: x509.ObjectIdentifier) -> list[str]:
    """String values of every attribute of type *oid* in *name*."""
    return [a.value for a in name.get_attributes_for_oid(oid) if isinstance(a.value, str)]


def has_given_name_or_surname(name: x509.Name) -> bool:
    return name_has_attribute(name, NameOID.GIVEN_NAME) or name_has_attribute(
        name, NameOID.SURNAME
    )


def rdn_whitespace(name: x509.Name) -> tuple[bool, bool]:
    """Return (leading, trailing) whitespace flags across every attribute value.

    Non-string values (e.g. x500UniqueIdentifier bit strings) are ignored.
    """
    leading = False
    trailing = False
    for rdn in name.rdns:
        for attr in rdn:
            value = attr.value
            if not isinstance(value, str) or not value:
                continue
            if value[0].isspace():
                leading = True
            if value[-1].isspace():
                trailing = True
    return leading, trailing


def is_control_char(ch: str) -> bool:
    """C0 and C1 control characters (U+0000-U+001F, U+007F-U+009F)."""
    code = ord(ch)
    return code <= 0x1F or 0x7F <= code <= 0x9F
