# SPDX-License-Identifier: MIT
"""Lints: certificate policy user-notice explicitText constraints (RFC 5280 4.2.1.4, RFC 6818 3).

An explicitText field is a string with a maximum size of 200 characters and
SHOULD NOT include control characters (U+0000 to U+001F, U+007F to U+009F).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from certlint.lints.base import LintSource
from certlint.lints.result import LintResult, LintStatus
from certlint.lints.util import RFC6818_DATE, is_control_char

if TYPE_CHECKING:
    from certlint.certificate import Certificate

MAX_EXPLICIT_TEXT_LENGTH = 200


def _has_explicit_text(cert: Certificate) -> bool:
    return any(texts for texts in cert.explicit_texts)


class ExplicitTextTooLongLint:
    """Explicit text longer than 200 characters.

    Length is counted in decoded characters, not encoded bytes. A BMPString
    or multi-byte UTF-8 text can therefore pass here while its encoding
    exceeds 200 bytes.
    """

    name = "e_ext_cert_policy_explicit_text_too_long"
    description = "Explicit text has a maximum size of 200 characters"
    citation = "RFC 6818: 3"
    source = LintSource.RFC5280
    effective_date = RFC6818_DATE

    def check_applies(self, cert: Certificate) -> bool:
        return _has_explicit_text(cert)

    def execute(self, cert: Certificate) -> LintResult:
        for texts in cert.explicit_texts:
            for text in texts:
                if len(text) > MAX_EXPLICIT_TEXT_LENGTH:
                    return LintResult(
                        LintStatus.ERROR,
                        details=f"explicitText is {len(text)} characters",
                    )
        return LintResult(LintStatus.PASS)


class ExplicitTextIncludesControlLint:
    """Explicit text containing C0/C1 control characters."""

    name = "w_ext_cert_policy_explicit_text_includes_control"
    description = "Explicit text SHOULD NOT include any control characters"
    citation = "RFC 6818: 3"
    source = LintSource.RFC5280
    effective_date = RFC6818_DATE

    def check_applies(self, cert: Certificate) -> bool:
        return _has_explicit_text(cert)

    def execute(self, cert: Certificate) -> LintResult:
        for texts in cert.explicit_texts:
            for text in texts:
                if any(is_control_char(ch) for ch in text):
                    return LintResult(LintStatus.WARN)
        return LintResult(LintStatus.PASS)
