# SPDX-License-Identifier: MIT
"""Selection profiles and config loading for the lint engine."""

from __future__ import annotations

import os
from dataclasses import dataclass

from certlint.lints.base import LintSource
from certlint.lints.engine import LintConfig
from certlint.lints.result import VERDICTS, LintStatus


@dataclass(frozen=True)
class LintProfile:
    """Named preset restricting which source families run. None means all."""

    name: str
    sources: frozenset[LintSource] | None


PROFILES: dict[str, LintProfile] = {
    "all": LintProfile(name="all", sources=None),
    "baseline": LintProfile(
        name="baseline",
        sources=frozenset(
            {LintSource.CABF_BASELINE_REQUIREMENTS, LintSource.CABF_EV_GUIDELINES}
        ),
    ),
    "rfc": LintProfile(
        name="rfc",
        sources=frozenset({LintSource.RFC5280, LintSource.RFC5480, LintSource.RFC5891}),
    ),
    "community": LintProfile(
        name="community",
        sources=frozenset({LintSource.COMMUNITY, LintSource.AWSLABS}),
    ),
}


def load_profile(cli_profile: str | None = None) -> LintProfile:
    """Load profile with CLI > env > default priority.

    Args:
        cli_profile: Profile name from CLI --profile flag (highest priority).

    Returns:
        LintProfile for the resolved profile.

    Raises:
        ValueError: If the profile name is not recognized.
    """
    name = cli_profile or os.environ.get("CERTLINT_PROFILE", "all")
    if name not in PROFILES:
        msg = f"Unknown profile: {name!r}. Valid profiles: {sorted(PROFILES.keys())}"
        raise ValueError(msg)
    return PROFILES[name]


def _split(text: str) -> list[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def parse_names(text: str | None) -> frozenset[str] | None:
    """Parse a comma-separated list of lint names. Empty or None gives None."""
    if not text:
        return None
    names = _split(text)
    return frozenset(names) if names else None


def parse_sources(text: str | None) -> frozenset[LintSource] | None:
    """Parse comma-separated source names (case-insensitive values or member names)."""
    if not text:
        return None
    by_key: dict[str, LintSource] = {}
    for source in LintSource:
        by_key[source.value.lower()] = source
        by_key[source.name.lower()] = source
    sources: set[LintSource] = set()
    for part in _split(text):
        try:
            sources.add(by_key[part.lower()])
        except KeyError:
            valid = sorted(s.value for s in LintSource)
            msg = f"Unknown lint source: {part!r}. Valid sources: {valid}"
            raise ValueError(msg) from None
    return frozenset(sources) if sources else None


def parse_severity(text: str) -> LintStatus:
    """Parse a verdict name such as ``warn`` or ``ERROR`` for --fail-on."""
    wanted = text.strip().lower()
    for status in VERDICTS:
        if status.value == wanted:
            return status
    msg = f"Unknown severity: {text!r}. Valid severities: {[s.value for s in VERDICTS]}"
    raise ValueError(msg)


def load_config(
    *,
    profile: str | None = None,
    include: str | None = None,
    exclude: str | None = None,
    sources: str | None = None,
) -> LintConfig:
    """Build a LintConfig with CLI > env > profile priority for every field.

    Env vars: CERTLINT_PROFILE, CERTLINT_INCLUDE, CERTLINT_EXCLUDE,
    CERTLINT_SOURCES. Explicit sources replace the profile's sources.

    Raises:
        ValueError: If the profile or a source name is not recognized.
    """
    resolved_profile = load_profile(profile)
    include_text = include or os.environ.get("CERTLINT_INCLUDE")
    exclude_text = exclude or os.environ.get("CERTLINT_EXCLUDE")
    sources_text = sources or os.environ.get("CERTLINT_SOURCES")

    explicit_sources = parse_sources(sources_text)
    return LintConfig(
        include=parse_names(include_text),
        exclude=parse_names(exclude_text) or frozenset(),
        sources=explicit_sources if explicit_sources is not None else resolved_profile.sources,
    )
