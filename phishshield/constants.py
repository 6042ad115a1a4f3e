"""Centralized constants for PhishShield.

This module contains enums and constants used across multiple modules
to ensure consistency and reduce duplication.
"""

from __future__ import annotations

from enum import Enum


class Verdict(Enum):
    """Classification outcome for a domain.

    SAFE < CAUTION < SUSPICIOUS < DANGEROUS. UNKNOWN marks a failed
    classification and has no rank.
    """

    SAFE = "safe"
    CAUTION = "caution"
    SUSPICIOUS = "suspicious"
    DANGEROUS = "dangerous"
    UNKNOWN = "unknown"

    @property
    def rank(self) -> int | None:
        """Severity rank, or None for UNKNOWN."""
        return VERDICT_RANK.get(self.value)

    @classmethod
    def from_string(cls, value: str | None) -> "Verdict":
        """Convert string verdict to enum, defaulting to UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


class CheckKind(Enum):
    """Checks the classification engine can run, one per decision rule."""

    ALLOWLIST = "allowlist"
    ENTERPRISE = "enterprise"
    PATTERN = "pattern"
    TYPOSQUAT = "typosquat"
    SCORE_BAND = "score_band"

    def __str__(self) -> str:
        return self.value


class ThreatCategory(Enum):
    """Families of known phishing-domain shapes."""

    SCAM_KEYWORD = "scam_keyword"
    BRAND_IMPERSONATION = "brand_impersonation"
    FREE_HOSTING = "free_hosting"
    REGIONAL_BANK = "regional_bank"
    COMBOSQUATTING = "combosquatting"

    @property
    def label(self) -> str:
        return THREAT_CATEGORY_LABELS[self]

    @classmethod
    def from_string(cls, value: str | None) -> "ThreatCategory | None":
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


THREAT_CATEGORY_LABELS = {
    ThreatCategory.SCAM_KEYWORD: "security-alert scam",
    ThreatCategory.BRAND_IMPERSONATION: "brand impersonation",
    ThreatCategory.FREE_HOSTING: "free-hosting phishing",
    ThreatCategory.REGIONAL_BANK: "bank impersonation",
    ThreatCategory.COMBOSQUATTING: "combosquatting",
}

VERDICT_RANK = {
    "safe": 0,
    "caution": 1,
    "suspicious": 2,
    "dangerous": 3,
}

# Decision order of the classification engine; first decisive check wins.
CHECK_ORDER: tuple[CheckKind, ...] = (
    CheckKind.ALLOWLIST,
    CheckKind.ENTERPRISE,
    CheckKind.PATTERN,
    CheckKind.TYPOSQUAT,
    CheckKind.SCORE_BAND,
)


def compare_verdicts(v1: Verdict | str | None, v2: Verdict | str | None) -> int | None:
    """Compare two verdicts. Positive if v1 > v2, negative if v1 < v2, 0 if equal.

    Returns None when either side is UNKNOWN.
    """
    left = v1 if isinstance(v1, Verdict) else Verdict.from_string(v1)
    right = v2 if isinstance(v2, Verdict) else Verdict.from_string(v2)
    if left.rank is None or right.rank is None:
        return None
    return left.rank - right.rank


def verdict_escalated(current: Verdict | str | None, previous: Verdict | str | None) -> bool:
    """Check if verdict has escalated (gotten worse)."""
    diff = compare_verdicts(current, previous)
    return diff is not None and diff > 0
