"""Classifier data models."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..constants import CheckKind, ThreatCategory, Verdict


@dataclass(frozen=True)
class PatternRule:
    """A compiled phishing-domain expression and the family it belongs to."""

    expression: re.Pattern
    category: ThreatCategory

    def matches(self, domain: str) -> bool:
        return self.expression.search(domain) is not None


@dataclass(frozen=True)
class ThreatMatch:
    """First pattern rule that matched a domain."""

    category: ThreatCategory
    reason: str
    pattern: str = ""


@dataclass(frozen=True)
class SuspicionSignal:
    """Weighted lexical risk signal.

    ``predicate`` returns the value interpolated into ``reason`` when the
    signal fires, or None when it does not.
    """

    name: str
    weight: int
    reason: str
    predicate: Callable[[str], Optional[object]]

    def evaluate(self, domain: str) -> Optional[str]:
        """Return the formatted reason if the signal fires, else None."""
        value = self.predicate(domain)
        if value is None:
            return None
        return self.reason.format(value=value)


@dataclass
class ClassificationResult:
    """Result of classifying a single domain."""

    domain: str
    status: Verdict
    reasons: list[str] = field(default_factory=list)
    score: int = 0
    decided_by: Optional[CheckKind] = None

    @property
    def is_threat(self) -> bool:
        """Whether the verdict should reach the warning layer."""
        return self.status in (Verdict.DANGEROUS, Verdict.SUSPICIOUS)

    def to_dict(self) -> dict:
        return {
            "domain": self.domain,
            "status": str(self.status),
            "reasons": list(self.reasons),
            "score": self.score,
            "decided_by": str(self.decided_by) if self.decided_by else None,
        }
