"""Known phishing-domain shapes."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .models import PatternRule, ThreatMatch

logger = logging.getLogger(__name__)


class ThreatPatternMatcher:
    """Ordered, first-match-wins scan over phishing pattern rules.

    Most rules anchor only the domain suffix, so a keyword anywhere before
    the anchored TLD matches.
    """

    def __init__(self, rules: Iterable[PatternRule]):
        self.rules = tuple(rules)

    def match(self, domain: str) -> Optional[ThreatMatch]:
        """Return the first rule that matches, or None."""
        for rule in self.rules:
            if not rule.matches(domain):
                continue
            logger.debug("Dangerous pattern %s matched %s", rule.expression.pattern, domain)
            return ThreatMatch(
                category=rule.category,
                reason=(
                    f"Dangerous pattern detected: {domain} matches known phishing pattern "
                    f"({rule.category.label})"
                ),
                pattern=rule.expression.pattern,
            )
        return None
