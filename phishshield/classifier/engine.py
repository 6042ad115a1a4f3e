"""Domain classification pipeline."""

from __future__ import annotations

import logging
from typing import AbstractSet, Callable, Iterable, Optional

from ..constants import CHECK_ORDER, CheckKind, Verdict
from ..utils.domains import is_valid_hostname
from .allowlist import AllowListStore
from .enterprise import EnterpriseHostRecognizer
from .models import ClassificationResult
from .patterns import ThreatPatternMatcher
from .rules import RuleSet, load_rules
from .scorer import SuspicionScorer
from .typosquat import TyposquattingDetector

logger = logging.getLogger(__name__)


class ClassificationEngine:
    """Classifies a normalized hostname into a verdict with reasons.

    Checks run in ``CHECK_ORDER`` and the first decisive check wins:

    1. allow-list (built-in or user whitelist) -> SAFE
    2. enterprise hosting platform -> SAFE
    3. known phishing pattern -> DANGEROUS
    4. typosquat of a brand domain -> DANGEROUS
    5. suspicion score band -> SUSPICIOUS / CAUTION, else SAFE

    The engine is pure: it does no I/O and keeps no per-call state, so the
    same ``(domain, whitelist)`` always yields an equal result.
    """

    def __init__(self, rules: RuleSet | None = None):
        self.rules = rules if rules is not None else load_rules()
        self.allowlist = AllowListStore(self.rules.safe_domains)
        self.enterprise = EnterpriseHostRecognizer(self.rules.enterprise_patterns)
        self.patterns = ThreatPatternMatcher(self.rules.threat_patterns)
        self.typosquatting = TyposquattingDetector(
            self.rules.brand_domains, self.rules.typosquat_max_distance
        )
        self.scorer = SuspicionScorer(self.rules.signals)

        self._checks: dict[CheckKind, Callable[[str, AbstractSet[str]], Optional[ClassificationResult]]] = {
            CheckKind.ALLOWLIST: self._check_allowlist,
            CheckKind.ENTERPRISE: self._check_enterprise,
            CheckKind.PATTERN: self._check_pattern,
            CheckKind.TYPOSQUAT: self._check_typosquat,
            CheckKind.SCORE_BAND: self._check_score_band,
        }

    def classify(
        self,
        domain: str,
        user_whitelist: AbstractSet[str] | Iterable[str] | None = frozenset(),
    ) -> ClassificationResult:
        """Classify a normalized domain. Never raises.

        Non-string or malformed domains are UNKNOWN; a missing whitelist
        counts as empty.
        """
        candidate = domain.strip().lower() if isinstance(domain, str) else ""
        if not candidate or not is_valid_hostname(candidate):
            logger.debug("Unparsable domain %r", domain)
            return ClassificationResult(domain=candidate, status=Verdict.UNKNOWN)

        try:
            if isinstance(user_whitelist, AbstractSet):
                whitelist = user_whitelist
            else:
                whitelist = frozenset(user_whitelist or ())
            for kind in CHECK_ORDER:
                result = self._checks[kind](candidate, whitelist)
                if result is not None:
                    break
            else:
                result = ClassificationResult(domain=candidate, status=Verdict.SAFE)
        except Exception:
            logger.exception("Classification failed for %s", candidate)
            return ClassificationResult(domain=candidate, status=Verdict.UNKNOWN)

        if result.is_threat:
            logger.info("%s classified %s: %s", candidate, result.status, "; ".join(result.reasons))
        else:
            logger.debug("%s classified %s (by %s)", candidate, result.status, result.decided_by)
        return result

    def _check_allowlist(self, domain: str, whitelist: AbstractSet[str]) -> Optional[ClassificationResult]:
        if self.allowlist.contains(domain, whitelist):
            return ClassificationResult(domain=domain, status=Verdict.SAFE, decided_by=CheckKind.ALLOWLIST)
        return None

    def _check_enterprise(self, domain: str, whitelist: AbstractSet[str]) -> Optional[ClassificationResult]:
        if self.enterprise.is_enterprise_host(domain):
            return ClassificationResult(domain=domain, status=Verdict.SAFE, decided_by=CheckKind.ENTERPRISE)
        return None

    def _check_pattern(self, domain: str, whitelist: AbstractSet[str]) -> Optional[ClassificationResult]:
        match = self.patterns.match(domain)
        if match is None:
            return None
        return ClassificationResult(
            domain=domain,
            status=Verdict.DANGEROUS,
            reasons=[match.reason],
            decided_by=CheckKind.PATTERN,
        )

    def _check_typosquat(self, domain: str, whitelist: AbstractSet[str]) -> Optional[ClassificationResult]:
        reason = self.typosquatting.is_typosquat(domain)
        if reason is None:
            return None
        return ClassificationResult(
            domain=domain,
            status=Verdict.DANGEROUS,
            reasons=[reason],
            decided_by=CheckKind.TYPOSQUAT,
        )

    def _check_score_band(self, domain: str, whitelist: AbstractSet[str]) -> Optional[ClassificationResult]:
        score, reasons = self.scorer.score(domain)
        if score >= self.rules.suspicious_threshold:
            status = Verdict.SUSPICIOUS
        elif score >= self.rules.caution_threshold:
            status = Verdict.CAUTION
        else:
            return ClassificationResult(
                domain=domain, status=Verdict.SAFE, score=score, decided_by=CheckKind.SCORE_BAND
            )
        return ClassificationResult(
            domain=domain,
            status=status,
            reasons=reasons,
            score=score,
            decided_by=CheckKind.SCORE_BAND,
        )


def classify(
    domain: str, user_whitelist: AbstractSet[str] | Iterable[str] | None = frozenset()
) -> ClassificationResult:
    """Classify with the bundled rules."""
    return _default_engine().classify(domain, user_whitelist)


_ENGINE: ClassificationEngine | None = None


def _default_engine() -> ClassificationEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = ClassificationEngine()
    return _ENGINE
