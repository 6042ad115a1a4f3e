"""Weighted suspicion scoring over lexical domain features."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .models import SuspicionSignal

logger = logging.getLogger(__name__)

DEFAULT_SIGNAL_SETTINGS: dict[str, dict] = {
    "length": {"weight": 20, "limit": 30},
    "hyphens": {"weight": 25, "limit": 3},
    "digits": {"weight": 20, "limit": 3},
    "risky_tld": {
        "weight": 30,
        "tlds": ["tk", "ml", "ga", "cf", "top", "loan", "download", "click"],
    },
    "subdomain": {
        "weight": 15,
        "min_labels": 3,
        "labels": ["secure", "login", "account", "verify", "security"],
    },
}

def _over_limit(counter, limit: int):
    def predicate(domain: str) -> Optional[int]:
        value = counter(domain)
        return value if value > limit else None

    return predicate


def _risky_tld(tlds: set[str]):
    def predicate(domain: str) -> Optional[str]:
        if "." not in domain:
            return None
        tld = domain.rsplit(".", 1)[1]
        return tld if tld in tlds else None

    return predicate


def _suspicious_subdomain(labels: set[str], min_labels: int):
    def predicate(domain: str) -> Optional[str]:
        parts = domain.split(".")
        if len(parts) < min_labels:
            return None
        return parts[0] if parts[0] in labels else None

    return predicate


def build_signals(settings: dict[str, dict] | None = None) -> tuple[SuspicionSignal, ...]:
    """Build the signal set from weight/limit settings.

    Keys missing from a signal's settings fall back to its defaults.
    Signals are returned in evaluation order.
    """
    settings = settings or {}
    merged = {
        name: {**defaults, **(settings.get(name) or {})}
        for name, defaults in DEFAULT_SIGNAL_SETTINGS.items()
    }

    length = merged["length"]
    hyphens = merged["hyphens"]
    digits = merged["digits"]
    risky_tld = merged["risky_tld"]
    subdomain = merged["subdomain"]

    return (
        SuspicionSignal(
            name="length",
            weight=int(length["weight"]),
            reason="Suspiciously long domain name ({value} characters)",
            predicate=_over_limit(len, int(length["limit"])),
        ),
        SuspicionSignal(
            name="hyphens",
            weight=int(hyphens["weight"]),
            reason="Too many hyphens in domain ({value} hyphens)",
            predicate=_over_limit(lambda d: d.count("-"), int(hyphens["limit"])),
        ),
        SuspicionSignal(
            name="digits",
            weight=int(digits["weight"]),
            reason="Too many numbers in domain ({value} numbers)",
            predicate=_over_limit(lambda d: sum(ch.isdigit() for ch in d), int(digits["limit"])),
        ),
        SuspicionSignal(
            name="risky_tld",
            weight=int(risky_tld["weight"]),
            reason="Uses high-risk domain extension",
            predicate=_risky_tld({str(t).lower().lstrip(".") for t in risky_tld["tlds"]}),
        ),
        SuspicionSignal(
            name="subdomain",
            weight=int(subdomain["weight"]),
            reason="Suspicious subdomain: {value}",
            predicate=_suspicious_subdomain(
                {str(label).lower() for label in subdomain["labels"]},
                int(subdomain.get("min_labels", 3)),
            ),
        ),
    )


class SuspicionScorer:
    """Scores domains by summing the weights of every signal that fires.

    Signals never short-circuit: every signal is evaluated and every
    triggered reason is reported, in signal order.
    """

    def __init__(self, signals: Iterable[SuspicionSignal] | None = None):
        self.signals = tuple(signals) if signals is not None else build_signals()

    @property
    def max_score(self) -> int:
        return sum(signal.weight for signal in self.signals)

    def score(self, domain: str) -> tuple[int, list[str]]:
        """Score a domain and explain which signals fired."""
        total = 0
        reasons: list[str] = []

        for signal in self.signals:
            reason = signal.evaluate(domain)
            if reason is None:
                continue
            total += signal.weight
            reasons.append(reason)

        logger.debug("Suspicion score %d for %s", total, domain)
        return total, reasons
