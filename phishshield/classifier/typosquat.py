"""Typosquatting detection by edit distance to high-value brand domains."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from rapidfuzz.distance import Levenshtein

logger = logging.getLogger(__name__)


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insertion, deletion and substitution costs."""
    return Levenshtein.distance(a, b)


class TyposquattingDetector:
    """Flags domains within a small edit distance of a brand domain."""

    def __init__(self, brand_domains: Iterable[str], max_distance: int = 2):
        self.brand_domains = tuple(d.lower() for d in brand_domains)
        self.max_distance = max_distance

    def closest_brand(self, domain: str) -> Optional[tuple[str, int]]:
        """Return the first brand within range and its distance."""
        for brand in self.brand_domains:
            if brand == domain:
                continue
            distance = Levenshtein.distance(domain, brand, score_cutoff=self.max_distance)
            if 0 < distance <= self.max_distance:
                return brand, distance
        return None

    def is_typosquat(self, domain: str) -> Optional[str]:
        """Return a reason naming the resembled brand, or None."""
        hit = self.closest_brand(domain)
        if hit is None:
            return None
        brand, distance = hit
        logger.debug("Typosquat %s -> %s (distance %d)", domain, brand, distance)
        return f'Possible typosquatting: "{domain}" closely resembles "{brand}"'
