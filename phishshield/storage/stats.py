"""Usage statistics persisted as JSON."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from ..constants import Verdict
from ..utils.files import read_json, write_json

logger = logging.getLogger(__name__)

DEFAULT_STATS = {
    "threats_blocked": 0,
    "sites_analyzed": 0,
    "false_positives": 0,
    "reports_submitted": 0,
}


class StatsStore:
    """Counters for analyzed sites, blocked threats and user reports."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self.stats = self._load()

    def _load(self) -> dict[str, int]:
        stored = read_json(self.path, {})
        stats = dict(DEFAULT_STATS)
        if isinstance(stored, dict):
            # Merge so counters added later start at zero for old files
            for key, value in stored.items():
                if key in stats and isinstance(value, int):
                    stats[key] = value
        return stats

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self.stats)

    def increment(self, metric: str, amount: int = 1) -> int:
        """Increment a counter and persist. Unknown metrics are ignored."""
        with self._lock:
            if metric not in self.stats:
                logger.warning("Ignoring unknown stats metric %r", metric)
                return 0
            self.stats[metric] += amount
            write_json(self.path, self.stats)
            logger.debug("%s updated to %d", metric, self.stats[metric])
            return self.stats[metric]

    def record_verdict(self, verdict: Verdict) -> None:
        """Count an analyzed site; dangerous verdicts also count as blocked."""
        self.increment("sites_analyzed")
        if verdict == Verdict.DANGEROUS:
            self.increment("threats_blocked")

    def reset(self) -> dict[str, int]:
        with self._lock:
            self.stats = dict(DEFAULT_STATS)
            write_json(self.path, self.stats)
        logger.info("Statistics reset")
        return dict(self.stats)
