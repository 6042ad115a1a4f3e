"""Glue between the classifier and its stateful collaborators."""

from __future__ import annotations

import logging
from typing import Optional

from .classifier import ClassificationEngine, ClassificationResult, load_rules
from .config import Config
from .constants import Verdict
from .storage import ReportStore, StatsStore
from .utils.allowlist import add_to_allowlist, read_allowlist
from .utils.domains import canonicalize_domain

logger = logging.getLogger(__name__)


class ShieldService:
    """Normalizes input, classifies it and records the outcome.

    The engine itself stays pure; whitelist snapshots, statistics and
    reports are handled here.
    """

    def __init__(self, config: Config, engine: Optional[ClassificationEngine] = None):
        self.config = config
        if engine is None:
            rules = load_rules(config.rules_file, overrides_path=config.heuristics_path)
            engine = ClassificationEngine(rules)
        self.engine = engine
        self.stats = StatsStore(config.stats_path)
        self.reports = ReportStore(
            config.reports_path,
            max_false_positives=config.max_false_positive_reports,
            max_errors=config.max_error_reports,
            retention_days=config.report_retention_days,
        )
        self.user_whitelist: frozenset[str] = frozenset(config.user_whitelist)

    def check(self, url_or_domain: str) -> ClassificationResult:
        """Classify a URL or host and count it in the statistics."""
        domain = canonicalize_domain(url_or_domain)
        result = self.engine.classify(domain, self.user_whitelist)
        if result.status != Verdict.UNKNOWN:
            self.stats.record_verdict(result.status)
        return result

    def report_false_positive(self, url_or_domain: str, details: Optional[dict] = None) -> dict:
        """Record a false-positive report and whitelist the domain."""
        domain = canonicalize_domain(url_or_domain)
        if not domain:
            raise ValueError(f"Not a valid domain: {url_or_domain!r}")

        add_to_allowlist(self.config.whitelist_path, domain)
        self.user_whitelist = frozenset(read_allowlist(self.config.whitelist_path))

        report: dict = {}
        if self.config.reporting_enabled:
            report = self.reports.add_false_positive(domain, details)
        self.stats.increment("false_positives")
        self.stats.increment("reports_submitted")
        logger.info("False positive reported; %s whitelisted", domain)
        return report

    def report_error(self, error_info: dict) -> Optional[dict]:
        if not self.config.reporting_enabled:
            return None
        return self.reports.add_error(error_info)

    def run_maintenance(self) -> tuple[int, int]:
        """Drop expired reports."""
        return self.reports.cleanup()
