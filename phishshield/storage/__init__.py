"""Storage modules for PhishShield."""

from .reports import ReportStore, generate_report_id, hash_domain
from .stats import StatsStore

__all__ = ["ReportStore", "StatsStore", "generate_report_id", "hash_domain"]
