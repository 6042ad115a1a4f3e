"""Anonymised false-positive and error report storage."""

from __future__ import annotations

import logging
import secrets
import threading
import time
from pathlib import Path
from typing import Optional

from .. import __version__
from ..utils.files import read_json, write_json

logger = logging.getLogger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_DAY_SECONDS = 24 * 60 * 60


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return sign + "".join(reversed(digits))


def hash_domain(domain: str) -> str:
    """32-bit rolling hash (h * 31 + c) rendered in signed base36.

    Reports keep this instead of the domain itself.
    """
    h = 0
    for ch in domain:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return _to_base36(h)


def generate_report_id(now: Optional[float] = None) -> str:
    """Millisecond timestamp plus random suffix, both base36."""
    millis = int((now if now is not None else time.time()) * 1000)
    return _to_base36(millis) + _to_base36(secrets.randbits(48))


class ReportStore:
    """Keeps the newest false-positive and error reports on disk."""

    def __init__(
        self,
        path: Path,
        max_false_positives: int = 100,
        max_errors: int = 50,
        retention_days: int = 30,
    ):
        self.path = Path(path)
        self.max_false_positives = max_false_positives
        self.max_errors = max_errors
        self.retention_days = retention_days
        self._lock = threading.Lock()

    def _load(self) -> dict[str, list[dict]]:
        data = read_json(self.path, {})
        if not isinstance(data, dict):
            data = {}
        return {
            "false_positive_reports": list(data.get("false_positive_reports") or []),
            "error_reports": list(data.get("error_reports") or []),
        }

    def false_positive_reports(self) -> list[dict]:
        return self._load()["false_positive_reports"]

    def error_reports(self) -> list[dict]:
        return self._load()["error_reports"]

    def _append(self, key: str, report: dict, limit: int) -> None:
        with self._lock:
            data = self._load()
            reports = data[key]
            reports.append(report)
            if len(reports) > limit:
                del reports[: len(reports) - limit]
            write_json(self.path, data)

    def add_false_positive(
        self,
        domain: str,
        details: Optional[dict] = None,
        now: Optional[float] = None,
    ) -> dict:
        """Store an anonymised false-positive report and return it."""
        timestamp = now if now is not None else time.time()
        report = {
            "domain_hash": hash_domain(domain),
            "timestamp": timestamp,
            "details": dict(details or {}),
            "version": __version__,
            "report_id": generate_report_id(timestamp),
        }
        self._append("false_positive_reports", report, self.max_false_positives)
        logger.info("False positive report %s stored", report["report_id"])
        return report

    def add_error(self, error_info: dict, now: Optional[float] = None) -> dict:
        """Store an error report and return it."""
        timestamp = now if now is not None else time.time()
        report = {
            **error_info,
            "timestamp": error_info.get("timestamp", timestamp),
            "version": __version__,
            "report_id": generate_report_id(timestamp),
        }
        self._append("error_reports", report, self.max_errors)
        logger.info("Error report %s stored", report["report_id"])
        return report

    def cleanup(self, now: Optional[float] = None) -> tuple[int, int]:
        """Drop reports older than the retention window.

        Returns (false positives removed, error reports removed).
        """
        cutoff = (now if now is not None else time.time()) - self.retention_days * _DAY_SECONDS
        with self._lock:
            data = self._load()
            kept_fp = [r for r in data["false_positive_reports"] if r.get("timestamp", 0) > cutoff]
            kept_err = [r for r in data["error_reports"] if r.get("timestamp", 0) > cutoff]
            fp_cleaned = len(data["false_positive_reports"]) - len(kept_fp)
            err_cleaned = len(data["error_reports"]) - len(kept_err)
            if fp_cleaned or err_cleaned:
                write_json(self.path, {"false_positive_reports": kept_fp, "error_reports": kept_err})
                logger.info("Cleaned %d old FP reports and %d old error reports", fp_cleaned, err_cleaned)
        return fp_cleaned, err_cleaned
