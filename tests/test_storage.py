"""Tests for statistics and report storage."""

import json
import re

import pytest

from phishshield.constants import Verdict
from phishshield.storage import ReportStore, StatsStore, generate_report_id, hash_domain

DAY = 24 * 60 * 60


class TestStatsStore:
    """Usage counters."""

    def test_record_verdicts(self, tmp_path):
        stats = StatsStore(tmp_path / "stats.json")
        stats.record_verdict(Verdict.SAFE)
        stats.record_verdict(Verdict.DANGEROUS)
        stats.record_verdict(Verdict.SUSPICIOUS)
        snapshot = stats.snapshot()
        assert snapshot["sites_analyzed"] == 3
        assert snapshot["threats_blocked"] == 1

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "stats.json"
        StatsStore(path).increment("reports_submitted")
        assert StatsStore(path).snapshot()["reports_submitted"] == 1

    def test_old_files_gain_new_counters(self, tmp_path):
        path = tmp_path / "stats.json"
        path.write_text(json.dumps({"sites_analyzed": 5, "obsolete": 2}))
        snapshot = StatsStore(path).snapshot()
        assert snapshot == {
            "threats_blocked": 0,
            "sites_analyzed": 5,
            "false_positives": 0,
            "reports_submitted": 0,
        }

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / "stats.json"
        path.write_text("not json")
        assert StatsStore(path).snapshot()["sites_analyzed"] == 0

    def test_unknown_metric_is_ignored(self, tmp_path):
        stats = StatsStore(tmp_path / "stats.json")
        assert stats.increment("bogus") == 0
        assert "bogus" not in stats.snapshot()

    def test_reset(self, tmp_path):
        path = tmp_path / "stats.json"
        stats = StatsStore(path)
        stats.record_verdict(Verdict.DANGEROUS)
        assert stats.reset()["threats_blocked"] == 0
        assert StatsStore(path).snapshot()["sites_analyzed"] == 0


class TestReportStore:
    """False-positive and error reports."""

    def test_false_positive_is_anonymised(self, tmp_path):
        store = ReportStore(tmp_path / "reports.json")
        report = store.add_false_positive("facebok.com", {"note": "my site"}, now=1000.0)
        assert report["domain_hash"] == hash_domain("facebok.com")
        assert report["details"] == {"note": "my site"}
        assert report["timestamp"] == 1000.0
        assert "facebok.com" not in (tmp_path / "reports.json").read_text()
        assert store.false_positive_reports() == [report]

    def test_keeps_newest_reports(self, tmp_path):
        store = ReportStore(tmp_path / "reports.json", max_false_positives=3)
        for i in range(5):
            store.add_false_positive(f"site{i}.com", {"n": i})
        kept = store.false_positive_reports()
        assert [r["details"]["n"] for r in kept] == [2, 3, 4]

    def test_error_reports_are_capped(self, tmp_path):
        store = ReportStore(tmp_path / "reports.json", max_errors=2)
        for i in range(3):
            store.add_error({"message": f"error {i}"})
        assert [r["message"] for r in store.error_reports()] == ["error 1", "error 2"]

    def test_cleanup_drops_expired(self, tmp_path):
        store = ReportStore(tmp_path / "reports.json", retention_days=30)
        now = 100 * DAY
        store.add_false_positive("old.com", now=now - 31 * DAY)
        store.add_false_positive("new.com", now=now - DAY)
        store.add_error({"message": "old"}, now=now - 40 * DAY)

        assert store.cleanup(now=now) == (1, 1)
        assert [r["domain_hash"] for r in store.false_positive_reports()] == [hash_domain("new.com")]
        assert store.error_reports() == []
        assert store.cleanup(now=now) == (0, 0)


class TestHelpers:
    """Hashing and identifiers."""

    @pytest.mark.parametrize("domain,expected", [("", "0"), ("a", "2p"), ("ab", "2e9")])
    def test_hash_domain_known_values(self, domain, expected):
        assert hash_domain(domain) == expected

    def test_hash_domain_wraps_to_signed_32_bits(self):
        value = hash_domain("a-very-long-domain-name-that-overflows.example.com")
        assert re.fullmatch(r"-?[0-9a-z]+", value)
        assert abs(int(value, 36)) < 2**31 + 1

    def test_report_ids_are_unique(self):
        first = generate_report_id(now=1.0)
        second = generate_report_id(now=1.0)
        assert first != second
        assert first.startswith("rs")
