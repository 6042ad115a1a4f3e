"""Tests for the service layer, presentation and command line."""

import json

import pytest

from phishshield.config import Config, load_config, validate_config
from phishshield.constants import CheckKind, Verdict
from phishshield.classifier.models import ClassificationResult
from phishshield.main import main
from phishshield.presentation import format_result, presentation_for, should_warn
from phishshield.service import ShieldService


@pytest.fixture
def service(config):
    return ShieldService(config)


class TestShieldService:
    """Normalization, statistics and false-positive handling."""

    def test_check_normalizes_urls(self, service):
        result = service.check("https://www.amazon.com/gp/cart")
        assert result.domain == "amazon.com"
        assert result.status == Verdict.SAFE
        assert service.stats.snapshot()["sites_analyzed"] == 1

    def test_dangerous_counts_as_blocked(self, service):
        result = service.check("http://facebok.com/login.php")
        assert result.status == Verdict.DANGEROUS
        assert service.stats.snapshot()["threats_blocked"] == 1

    def test_unknown_is_not_counted(self, service):
        assert service.check("").status == Verdict.UNKNOWN
        assert service.stats.snapshot()["sites_analyzed"] == 0

    def test_false_positive_whitelists_domain(self, service, config):
        assert service.check("facebok.com").status == Verdict.DANGEROUS

        report = service.report_false_positive("https://facebok.com/", {"note": "mine"})
        assert report["details"] == {"note": "mine"}
        assert "facebok.com" in config.whitelist_path.read_text()

        result = service.check("facebok.com")
        assert result.status == Verdict.SAFE
        assert result.decided_by == CheckKind.ALLOWLIST

        snapshot = service.stats.snapshot()
        assert snapshot["false_positives"] == 1
        assert snapshot["reports_submitted"] == 1
        assert len(service.reports.false_positive_reports()) == 1

    def test_whitelist_file_is_loaded(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "allowlist.txt").write_text("secure-login-verify.info\n")
        config = Config(data_dir=tmp_path / "data", config_dir=config_dir)
        assert ShieldService(config).check("secure-login-verify.info").status == Verdict.SAFE

    def test_reporting_disabled(self, config):
        config.reporting_enabled = False
        service = ShieldService(config)
        assert service.report_false_positive("facebok.com") == {}
        assert service.reports.false_positive_reports() == []
        assert service.report_error({"message": "x"}) is None
        assert service.check("facebok.com").status == Verdict.SAFE

    def test_invalid_report(self, service):
        with pytest.raises(ValueError):
            service.report_false_positive("")

    def test_heuristics_overrides_are_applied(self, config):
        config.heuristics_path.write_text("thresholds:\n  suspicious: 50\n  caution: 10\n")
        service = ShieldService(config)
        assert service.check("secure-login-123456.tk").status == Verdict.SUSPICIOUS

    def test_maintenance(self, service):
        service.reports.add_false_positive("old.com", now=0.0)
        assert service.run_maintenance() == (1, 0)


class TestConfig:
    """Environment-driven configuration."""

    def test_load_config_from_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DATA_DIR", str(tmp_path / "state"))
        monkeypatch.setenv("CONFIG_DIR", str(tmp_path / "conf"))
        monkeypatch.setenv("REPORTING_ENABLED", "false")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = load_config()
        assert config.data_dir.exists()
        assert config.reporting_enabled is False
        assert config.log_level == "DEBUG"
        assert validate_config(config) == []

    def test_non_integer_limit_is_rejected(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DATA_DIR", str(tmp_path / "state"))
        monkeypatch.setenv("REPORT_RETENTION_DAYS", "abc")
        with pytest.raises(ValueError, match="REPORT_RETENTION_DAYS must be an integer"):
            load_config()

    def test_validate_config(self, config):
        config.max_error_reports = 0
        config.rules_file = config.config_dir / "missing.yaml"
        errors = validate_config(config)
        assert "MAX_ERROR_REPORTS must be positive" in errors
        assert any("RULES_FILE" in e for e in errors)


class TestPresentation:
    """Verdict copy and text rendering."""

    def test_dangerous_blocks_inputs(self):
        view = presentation_for(Verdict.DANGEROUS)
        assert view.block_inputs
        assert view.badge_color == "#dc3545"
        assert not presentation_for(Verdict.SUSPICIOUS).block_inputs

    def test_unknown_looks_safe(self):
        assert presentation_for(Verdict.UNKNOWN) == presentation_for(Verdict.SAFE)

    def test_caution_without_reasons_does_not_warn(self):
        quiet = ClassificationResult(domain="x.com", status=Verdict.CAUTION)
        assert not should_warn(quiet)
        assert not should_warn(ClassificationResult(domain="x.com", status=Verdict.SAFE))

    def test_format_result(self, engine):
        text = format_result(engine.classify("facebok.com"))
        assert text.startswith("facebok.com: DANGEROUS")
        assert "DANGEROUS WEBSITE DETECTED!" in text
        assert "Why this site was flagged:" in text
        assert 'resembles "facebook.com"' in text


class TestCommandLine:
    """The phishshield command."""

    @pytest.fixture(autouse=True)
    def env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
        monkeypatch.setenv("CONFIG_DIR", str(tmp_path / "config"))
        monkeypatch.delenv("RULES_FILE", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

    def test_check_dangerous_exit_code(self, capsys):
        assert main(["check", "facebok.com", "amazon.com"]) == 2
        out = capsys.readouterr().out
        assert "facebok.com: DANGEROUS" in out
        assert "amazon.com: SAFE" in out

    def test_check_json(self, capsys):
        assert main(["check", "--json", "secure-login-123456.tk"]) == 0
        data = json.loads(capsys.readouterr().out.strip())
        assert data["status"] == "caution"
        assert data["score"] == 50
        assert data["decided_by"] == "score_band"

    def test_report_then_check(self, capsys):
        assert main(["report", "facebok.com", "--note", "false alarm"]) == 0
        assert "whitelisted" in capsys.readouterr().out
        assert main(["check", "facebok.com"]) == 0

    def test_stats(self, capsys):
        main(["check", "facebok.com"])
        capsys.readouterr()
        assert main(["stats"]) == 0
        out = capsys.readouterr().out
        assert "sites_analyzed: 1" in out
        assert "threats_blocked: 1" in out
        assert main(["stats", "--reset"]) == 0
        assert "sites_analyzed: 0" in capsys.readouterr().out

    def test_maintenance(self, capsys):
        assert main(["maintenance"]) == 0
        assert "Removed 0" in capsys.readouterr().out

    def test_env_file(self, tmp_path, monkeypatch, capsys):
        # Registered so the value written by --env-file is undone afterwards
        monkeypatch.setenv("REPORT_RETENTION_DAYS", "30")
        env_file = tmp_path / "shield.env"
        env_file.write_text("REPORT_RETENTION_DAYS=0\n")
        assert main(["--env-file", str(env_file), "check", "amazon.com"]) == 1
        capsys.readouterr()

    def test_non_integer_env_exits_with_error(self, monkeypatch, caplog):
        monkeypatch.setenv("MAX_ERROR_REPORTS", "lots")
        assert main(["check", "amazon.com"]) == 1
        assert "MAX_ERROR_REPORTS must be an integer" in caplog.text
