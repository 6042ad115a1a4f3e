"""Configuration management for PhishShield."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Set

from dotenv import load_dotenv

from .utils.allowlist import read_allowlist

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Application configuration loaded from environment."""

    # Paths
    data_dir: Path = field(default_factory=lambda: Path("./data"))
    config_dir: Path = field(default_factory=lambda: Path("./config"))
    rules_file: Optional[Path] = None  # replaces the bundled rules when set

    log_level: str = "INFO"

    # Reporting
    reporting_enabled: bool = True
    report_retention_days: int = 30
    max_false_positive_reports: int = 100
    max_error_reports: int = 50

    # Loaded lists
    user_whitelist: Set[str] = field(default_factory=set)

    def __post_init__(self):
        """Ensure paths exist and load lists."""
        self.data_dir = Path(self.data_dir)
        self.config_dir = Path(self.config_dir)
        if self.rules_file is not None:
            self.rules_file = Path(self.rules_file)

        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._load_lists()

    @property
    def whitelist_path(self) -> Path:
        return self.config_dir / "allowlist.txt"

    @property
    def heuristics_path(self) -> Path:
        return self.config_dir / "heuristics.yaml"

    @property
    def stats_path(self) -> Path:
        return self.data_dir / "stats.json"

    @property
    def reports_path(self) -> Path:
        return self.data_dir / "reports.json"

    def _load_lists(self):
        """Load the user whitelist from the config directory."""
        if self.whitelist_path.exists():
            self.user_whitelist = read_allowlist(self.whitelist_path)
            logger.debug("Loaded %d whitelisted domains", len(self.user_whitelist))


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config() -> Config:
    """Load configuration from environment variables."""
    load_dotenv()

    rules_file = os.getenv("RULES_FILE", "").strip()

    return Config(
        data_dir=Path(os.getenv("DATA_DIR", "./data")),
        config_dir=Path(os.getenv("CONFIG_DIR", "./config")),
        rules_file=Path(rules_file) if rules_file else None,
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        reporting_enabled=_env_bool("REPORTING_ENABLED", "true"),
        report_retention_days=_env_int("REPORT_RETENTION_DAYS", 30),
        max_false_positive_reports=_env_int("MAX_FALSE_POSITIVE_REPORTS", 100),
        max_error_reports=_env_int("MAX_ERROR_REPORTS", 50),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of error messages."""
    errors: list[str] = []
    if config.report_retention_days <= 0:
        errors.append("REPORT_RETENTION_DAYS must be positive")
    if config.max_false_positive_reports <= 0:
        errors.append("MAX_FALSE_POSITIVE_REPORTS must be positive")
    if config.max_error_reports <= 0:
        errors.append("MAX_ERROR_REPORTS must be positive")
    if config.rules_file is not None and not config.rules_file.exists():
        errors.append(f"RULES_FILE not found: {config.rules_file}")
    if config.log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        errors.append(f"Unknown LOG_LEVEL: {config.log_level}")
    return errors
