"""Global pytest configuration."""

from __future__ import annotations

import pytest

from phishshield.classifier import ClassificationEngine, load_rules
from phishshield.config import Config


@pytest.fixture(scope="session")
def rules():
    """Bundled rule set, loaded once."""
    return load_rules()


@pytest.fixture
def engine(rules):
    """Classification engine over the bundled rules."""
    return ClassificationEngine(rules)


@pytest.fixture
def config(tmp_path, monkeypatch):
    """Config rooted in a temporary directory, isolated from any .env file."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config").mkdir()
    return Config(data_dir=tmp_path / "data", config_dir=tmp_path / "config")
