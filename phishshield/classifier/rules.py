"""Loading of versioned classification rule data.

The curated allow-list, enterprise host patterns, phishing patterns, brand
list and signal weights are data, not code. They ship in
``phishshield/data/rules.yaml`` and can be replaced section by section by an
operator ``heuristics.yaml``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Optional

import yaml

from ..constants import ThreatCategory
from ..errors import RulesError
from .models import PatternRule, SuspicionSignal
from .scorer import build_signals

logger = logging.getLogger(__name__)

BUNDLED_RULES = "rules.yaml"
SUPPORTED_VERSIONS = {1}

DEFAULT_SUSPICIOUS_THRESHOLD = 80
DEFAULT_CAUTION_THRESHOLD = 40
DEFAULT_TYPOSQUAT_MAX_DISTANCE = 2


@dataclass(frozen=True)
class RuleSet:
    """Immutable, process-wide rule data for the classifier."""

    version: int = 1
    safe_domains: frozenset[str] = frozenset()
    enterprise_patterns: tuple[re.Pattern, ...] = ()
    threat_patterns: tuple[PatternRule, ...] = ()
    brand_domains: tuple[str, ...] = ()
    typosquat_max_distance: int = DEFAULT_TYPOSQUAT_MAX_DISTANCE
    signals: tuple[SuspicionSignal, ...] = field(default_factory=build_signals)
    suspicious_threshold: int = DEFAULT_SUSPICIOUS_THRESHOLD
    caution_threshold: int = DEFAULT_CAUTION_THRESHOLD


def _compile(pattern: str, source: str) -> Optional[re.Pattern]:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        logger.warning("Skipping invalid pattern in %s: %r (%s)", source, pattern, exc)
        return None


def _coerce_domains(raw) -> list[str]:
    items: list[str] = []
    for entry in raw or []:
        value = str(entry or "").strip().lower()
        if value:
            items.append(value)
    return items


def _coerce_enterprise_patterns(raw, source: str) -> tuple[re.Pattern, ...]:
    compiled = []
    for entry in raw or []:
        pattern = str(entry or "").strip()
        if not pattern:
            continue
        expression = _compile(pattern, source)
        if expression is not None:
            compiled.append(expression)
    return tuple(compiled)


def _coerce_threat_patterns(raw, source: str) -> tuple[PatternRule, ...]:
    rules: list[PatternRule] = []
    for entry in raw or []:
        if not isinstance(entry, dict):
            continue
        pattern = str(entry.get("pattern") or "").strip()
        category = ThreatCategory.from_string(str(entry.get("category") or ""))
        if not pattern or category is None:
            logger.warning("Skipping incomplete threat pattern in %s: %r", source, entry)
            continue
        expression = _compile(pattern, source)
        if expression is not None:
            rules.append(PatternRule(expression=expression, category=category))
    return tuple(rules)


def _coerce_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _coerce_signal_settings(raw) -> dict[str, dict]:
    if not isinstance(raw, dict):
        return {}
    return {str(name): dict(cfg) for name, cfg in raw.items() if isinstance(cfg, dict)}


def build_rules(data: dict, source: str = "<rules>") -> RuleSet:
    """Build a RuleSet from a parsed rules document.

    Missing sections yield empty lists; the pipeline then degrades to
    scoring-only behavior.
    """
    if not isinstance(data, dict):
        raise RulesError(source, "top level must be a mapping")

    version = _coerce_int(data.get("version", 1), 1)
    if version not in SUPPORTED_VERSIONS:
        raise RulesError(source, f"unsupported rules version {version}")

    thresholds = data.get("thresholds") or {}
    if not isinstance(thresholds, dict):
        thresholds = {}

    try:
        signals = build_signals(_coerce_signal_settings(data.get("signals")))
    except (KeyError, TypeError, ValueError) as exc:
        raise RulesError(source, f"bad signal settings: {exc}") from exc

    rules = RuleSet(
        version=version,
        safe_domains=frozenset(_coerce_domains(data.get("safe_domains"))),
        enterprise_patterns=_coerce_enterprise_patterns(data.get("enterprise_patterns"), source),
        threat_patterns=_coerce_threat_patterns(data.get("threat_patterns"), source),
        brand_domains=tuple(_coerce_domains(data.get("brand_domains"))),
        typosquat_max_distance=_coerce_int(
            data.get("typosquat_max_distance"), DEFAULT_TYPOSQUAT_MAX_DISTANCE
        ),
        signals=signals,
        suspicious_threshold=_coerce_int(thresholds.get("suspicious"), DEFAULT_SUSPICIOUS_THRESHOLD),
        caution_threshold=_coerce_int(thresholds.get("caution"), DEFAULT_CAUTION_THRESHOLD),
    )
    logger.debug(
        "Loaded rules v%d from %s: %d safe domains, %d enterprise patterns, %d threat patterns",
        rules.version,
        source,
        len(rules.safe_domains),
        len(rules.enterprise_patterns),
        len(rules.threat_patterns),
    )
    return rules


def _read_yaml(text: str, source: str) -> dict:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise RulesError(source, str(exc)) from exc
    if not isinstance(data, dict):
        raise RulesError(source, "top level must be a mapping")
    return data


def read_rules_document(path: Path | None = None) -> dict:
    """Read the raw rules document (bundled when ``path`` is None)."""
    if path is None:
        text = resources.files("phishshield.data").joinpath(BUNDLED_RULES).read_text(encoding="utf-8")
        return _read_yaml(text, BUNDLED_RULES)

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RulesError(str(path), str(exc)) from exc
    return _read_yaml(text, str(path))


def load_rules(path: Path | None = None, overrides_path: Path | None = None) -> RuleSet:
    """Load rules, applying section-level overrides from ``overrides_path``.

    A missing overrides file is ignored; a broken one is logged and ignored.
    """
    data = read_rules_document(path)
    source = str(path) if path else BUNDLED_RULES

    if overrides_path is not None and Path(overrides_path).exists():
        try:
            overrides = read_rules_document(Path(overrides_path))
        except RulesError as exc:
            logger.warning("Failed to parse %s: %s", overrides_path, exc)
        else:
            replaced = sorted(key for key in overrides if key != "version")
            if replaced:
                logger.info("Rule sections overridden by %s: %s", overrides_path, ", ".join(replaced))
            data = {**data, **overrides}
            source = f"{source}+{overrides_path}"

    return build_rules(data, source)
