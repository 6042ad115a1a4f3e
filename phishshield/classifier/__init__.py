"""Domain threat classifier for PhishShield."""

from .allowlist import AllowListStore
from .engine import ClassificationEngine, classify
from .enterprise import EnterpriseHostRecognizer
from .models import ClassificationResult, PatternRule, SuspicionSignal, ThreatMatch
from .patterns import ThreatPatternMatcher
from .rules import RuleSet, build_rules, load_rules
from .scorer import SuspicionScorer, build_signals
from .typosquat import TyposquattingDetector, edit_distance

__all__ = [
    "AllowListStore",
    "ClassificationEngine",
    "ClassificationResult",
    "EnterpriseHostRecognizer",
    "PatternRule",
    "RuleSet",
    "SuspicionScorer",
    "SuspicionSignal",
    "ThreatMatch",
    "ThreatPatternMatcher",
    "TyposquattingDetector",
    "build_rules",
    "build_signals",
    "classify",
    "edit_distance",
    "load_rules",
]
