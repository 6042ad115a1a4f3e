"""PhishShield: hostname threat classification."""

__version__ = "1.2.1"

from .classifier import ClassificationEngine, ClassificationResult, classify  # noqa: E402
from .constants import Verdict  # noqa: E402

__all__ = ["ClassificationEngine", "ClassificationResult", "Verdict", "classify", "__version__"]
