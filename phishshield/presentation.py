"""How each verdict is shown to the user."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .classifier.models import ClassificationResult
from .constants import Verdict


@dataclass(frozen=True)
class VerdictPresentation:
    """Badge, toolbar title and warning copy for a verdict."""

    title: str
    badge_text: str
    badge_color: str
    warning_title: Optional[str] = None
    warning_message: Optional[str] = None
    auto_close: bool = False
    block_inputs: bool = False


PRESENTATIONS = {
    Verdict.SAFE: VerdictPresentation(
        title="PhishShield - Site is safe",
        badge_text="",
        badge_color="#10b981",
    ),
    Verdict.CAUTION: VerdictPresentation(
        title="PhishShield - Exercise caution",
        badge_text="!",
        badge_color="#f59e0b",
        warning_title="Security Notice",
        warning_message="This website has some characteristics that warrant caution.",
        auto_close=True,
    ),
    Verdict.SUSPICIOUS: VerdictPresentation(
        title="PhishShield - Suspicious site detected",
        badge_text="⚠",
        badge_color="#f59e0b",
        warning_title="Suspicious Website Detected",
        warning_message=(
            "This domain contains suspicious characteristics. "
            "Exercise caution when entering personal information."
        ),
        auto_close=True,
    ),
    Verdict.DANGEROUS: VerdictPresentation(
        title="PhishShield - DANGEROUS site blocked!",
        badge_text="🚨",
        badge_color="#dc3545",
        warning_title="DANGEROUS WEBSITE DETECTED!",
        warning_message=(
            "This website has been identified as a potential phishing site. "
            "Do not enter credentials or personal information!"
        ),
        block_inputs=True,
    ),
}

ANALYZING_TITLE = "PhishShield - Analyzing..."


def presentation_for(verdict: Verdict) -> VerdictPresentation:
    """Unknown verdicts are presented like safe ones."""
    return PRESENTATIONS.get(verdict, PRESENTATIONS[Verdict.SAFE])


def should_warn(result: ClassificationResult) -> bool:
    """Caution only warns when there is something to explain."""
    if result.status == Verdict.CAUTION:
        return bool(result.reasons)
    return presentation_for(result.status).warning_title is not None


def format_result(result: ClassificationResult) -> str:
    """Render a classification result as plain text."""
    view = presentation_for(result.status)
    lines = [f"{result.domain or '<empty>'}: {str(result.status).upper()}"]
    if should_warn(result):
        lines.append(f"  {view.warning_title}")
        lines.append(f"  {view.warning_message}")
    if result.reasons:
        lines.append("  Why this site was flagged:")
        lines.extend(f"  - {reason}" for reason in result.reasons)
    if result.status == Verdict.UNKNOWN:
        lines.append("  Could not parse domain")
    return "\n".join(lines)
