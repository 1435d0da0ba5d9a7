"""Domain enums for payment matching."""

from enum import Enum


class ConfidenceLevel(str, Enum):
    """Coarse confidence tier derived from a composite score.

    Tiers (default thresholds):
        HIGH   score >= 0.8
        MEDIUM 0.5 <= score < 0.8
        LOW    0.3 <= score < 0.5 (below 0.3 a candidate is never reported)
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    def __str__(self) -> str:
        return self.value


class MatchOutcome(str, Enum):
    """Decision taken for one transaction during a matching run."""

    MATCHED = "matched"  # Bound to exactly one rent call (claimed)
    AMBIGUOUS = "ambiguous"  # Several comparable candidates, manual review
    UNMATCHED = "unmatched"  # No candidate cleared the eligibility floor

    def __str__(self) -> str:
        return self.value
