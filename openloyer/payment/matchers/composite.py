"""Composite matcher combining amount, name and reference signals.

Implements the weighted scoring used by the matching service:
- Amount closeness (50% weight, halved for refunds)
- Payer name similarity (35% weight)
- Reference tokens (15% weight)

This is the default matcher for rent reconciliation.
"""

from typing import TYPE_CHECKING

from ...exceptions import ConfigurationError
from ..domain.enums import ConfidenceLevel
from ..domain.value_objects import ScoredCandidate
from .amount import score_signed_amount
from .base import IMatcherStrategy, round_score
from .config import MatchingSettings, get_matching_settings
from .name import score_name
from .reference import score_reference

if TYPE_CHECKING:
    from ..domain.value_objects import RentCallCandidate, Transaction


class CompositeMatcher(IMatcherStrategy):
    """Score rent calls using a weighted combination of three signals.

    1. **Amount (50% weight)**: 1.0 exact, 0.6 within 5%, 0.3 within 20%,
       0.0 beyond or when the rent call total is 0. Multiplied by 0.5 when
       the transaction is a refund.
    2. **Name (35% weight)**: best of exact, containment, prefix and
       edit-distance similarity over the tenant name variants.
    3. **Reference (15% weight)**: 1.0 when the reference quotes the unit,
       tenant, company or lease id fragment.

    Final score = amount * 0.5 + name * 0.35 + reference * 0.15, rounded to
    2 decimals. Confidence: >= 0.8 high, >= 0.5 medium, otherwise low.
    Candidates below 0.3 are not eligible.

    Example:
        >>> matcher = CompositeMatcher()
        >>> candidate = matcher.score(transaction, rent_call)
        >>> candidate.score, candidate.confidence
        (0.85, <ConfidenceLevel.HIGH: 'high'>)
    """

    def __init__(self, settings: MatchingSettings | None = None) -> None:
        """Initialize composite matcher.

        Raises:
            ConfigurationError: If weights don't sum to 1.0 or thresholds are
                not ordered low <= medium <= high
        """
        settings = settings or get_matching_settings()

        total_weight = settings.amount_weight + settings.name_weight + settings.reference_weight
        if abs(total_weight - 1.0) > 0.01:
            raise ConfigurationError(
                f"Weights must sum to 1.0, got {total_weight}",
                setting="amount_weight/name_weight/reference_weight",
                expected="sum == 1.0",
            )

        if not settings.low_threshold <= settings.medium_threshold <= settings.high_threshold:
            raise ConfigurationError(
                "Confidence thresholds must be ordered",
                setting="low_threshold/medium_threshold/high_threshold",
                expected="low <= medium <= high",
            )

        self.settings = settings

    @property
    def min_score(self) -> float:
        return self.settings.low_threshold

    def score(self, transaction: "Transaction", rent_call: "RentCallCandidate") -> ScoredCandidate:
        """Score one rent call against one transaction."""
        amount_score = score_signed_amount(
            transaction.amount_cents, rent_call.total_amount_cents, self.settings
        )
        name_score = score_name(
            transaction.payer_name,
            rent_call.tenant_first_name,
            rent_call.tenant_last_name,
            rent_call.company_name,
            self.settings,
        )
        reference_score = score_reference(transaction.reference, rent_call, self.settings)

        composite = round_score(
            amount_score * self.settings.amount_weight
            + name_score * self.settings.name_weight
            + reference_score * self.settings.reference_weight
        )
        composite = min(1.0, max(0.0, composite))

        return ScoredCandidate(
            rent_call_id=rent_call.id,
            score=composite,
            confidence=self.to_confidence(composite),
            rent_call=rent_call,
            amount_score=amount_score,
            name_score=name_score,
            reference_score=reference_score,
        )

    def to_confidence(self, score: float) -> ConfidenceLevel:
        """Map a composite score to its confidence tier."""
        if score >= self.settings.high_threshold:
            return ConfidenceLevel.HIGH
        if score >= self.settings.medium_threshold:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW

    def __repr__(self) -> str:
        return (
            f"<CompositeMatcher("
            f"weights=[amt:{self.settings.amount_weight:.0%}, "
            f"name:{self.settings.name_weight:.0%}, "
            f"ref:{self.settings.reference_weight:.0%}], "
            f"min_score={self.min_score:.0%})>"
        )
