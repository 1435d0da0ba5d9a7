"""Payment reconciliation for rent collection.

This module implements:
- Fuzzy matching of bank transactions against outstanding rent calls
- Confidence tiers and disambiguation of competing candidates
- Prometheus metrics monitoring

Architecture: Domain-Driven Design (DDD) + Hexagonal Architecture
"""

__all__ = [
    "Transaction",
    "RentCallCandidate",
    "ScoredCandidate",
    "MatchProposal",
    "AmbiguousMatch",
    "UnmatchedTransaction",
    "MatchingSummary",
    "MatchingResult",
    "ConfidenceLevel",
    "MatchOutcome",
    "PaymentMatchingService",
    "match",
]

from collections.abc import Iterable

from .application.services import PaymentMatchingService
from .domain.enums import ConfidenceLevel, MatchOutcome
from .domain.value_objects import (
    AmbiguousMatch,
    MatchingResult,
    MatchingSummary,
    MatchProposal,
    RentCallCandidate,
    ScoredCandidate,
    Transaction,
    UnmatchedTransaction,
)


def match(
    transactions: Iterable[Transaction],
    rent_calls: Iterable[RentCallCandidate],
    excluded_rent_call_ids: Iterable[str] = frozenset(),
) -> MatchingResult:
    """Match transactions against rent calls with the default settings."""
    return PaymentMatchingService().match(transactions, rent_calls, excluded_rent_call_ids)
