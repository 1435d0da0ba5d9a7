"""Business logic services for payment matching."""

__all__ = [
    "CandidateRanking",
    "PaymentMatchingService",
]

from .matching_service import CandidateRanking, PaymentMatchingService
