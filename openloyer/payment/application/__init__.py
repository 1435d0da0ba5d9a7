"""Application layer for payment matching.

Contains the orchestration service following the Service Layer pattern.
"""

__all__ = [
    "CandidateRanking",
    "PaymentMatchingService",
]

from .services import CandidateRanking, PaymentMatchingService
