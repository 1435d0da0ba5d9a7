"""Base interface for payment matching strategies.

A matcher scores one rent-call candidate against one bank transaction. The
matching service ranks those scores and decides the outcome, so any strategy
implementing ``IMatcherStrategy`` can be plugged into it.
"""

from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.value_objects import RentCallCandidate, ScoredCandidate, Transaction

_CENT = Decimal("0.01")


class IMatcherStrategy(ABC):
    """Abstract base class for payment matching strategies.

    Implementations return a ``ScoredCandidate`` whose score lies in
    [0.0, 1.0] and expose the eligibility floor below which the service
    discards a candidate.
    """

    @property
    @abstractmethod
    def min_score(self) -> float:
        """Lowest score at which a candidate is still eligible."""

    @abstractmethod
    def score(
        self, transaction: "Transaction", rent_call: "RentCallCandidate"
    ) -> "ScoredCandidate":
        """Score a rent call against a transaction.

        Must never raise on missing optional fields: absent data lowers the
        score instead.
        """

    def is_eligible(self, candidate: "ScoredCandidate") -> bool:
        return candidate.score >= self.min_score

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


def round_score(value: float) -> float:
    """Round a score to 2 decimals, halves rounding up (0.845 -> 0.85)."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))
