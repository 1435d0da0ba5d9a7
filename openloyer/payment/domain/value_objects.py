"""Domain value objects for payment matching.

Value Objects in DDD:
- Immutable (frozen dataclasses)
- No identity (equality based on attributes)
- Describe characteristics, not entities

Transactions and rent-call candidates are supplied by upstream collaborators
(bank import, rent-call generation). The remaining objects are produced by a
matching run and serialised with ``to_dict()`` into the camelCase document
consumed by the reconciliation workflow.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ...exceptions import ValidationError
from .enums import ConfidenceLevel


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present key among camelCase/snake_case spellings."""
    for key in keys:
        if key in data:
            return data[key]
    return None


def _optional_text(data: Mapping[str, Any], *keys: str) -> str | None:
    value = _pick(data, *keys)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Expected a string", field=keys[0], value=value)
    return value


def _required_id(data: Mapping[str, Any]) -> str:
    value = data.get("id")
    if value is None or value == "":
        raise ValidationError("Missing identifier", field="id")
    return str(value)


def _required_cents(data: Mapping[str, Any], *keys: str) -> int:
    value = _pick(data, *keys)
    if value is None:
        raise ValidationError("Missing amount", field=keys[0])
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Amount must be an integer number of cents", field=keys[0], value=value)
    return value


@dataclass(frozen=True)
class Transaction:
    """Incoming bank transaction to reconcile.

    ``amount_cents`` is signed: a negative amount is a refund or credit.
    """

    id: str
    amount_cents: int
    payer_name: str | None = None
    reference: str | None = None
    date: str | None = None

    @property
    def is_refund(self) -> bool:
        """Whether this transaction is an outgoing refund/credit."""
        return self.amount_cents < 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Transaction":
        """Build from a camelCase or snake_case mapping.

        Raises:
            ValidationError: If ``id`` or the amount is missing or malformed
        """
        return cls(
            id=_required_id(data),
            amount_cents=_required_cents(data, "amountCents", "amount_cents"),
            payer_name=_optional_text(data, "payerName", "payer_name"),
            reference=_optional_text(data, "reference"),
            date=_optional_text(data, "date"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "amountCents": self.amount_cents,
            "payerName": self.payer_name,
            "reference": self.reference,
        }


@dataclass(frozen=True)
class RentCallCandidate:
    """Outstanding rent call (invoice) that a payment may settle.

    When ``company_name`` is set the tenant is a company and the company name
    is compared alongside any individual name.
    """

    id: str
    total_amount_cents: int
    tenant_first_name: str | None = None
    tenant_last_name: str | None = None
    company_name: str | None = None
    unit_identifier: str | None = None
    lease_id: str | None = None
    month: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RentCallCandidate":
        """Build from a camelCase or snake_case mapping.

        Raises:
            ValidationError: If ``id`` or the total amount is missing or malformed
        """
        return cls(
            id=_required_id(data),
            total_amount_cents=_required_cents(data, "totalAmountCents", "total_amount_cents"),
            tenant_first_name=_optional_text(data, "tenantFirstName", "tenant_first_name"),
            tenant_last_name=_optional_text(data, "tenantLastName", "tenant_last_name"),
            company_name=_optional_text(data, "companyName", "company_name"),
            unit_identifier=_optional_text(data, "unitIdentifier", "unit_identifier"),
            lease_id=_optional_text(data, "leaseId", "lease_id"),
            month=_optional_text(data, "month"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tenantFirstName": self.tenant_first_name,
            "tenantLastName": self.tenant_last_name,
            "companyName": self.company_name,
            "unitIdentifier": self.unit_identifier,
            "leaseId": self.lease_id,
            "totalAmountCents": self.total_amount_cents,
            "month": self.month,
        }


@dataclass(frozen=True)
class ScoredCandidate:
    """A rent call scored against one transaction.

    Attributes:
        rent_call_id: Identifier of the scored rent call
        score: Composite score in [0, 1], rounded to 2 decimals
        confidence: Tier derived from ``score``
        rent_call: The scored candidate
        amount_score: Amount sub-score after the refund penalty
        name_score: Name sub-score
        reference_score: Reference sub-score (0 or 1)
    """

    rent_call_id: str
    score: float
    confidence: ConfidenceLevel
    rent_call: RentCallCandidate
    amount_score: float = 0.0
    name_score: float = 0.0
    reference_score: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"Score must be between 0.0 and 1.0, got {self.score}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "rentCallId": self.rent_call_id,
            "score": self.score,
            "confidence": self.confidence.value,
            "rentCall": self.rent_call.to_dict(),
        }


@dataclass(frozen=True)
class MatchProposal:
    """Transaction bound to exactly one (claimed) rent call."""

    transaction_id: str
    rent_call_id: str
    score: float
    confidence: ConfidenceLevel
    transaction: Transaction
    rent_call: RentCallCandidate

    @classmethod
    def from_candidate(cls, transaction: Transaction, candidate: ScoredCandidate) -> "MatchProposal":
        return cls(
            transaction_id=transaction.id,
            rent_call_id=candidate.rent_call_id,
            score=candidate.score,
            confidence=candidate.confidence,
            transaction=transaction,
            rent_call=candidate.rent_call,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "transactionId": self.transaction_id,
            "rentCallId": self.rent_call_id,
            "score": self.score,
            "confidence": self.confidence.value,
            "transaction": self.transaction.to_dict(),
            "rentCall": self.rent_call.to_dict(),
        }


@dataclass(frozen=True)
class AmbiguousMatch:
    """Transaction with several comparable candidates, none of them claimed.

    ``score`` and ``confidence`` mirror the top-ranked candidate.
    """

    transaction_id: str
    score: float
    confidence: ConfidenceLevel
    transaction: Transaction
    candidates: tuple[ScoredCandidate, ...]

    def __post_init__(self) -> None:
        if len(self.candidates) < 2:
            raise ValueError("An ambiguous match needs at least two candidates")

    @classmethod
    def from_candidates(
        cls, transaction: Transaction, candidates: tuple[ScoredCandidate, ...]
    ) -> "AmbiguousMatch":
        best = candidates[0]
        return cls(
            transaction_id=transaction.id,
            score=best.score,
            confidence=best.confidence,
            transaction=transaction,
            candidates=candidates,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "transactionId": self.transaction_id,
            "score": self.score,
            "confidence": self.confidence.value,
            "transaction": self.transaction.to_dict(),
            "candidates": [candidate.to_dict() for candidate in self.candidates],
        }


@dataclass(frozen=True)
class UnmatchedTransaction:
    """Transaction for which no candidate cleared the eligibility floor."""

    transaction_id: str
    transaction: Transaction

    def to_dict(self) -> dict[str, Any]:
        return {
            "transactionId": self.transaction_id,
            "transaction": self.transaction.to_dict(),
        }


@dataclass(frozen=True)
class MatchingSummary:
    """Counts for one matching run."""

    matched: int
    unmatched: int
    ambiguous: int
    rent_call_count: int

    @property
    def transaction_count(self) -> int:
        return self.matched + self.unmatched + self.ambiguous

    @property
    def match_rate(self) -> float:
        """Share of transactions automatically matched (0.0 when empty)."""
        if self.transaction_count == 0:
            return 0.0
        return self.matched / self.transaction_count

    def to_dict(self) -> dict[str, int]:
        return {
            "matched": self.matched,
            "unmatched": self.unmatched,
            "ambiguous": self.ambiguous,
            "rentCallCount": self.rent_call_count,
        }


@dataclass(frozen=True)
class MatchingResult:
    """Outcome of a matching run: three disjoint lists plus a summary."""

    matches: tuple[MatchProposal, ...]
    ambiguous: tuple[AmbiguousMatch, ...]
    unmatched: tuple[UnmatchedTransaction, ...]
    summary: MatchingSummary

    @property
    def claimed_rent_call_ids(self) -> frozenset[str]:
        """Rent calls bound to a transaction during this run."""
        return frozenset(match.rent_call_id for match in self.matches)

    def to_dict(self) -> dict[str, Any]:
        return {
            "matches": [match.to_dict() for match in self.matches],
            "ambiguous": [entry.to_dict() for entry in self.ambiguous],
            "unmatched": [entry.to_dict() for entry in self.unmatched],
            "summary": self.summary.to_dict(),
        }
