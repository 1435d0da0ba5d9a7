"""Payment matching service: reconcile bank transactions with rent calls.

For each transaction (in input order) the service ranks the rent calls that
are still available and takes one of three decisions:

- **matched**: a single eligible candidate, or a top candidate leading the
  runner-up by more than the ambiguity gap. The rent call is claimed and is
  not offered to later transactions of the same run.
- **ambiguous**: several comparable candidates. None is claimed and the
  transaction is left for manual resolution.
- **unmatched**: nothing cleared the eligibility floor.

Assignment is greedy and order-sensitive: when two transactions compete for
the same rent call, the earlier one wins. No global optimisation is attempted.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from ....utils.logging import LogPerformance, get_logger
from ... import metrics
from ...domain.enums import MatchOutcome
from ...domain.value_objects import (
    AmbiguousMatch,
    MatchingResult,
    MatchingSummary,
    MatchProposal,
    RentCallCandidate,
    ScoredCandidate,
    Transaction,
    UnmatchedTransaction,
)
from ...matchers import (
    CompositeMatcher,
    IMatcherStrategy,
    MatchingSettings,
    get_matching_settings,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class CandidateRanking:
    """Decision for one transaction.

    ``candidates`` holds the single winner for MATCHED, every eligible
    candidate (best first) for AMBIGUOUS, and nothing for UNMATCHED.
    """

    outcome: MatchOutcome
    candidates: tuple[ScoredCandidate, ...] = ()

    @property
    def best(self) -> ScoredCandidate | None:
        return self.candidates[0] if self.candidates else None


@dataclass
class _MatchingState:
    """Accumulator threaded through one run."""

    claimed_ids: set[str] = field(default_factory=set)
    matches: list[MatchProposal] = field(default_factory=list)
    ambiguous: list[AmbiguousMatch] = field(default_factory=list)
    unmatched: list[UnmatchedTransaction] = field(default_factory=list)


class PaymentMatchingService:
    """Match bank transactions against outstanding rent calls.

    The service holds no per-run state, so one instance can serve concurrent
    callers as long as each passes its own collections.

    Example:
        >>> service = PaymentMatchingService()
        >>> result = service.match(transactions, rent_calls, excluded_rent_call_ids={"rc-9"})
        >>> result.summary.matched
        3
    """

    def __init__(
        self,
        settings: MatchingSettings | None = None,
        matcher: IMatcherStrategy | None = None,
        strategy_name: str = "composite",
    ):
        self.settings = settings or get_matching_settings()
        self.matcher = matcher or CompositeMatcher(self.settings)
        self.strategy_name = strategy_name

    @property
    def ambiguity_gap(self) -> float:
        return self.settings.ambiguity_gap

    def match(
        self,
        transactions: Iterable[Transaction],
        rent_calls: Iterable[RentCallCandidate],
        excluded_rent_call_ids: Iterable[str] = frozenset(),
    ) -> MatchingResult:
        """Reconcile transactions against rent calls.

        Args:
            transactions: Transactions to reconcile, processed in this order
            rent_calls: Open rent call candidates
            excluded_rent_call_ids: Rent calls already settled elsewhere. A
                single id may be passed as a plain string.

        Returns:
            MatchingResult with disjoint matched/ambiguous/unmatched lists.
            A rent call appears in at most one match.
        """
        if isinstance(excluded_rent_call_ids, str):
            excluded_rent_call_ids = (excluded_rent_call_ids,)
        excluded = frozenset(excluded_rent_call_ids)
        available = [rc for rc in rent_calls if rc.id not in excluded]
        transactions = list(transactions)

        logger.info(
            "payment_matching_started",
            transaction_count=len(transactions),
            rent_call_count=len(available),
            excluded_count=len(excluded),
        )

        state = _MatchingState()
        with LogPerformance("payment_matching", logger) as perf:
            for transaction in transactions:
                self._apply(state, transaction, available)

            result = MatchingResult(
                matches=tuple(state.matches),
                ambiguous=tuple(state.ambiguous),
                unmatched=tuple(state.unmatched),
                summary=MatchingSummary(
                    matched=len(state.matches),
                    unmatched=len(state.unmatched),
                    ambiguous=len(state.ambiguous),
                    rent_call_count=len(available),
                ),
            )

        metrics.record_matching_run(self.strategy_name, result, perf.elapsed_seconds)
        logger.info(
            "payment_matching_summary",
            matched=result.summary.matched,
            ambiguous=result.summary.ambiguous,
            unmatched=result.summary.unmatched,
            rent_call_count=result.summary.rent_call_count,
        )
        return result

    def _apply(
        self,
        state: _MatchingState,
        transaction: Transaction,
        available: list[RentCallCandidate],
    ) -> None:
        """Rank one transaction and fold its decision into the run state."""
        open_rent_calls = [rc for rc in available if rc.id not in state.claimed_ids]
        ranking = self.rank_candidates(transaction, open_rent_calls)

        if ranking.outcome is MatchOutcome.MATCHED:
            best = ranking.candidates[0]
            state.claimed_ids.add(best.rent_call_id)
            state.matches.append(MatchProposal.from_candidate(transaction, best))
        elif ranking.outcome is MatchOutcome.AMBIGUOUS:
            state.ambiguous.append(AmbiguousMatch.from_candidates(transaction, ranking.candidates))
        else:
            state.unmatched.append(
                UnmatchedTransaction(transaction_id=transaction.id, transaction=transaction)
            )

        logger.debug(
            "transaction_ranked",
            transaction_id=transaction.id,
            outcome=ranking.outcome.value,
            candidate_ids=[c.rent_call_id for c in ranking.candidates],
            best_score=ranking.best.score if ranking.best else None,
        )

    def rank_candidates(
        self, transaction: Transaction, rent_calls: Iterable[RentCallCandidate]
    ) -> CandidateRanking:
        """Score open rent calls for one transaction and decide the outcome.

        Algorithm:
        1. Score every candidate, drop those below the eligibility floor
        2. Sort by score descending (stable: ties keep input order)
        3. None → UNMATCHED, one → MATCHED
        4. Several → MATCHED on the top candidate if it leads the second by
           more than the ambiguity gap, otherwise AMBIGUOUS with all of them
        """
        scored = [self.matcher.score(transaction, rent_call) for rent_call in rent_calls]
        eligible = [candidate for candidate in scored if self.matcher.is_eligible(candidate)]
        eligible.sort(key=lambda c: c.score, reverse=True)

        if not eligible:
            return CandidateRanking(MatchOutcome.UNMATCHED)
        if len(eligible) == 1:
            return CandidateRanking(MatchOutcome.MATCHED, (eligible[0],))

        # Compare in cents: rounded float scores would misjudge exact gaps
        gap_cents = round(eligible[0].score * 100) - round(eligible[1].score * 100)
        if gap_cents > round(self.ambiguity_gap * 100):
            return CandidateRanking(MatchOutcome.MATCHED, (eligible[0],))

        return CandidateRanking(MatchOutcome.AMBIGUOUS, tuple(eligible))
