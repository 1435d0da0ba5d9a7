"""Tests for CompositeMatcher weighted scoring.

Combines the amount, name and reference sub-scores; uses Hypothesis to check
that scores stay in range and tiers follow the score.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from openloyer.exceptions import ConfigurationError
from openloyer.payment.domain.enums import ConfidenceLevel
from openloyer.payment.domain.value_objects import RentCallCandidate, Transaction
from openloyer.payment.matchers.composite import CompositeMatcher
from openloyer.payment.matchers.config import MatchingSettings

pytestmark = pytest.mark.unit


class TestCompositeMatcherScoring:
    """Weighted score and confidence tiers."""

    def test_exact_amount_and_name(self, make_transaction, make_rent_call):
        # 1.0 * 0.5 + 1.0 * 0.35 + 0 * 0.15
        candidate = CompositeMatcher().score(make_transaction(), make_rent_call())

        assert candidate.score == 0.85
        assert candidate.confidence == ConfidenceLevel.HIGH
        assert candidate.amount_score == 1.0
        assert candidate.name_score == 1.0
        assert candidate.reference_score == 0.0

    def test_all_three_signals(self, make_transaction, make_rent_call):
        transaction = make_transaction(reference="LOYER APT 3B")
        candidate = CompositeMatcher().score(transaction, make_rent_call())

        assert candidate.score == 1.0
        assert candidate.confidence == ConfidenceLevel.HIGH

    def test_amount_only_is_medium(self, make_transaction, make_rent_call):
        transaction = make_transaction(payer_name=None)
        candidate = CompositeMatcher().score(transaction, make_rent_call())

        assert candidate.score == 0.5
        assert candidate.confidence == ConfidenceLevel.MEDIUM

    def test_refund_penalty(self, make_transaction, make_rent_call):
        # 1.0 * 0.5 (penalty) * 0.5 + 1.0 * 0.35
        transaction = make_transaction(amount_cents=-85000)
        candidate = CompositeMatcher().score(transaction, make_rent_call())

        assert candidate.amount_score == 0.5
        assert candidate.score == 0.6
        assert candidate.confidence == ConfidenceLevel.MEDIUM

    def test_partial_amount_and_typo_is_low(self, make_transaction, make_rent_call):
        # amount 0.3 * 0.5 + name 0.83 * 0.35 = 0.4405
        transaction = make_transaction(amount_cents=100000, payer_name="Dupnt")
        candidate = CompositeMatcher().score(transaction, make_rent_call())

        assert candidate.score == 0.44
        assert candidate.confidence == ConfidenceLevel.LOW

    def test_zero_amount_rent_call(self, make_transaction, make_rent_call):
        candidate = CompositeMatcher().score(
            make_transaction(), make_rent_call(total_amount_cents=0)
        )
        assert candidate.amount_score == 0.0
        assert candidate.score == 0.35

    def test_empty_optional_fields_never_raise(self):
        transaction = Transaction(id="tx", amount_cents=0)
        rent_call = RentCallCandidate(id="rc", total_amount_cents=0)

        candidate = CompositeMatcher().score(transaction, rent_call)

        assert candidate.score == 0.0
        assert candidate.confidence == ConfidenceLevel.LOW

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (1.0, ConfidenceLevel.HIGH),
            (0.8, ConfidenceLevel.HIGH),
            (0.79, ConfidenceLevel.MEDIUM),
            (0.5, ConfidenceLevel.MEDIUM),
            (0.49, ConfidenceLevel.LOW),
            (0.3, ConfidenceLevel.LOW),
        ],
    )
    def test_confidence_tiers(self, score, expected):
        assert CompositeMatcher().to_confidence(score) == expected

    def test_eligibility_floor(self, make_transaction, make_rent_call):
        matcher = CompositeMatcher()
        weak = matcher.score(make_transaction(amount_cents=1, payer_name="Unknown"), make_rent_call())

        assert weak.score < 0.3
        assert not matcher.is_eligible(weak)
        assert matcher.is_eligible(matcher.score(make_transaction(), make_rent_call()))

    @given(
        amount=st.integers(min_value=-10**7, max_value=10**7),
        total=st.integers(min_value=0, max_value=10**7),
        payer=st.text(max_size=30) | st.none(),
        reference=st.text(max_size=30) | st.none(),
        last_name=st.text(max_size=15) | st.none(),
    )
    def test_score_bounds_and_tier_is_function_of_score(
        self, amount, total, payer, reference, last_name
    ):
        matcher = CompositeMatcher()
        candidate = matcher.score(
            Transaction(id="tx", amount_cents=amount, payer_name=payer, reference=reference),
            RentCallCandidate(id="rc", total_amount_cents=total, tenant_last_name=last_name),
        )

        assert 0.0 <= candidate.score <= 1.0
        assert candidate.confidence == matcher.to_confidence(candidate.score)


class TestRoundedScoreDrivesDecisions:
    """Tier and eligibility follow the reported 2-decimal score."""

    # "sci residences li" is a 17/20 truncation of the company name: 0.85
    TRUNCATED_PAYER = "SCI RESIDENCES LI"

    def _rent_call(self, make_rent_call):
        return make_rent_call(
            tenant_first_name=None,
            tenant_last_name=None,
            company_name="SCI Residences Lilas",
            unit_identifier=None,
            lease_id=None,
        )

    def test_just_below_high_rounds_into_high(self, make_transaction, make_rent_call):
        # 1.0 * 0.5 + 0.85 * 0.35 = 0.7975
        transaction = make_transaction(payer_name=self.TRUNCATED_PAYER)
        candidate = CompositeMatcher().score(transaction, self._rent_call(make_rent_call))

        assert candidate.name_score == 0.85
        assert candidate.score == 0.8
        assert candidate.confidence == ConfidenceLevel.HIGH

    def test_just_below_floor_rounds_into_eligible(self, make_transaction, make_rent_call):
        # 0.0 * 0.5 + 0.85 * 0.35 = 0.2975
        matcher = CompositeMatcher()
        transaction = make_transaction(amount_cents=50000, payer_name=self.TRUNCATED_PAYER)
        candidate = matcher.score(transaction, self._rent_call(make_rent_call))

        assert candidate.amount_score == 0.0
        assert candidate.score == 0.3
        assert matcher.is_eligible(candidate)


class TestCompositeMatcherConfiguration:
    """Settings validation."""

    def test_weights_must_sum_to_one(self):
        settings = MatchingSettings(_env_file=None, amount_weight=0.6)

        with pytest.raises(ConfigurationError, match="Weights must sum to 1.0"):
            CompositeMatcher(settings)

    def test_thresholds_must_be_ordered(self):
        settings = MatchingSettings(_env_file=None, low_threshold=0.6, medium_threshold=0.5)

        with pytest.raises(ConfigurationError) as exc_info:
            CompositeMatcher(settings)

        assert exc_info.value.context["expected"] == "low <= medium <= high"

    def test_custom_weights(self, make_transaction, make_rent_call):
        settings = MatchingSettings(
            _env_file=None, amount_weight=0.4, name_weight=0.4, reference_weight=0.2
        )
        candidate = CompositeMatcher(settings).score(make_transaction(), make_rent_call())

        assert candidate.score == 0.8
        assert candidate.confidence == ConfidenceLevel.HIGH

    def test_repr(self):
        assert repr(CompositeMatcher()) == (
            "<CompositeMatcher(weights=[amt:50%, name:35%, ref:15%], min_score=30%)>"
        )
