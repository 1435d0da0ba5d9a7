"""Amount closeness scoring between a transaction and a rent call."""

from decimal import Decimal

from .config import MatchingSettings, get_matching_settings

EXACT_SCORE = 1.0
CLOSE_SCORE = 0.6
LOOSE_SCORE = 0.3


def score_amount(
    transaction_cents: int,
    rent_call_cents: int,
    settings: MatchingSettings | None = None,
) -> float:
    """Score how close a transaction amount is to a rent call total.

    Scoring (default tolerances):
    - Rent call total of 0 → 0.0 (degenerate candidate, never safe)
    - Exact amount → 1.0
    - Within 5% → 0.6
    - Within 20% → 0.3
    - Beyond → 0.0

    Args:
        transaction_cents: Absolute transaction amount in cents
        rent_call_cents: Rent call total in cents
        settings: Tolerances to use (process settings by default)

    Returns:
        One of 0.0, 0.3, 0.6, 1.0

    Note:
        The ratio is computed with Decimal so that a difference of exactly 5%
        or 20% falls inside its tier.
    """
    settings = settings or get_matching_settings()

    if rent_call_cents == 0:
        return 0.0
    if transaction_cents == rent_call_cents:
        return EXACT_SCORE

    ratio = Decimal(transaction_cents) / Decimal(rent_call_cents)
    diff = abs(1 - ratio)

    if diff <= Decimal(str(settings.amount_close_tolerance)):
        return CLOSE_SCORE
    if diff <= Decimal(str(settings.amount_loose_tolerance)):
        return LOOSE_SCORE
    return 0.0


def score_signed_amount(
    amount_cents: int,
    rent_call_cents: int,
    settings: MatchingSettings | None = None,
) -> float:
    """Amount score for a signed transaction amount.

    Refunds (negative amounts) are scored on their magnitude, then multiplied
    by the refund penalty so they never look as safe as a direct payment.
    """
    settings = settings or get_matching_settings()
    raw = score_amount(abs(amount_cents), rent_call_cents, settings)
    if amount_cents < 0:
        return raw * settings.refund_penalty
    return raw
