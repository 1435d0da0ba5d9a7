"""Payment matching strategies and scorers.

Scores bank transactions against outstanding rent calls:
- score_amount: amount closeness tiers (1.0 / 0.6 / 0.3 / 0.0)
- score_name: payer label vs tenant/company names (fuzzy, Levenshtein)
- score_reference: identifying tokens quoted in the reference (binary)
- CompositeMatcher: weighted combination with confidence tiers

Usage:
    >>> from openloyer.payment.matchers import CompositeMatcher
    >>> matcher = CompositeMatcher()
    >>> candidate = matcher.score(transaction, rent_call)
"""

__all__ = [
    "IMatcherStrategy",
    "CompositeMatcher",
    "MatchingSettings",
    "get_matching_settings",
    "normalize_text",
    "levenshtein_distance",
    "score_amount",
    "score_name",
    "score_reference",
]

from .amount import score_amount
from .base import IMatcherStrategy
from .composite import CompositeMatcher
from .config import MatchingSettings, get_matching_settings
from .name import score_name
from .reference import score_reference
from .text import levenshtein_distance, normalize_text
