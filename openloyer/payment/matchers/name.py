"""Payer name scoring against tenant or company names.

Bank labels rarely carry a clean name: they wrap it in transfer codes
("VIR", "PRLV"), append a purpose ("LOYER FEVRIER"), swap first and last
names or truncate long names. Several heuristics are tried per name variant
and the best one wins:

1. Exact equality → 1.0 (short-circuits)
2. Containment of one string in the other → 0.8
3. Prefix (bank truncation) → shorter length / longer length
4. Edit similarity → 1 - levenshtein / longer length
"""

from .base import round_score
from .config import MatchingSettings, get_matching_settings
from .text import edit_similarity, normalize_text

CONTAINMENT_SCORE = 0.8


def name_variants(
    first_name: str | None,
    last_name: str | None,
    company_name: str | None,
) -> list[str]:
    """Normalised names a payer label may be compared against.

    Order: last name, "first last", "last first", company name. The two
    combined forms only exist when both first and last names are present.
    Variants that normalise to an empty string are dropped.
    """
    variants: list[str] = []

    if last_name:
        variants.append(normalize_text(last_name))
        if first_name:
            variants.append(normalize_text(f"{first_name} {last_name}"))
            variants.append(normalize_text(f"{last_name} {first_name}"))
    if company_name:
        variants.append(normalize_text(company_name))

    return [variant for variant in variants if variant]


def _variant_score(payer: str, variant: str, min_length: int) -> float:
    """Best heuristic score for one non-identical variant."""
    best = 0.0

    if len(variant) >= min_length and variant in payer:
        best = max(best, CONTAINMENT_SCORE)
    if len(payer) >= min_length and payer in variant:
        best = max(best, CONTAINMENT_SCORE)

    if payer.startswith(variant) or variant.startswith(payer):
        best = max(best, min(len(payer), len(variant)) / max(len(payer), len(variant)))

    return max(best, edit_similarity(payer, variant))


def score_name(
    payer_name: str | None,
    first_name: str | None,
    last_name: str | None,
    company_name: str | None,
    settings: MatchingSettings | None = None,
) -> float:
    """Score the similarity between a payer label and a rent call's tenant.

    Args:
        payer_name: Free-text payer name from the bank transaction
        first_name: Tenant first name
        last_name: Tenant last name
        company_name: Company name when the tenant is a company

    Returns:
        Score in [0.0, 1.0] rounded to 2 decimals; 0.0 when the payer
        name is missing or blank.

    Example:
        >>> score_name("VIR DUPONT JEAN LOYER", "Jean", "Dupont", None)
        0.8
    """
    payer = normalize_text(payer_name)
    if not payer:
        return 0.0

    settings = settings or get_matching_settings()
    best = 0.0

    for variant in name_variants(first_name, last_name, company_name):
        if payer == variant:
            return 1.0
        best = max(best, _variant_score(payer, variant, settings.containment_min_length))

    return round_score(best)
