"""Payment reference scoring.

A reference either quotes something identifying the rent call (unit, tenant
or company name, lease id fragment) or it does not, so the score is binary.
"""

from typing import TYPE_CHECKING

from .config import MatchingSettings, get_matching_settings
from .text import normalize_text

if TYPE_CHECKING:
    from ..domain.value_objects import RentCallCandidate


def reference_tokens(
    rent_call: "RentCallCandidate", settings: MatchingSettings | None = None
) -> list[str]:
    """Tokens identifying a rent call inside a payment reference.

    The lease id contributes its first characters (8 by default), lowercased
    but otherwise raw, and only when it is at least that long.
    """
    settings = settings or get_matching_settings()
    tokens: list[str] = []

    if rent_call.unit_identifier:
        tokens.append(normalize_text(rent_call.unit_identifier))
    if rent_call.tenant_last_name:
        tokens.append(normalize_text(rent_call.tenant_last_name))
    if rent_call.company_name:
        tokens.append(normalize_text(rent_call.company_name))

    lease_id = rent_call.lease_id
    if lease_id and len(lease_id) >= settings.lease_token_length:
        tokens.append(lease_id[: settings.lease_token_length].lower())

    return [token for token in tokens if token]


def score_reference(
    reference: str | None,
    rent_call: "RentCallCandidate",
    settings: MatchingSettings | None = None,
) -> float:
    """Return 1.0 if the normalised reference contains any rent call token, else 0.0."""
    normalized_ref = normalize_text(reference)
    if not normalized_ref:
        return 0.0

    for token in reference_tokens(rent_call, settings):
        if token in normalized_ref:
            return 1.0

    return 0.0
