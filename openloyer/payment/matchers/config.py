"""Configuration for the payment matching engine.

Pydantic-based settings with environment variable overrides.

Environment Variables:
- OPENLOYER_MATCHING_AMOUNT_WEIGHT: Weight of the amount sub-score (default: 0.5)
- OPENLOYER_MATCHING_NAME_WEIGHT: Weight of the name sub-score (default: 0.35)
- OPENLOYER_MATCHING_REFERENCE_WEIGHT: Weight of the reference sub-score (default: 0.15)
- OPENLOYER_MATCHING_HIGH_THRESHOLD / MEDIUM_THRESHOLD / LOW_THRESHOLD: Confidence tiers
- OPENLOYER_MATCHING_AMBIGUITY_GAP: Score gap that resolves competing candidates (default: 0.15)
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchingSettings(BaseSettings):
    """Weights and thresholds of the payment matching engine.

    Consistency between fields (weights summing to 1.0, ordered thresholds)
    is checked by ``CompositeMatcher``, which raises ``ConfigurationError``.

    Example:
        >>> settings = MatchingSettings()
        >>> settings.amount_weight
        0.5
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENLOYER_MATCHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Composite weights
    amount_weight: float = Field(default=0.5, ge=0.0, le=1.0)
    name_weight: float = Field(default=0.35, ge=0.0, le=1.0)
    reference_weight: float = Field(default=0.15, ge=0.0, le=1.0)

    # Confidence tiers
    high_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    medium_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    low_threshold: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Eligibility floor: candidates scoring below are discarded",
    )

    # Disambiguation
    ambiguity_gap: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Top candidate wins outright when it leads the runner-up by more than this",
    )

    # Amount scoring
    refund_penalty: float = Field(default=0.5, ge=0.0, le=1.0)
    amount_close_tolerance: float = Field(default=0.05, ge=0.0)
    amount_loose_tolerance: float = Field(default=0.20, ge=0.0)

    # Text scoring
    containment_min_length: int = Field(default=4, ge=1)
    lease_token_length: int = Field(default=8, ge=1)


@lru_cache
def get_matching_settings() -> MatchingSettings:
    """Return the process-wide matching settings (read once from the environment)."""
    return MatchingSettings()
