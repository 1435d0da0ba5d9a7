"""
Pytest configuration and global fixtures.

This module provides shared fixtures used across all tests.
"""

from collections.abc import Callable
from typing import Any

import pytest

from openloyer.payment.domain.value_objects import RentCallCandidate, Transaction
from openloyer.payment.matchers.config import MatchingSettings


@pytest.fixture
def matching_settings() -> MatchingSettings:
    """Default matching settings, independent of the process environment."""
    return MatchingSettings(_env_file=None)


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for bank transactions with sensible defaults."""

    def _make(**overrides: Any) -> Transaction:
        data: dict[str, Any] = {
            "id": "tx-1",
            "date": "2026-02-01",
            "amount_cents": 85000,
            "payer_name": "Dupont Jean",
            "reference": None,
        }
        data.update(overrides)
        return Transaction(**data)

    return _make


@pytest.fixture
def make_rent_call() -> Callable[..., RentCallCandidate]:
    """Factory for rent call candidates with sensible defaults."""

    def _make(**overrides: Any) -> RentCallCandidate:
        data: dict[str, Any] = {
            "id": "rc-1",
            "tenant_first_name": "Jean",
            "tenant_last_name": "Dupont",
            "company_name": None,
            "unit_identifier": "Apt 3B",
            "lease_id": "lease-abc12345-def",
            "total_amount_cents": 85000,
            "month": "2026-02",
        }
        data.update(overrides)
        return RentCallCandidate(**data)

    return _make
