"""Tests for payment reference scoring."""

import pytest

from openloyer.payment.matchers.config import MatchingSettings
from openloyer.payment.matchers.reference import reference_tokens, score_reference

pytestmark = pytest.mark.unit


class TestReferenceTokens:
    """Tests for reference_tokens()."""

    def test_all_tokens(self, make_rent_call):
        rent_call = make_rent_call(company_name="SCI Les Tilleuls")
        assert reference_tokens(rent_call) == ["apt 3b", "dupont", "sci les tilleuls", "lease-ab"]

    def test_short_lease_id_is_ignored(self, make_rent_call):
        rent_call = make_rent_call(lease_id="abc123", unit_identifier=None)
        assert reference_tokens(rent_call) == ["dupont"]

    def test_lease_fragment_is_lowercased_not_normalized(self, make_rent_call):
        rent_call = make_rent_call(lease_id="ÉTÉ-2026-XYZ", unit_identifier=None, tenant_last_name=None)
        assert reference_tokens(rent_call) == ["été-2026"]

    def test_custom_lease_token_length(self, make_rent_call):
        settings = MatchingSettings(_env_file=None, lease_token_length=4)
        rent_call = make_rent_call(unit_identifier=None, tenant_last_name=None)
        assert reference_tokens(rent_call, settings) == ["leas"]


class TestScoreReference:
    """Tests for score_reference()."""

    @pytest.mark.parametrize("reference", [None, "", "   "])
    def test_missing_reference(self, make_rent_call, reference):
        assert score_reference(reference, make_rent_call()) == 0.0

    def test_unit_identifier(self, make_rent_call):
        assert score_reference("LOYER APT 3B FEV", make_rent_call()) == 1.0

    def test_tenant_last_name(self, make_rent_call):
        assert score_reference("VIR DUPONT LOYER", make_rent_call()) == 1.0

    def test_company_name(self, make_rent_call):
        rent_call = make_rent_call(company_name="SCI Les Tilleuls")
        assert score_reference("SCI LES TILLEULS LOYER", rent_call) == 1.0

    def test_lease_id_fragment(self, make_rent_call):
        assert score_reference("lease-ab PAYMENT", make_rent_call()) == 1.0

    def test_accented_reference(self, make_rent_call):
        rent_call = make_rent_call(tenant_last_name="Hervé", unit_identifier=None, lease_id=None)
        assert score_reference("LOYER HERVE FEVRIER", rent_call) == 1.0

    def test_no_token_found(self, make_rent_call):
        assert score_reference("RANDOM TEXT", make_rent_call()) == 0.0

    def test_rent_call_without_tokens(self, make_rent_call):
        rent_call = make_rent_call(
            unit_identifier=None, tenant_last_name=None, company_name=None, lease_id=None
        )
        assert score_reference("LOYER APT 3B DUPONT", rent_call) == 0.0
