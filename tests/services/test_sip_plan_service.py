"""Tests for saved SIP plans on every backend."""

from decimal import Decimal

import pytest

from models.plans import SIPPlan


class TestSipPlanService:
    def test_create_and_list(self, any_services):
        saved = any_services.sip_plans.create(
            SIPPlan(
                monthly_amount=Decimal("10000"),
                expected_annual_return_percent=Decimal("12.5"),
                tenure_years=15,
            )
        )

        (plan,) = any_services.sip_plans.find_all()

        assert saved.id is not None
        assert plan.id == saved.id
        assert plan.monthly_amount == Decimal("10000")
        assert plan.expected_annual_return_percent == Decimal("12.5")
        assert plan.tenure_years == 15

    def test_invalid_plan_rejected(self, any_services):
        with pytest.raises(ValueError, match="tenure_years"):
            any_services.sip_plans.create(
                SIPPlan(
                    monthly_amount=Decimal("10000"),
                    expected_annual_return_percent=Decimal("12"),
                    tenure_years=0,
                )
            )
        assert any_services.sip_plans.find_all() == []

    def test_delete(self, any_services):
        saved = any_services.sip_plans.create(
            SIPPlan(Decimal("500"), Decimal("8"), 3)
        )

        assert any_services.sip_plans.delete(saved.id) is True
        assert any_services.sip_plans.delete(saved.id) is False
