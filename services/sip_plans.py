"""Saved SIP plan service for database operations."""

from decimal import Decimal
from typing import List

from engine.errors import InvalidParameter
from engine.growth import project_sip
from models.plans import SIPPlan


class SipPlanService:
    """Service for saving SIP plans for later review."""

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def create(self, plan: SIPPlan) -> SIPPlan:
        """Save a SIP plan.

        Raises:
            ValueError: If the plan cannot be projected (negative amount or
                        rate, tenure below one year).
        """
        try:
            project_sip(plan)
        except InvalidParameter as e:
            raise ValueError(str(e)) from e

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO sip_plans (monthly_amount, expected_return, tenure_years) "
                "VALUES (?, ?, ?)",
                (
                    float(plan.monthly_amount),
                    float(plan.expected_annual_return_percent),
                    plan.tenure_years,
                ),
            )
            conn.commit()
            return SIPPlan(
                monthly_amount=plan.monthly_amount,
                expected_annual_return_percent=plan.expected_annual_return_percent,
                tenure_years=plan.tenure_years,
                id=cursor.lastrowid,
            )

    def find_all(self) -> List[SIPPlan]:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, monthly_amount, expected_return, tenure_years "
                "FROM sip_plans ORDER BY id"
            )
            return [
                SIPPlan(
                    id=row[0],
                    monthly_amount=Decimal(str(row[1])),
                    expected_annual_return_percent=Decimal(str(row[2])),
                    tenure_years=row[3],
                )
                for row in cursor.fetchall()
            ]

    def delete(self, plan_id: int) -> bool:
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM sip_plans WHERE id = ?", (plan_id,))
            conn.commit()
            return cursor.rowcount > 0
