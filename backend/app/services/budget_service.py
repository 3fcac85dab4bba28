"""Budget management service.

Budget periods of one analytical account never overlap, so at most one
budget covers any given date.
"""

from datetime import date

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import ConflictError, NotFoundError
from app.models.analytical_account import AnalyticalAccount
from app.models.budget import Budget
from app.schemas.budget import BudgetCreate

logger = structlog.get_logger()


class BudgetService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_budgets(self, analytical_account_id: int | None = None) -> list[dict]:
        """List budgets, latest period first."""
        query = (
            select(Budget)
            .options(selectinload(Budget.analytical_account))
            .order_by(Budget.period_start.desc(), Budget.id.desc())
        )
        if analytical_account_id is not None:
            query = query.where(Budget.analytical_account_id == analytical_account_id)
        result = await self.db.execute(query)
        return [self._to_dict(b, b.analytical_account) for b in result.scalars().all()]

    async def create_budget(self, data: BudgetCreate) -> dict:
        account = await self.db.get(AnalyticalAccount, data.analytical_account_id)
        if account is None:
            raise NotFoundError("Analytical account")

        overlapping = await self._find_overlap(
            data.analytical_account_id, data.period_start, data.period_end
        )
        if overlapping is not None:
            raise ConflictError(
                "Overlapping budget period for analytical account: existing budget covers "
                f"{overlapping.period_start.isoformat()} to {overlapping.period_end.isoformat()}"
            )

        budget = Budget(
            analytical_account_id=data.analytical_account_id,
            period_start=data.period_start,
            period_end=data.period_end,
            budget_amount=data.budget_amount,
            description=data.description,
        )
        self.db.add(budget)
        await self.db.flush()
        await self.db.refresh(budget)

        logger.info(
            "budget_created",
            budget_id=budget.id,
            analytical_account_id=account.id,
            period_start=budget.period_start.isoformat(),
            period_end=budget.period_end.isoformat(),
        )
        return self._to_dict(budget, account)

    async def _find_overlap(self, account_id: int, start: date, end: date) -> Budget | None:
        # Both bounds are inclusive: sharing a single day is an overlap.
        result = await self.db.execute(
            select(Budget)
            .where(
                Budget.analytical_account_id == account_id,
                Budget.period_start <= end,
                Budget.period_end >= start,
            )
            .order_by(Budget.period_start)
            .limit(1)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _to_dict(budget: Budget, account: AnalyticalAccount | None) -> dict:
        return {
            "id": budget.id,
            "analytical_account_id": budget.analytical_account_id,
            "analytical_account_code": account.code if account else None,
            "analytical_account_name": account.name if account else None,
            "period_start": budget.period_start,
            "period_end": budget.period_end,
            "budget_amount": budget.budget_amount,
            "description": budget.description,
            "created_at": budget.created_at,
        }
