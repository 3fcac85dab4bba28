"""Budget period check for purchase orders.

Every analytical account attached to an order's lines must have its budget
period cover the order date. Accounts without any budget are not checked.
"""

from datetime import date

import structlog

from app.config import settings
from app.core.exceptions import OutOfBudgetPeriodError
from app.models.budget import Budget
from app.schemas.document import DocumentLineCreate
from app.services.analytical_stores import BudgetStore

STRATEGY_LATEST = "latest"
STRATEGY_CONTAINING = "containing"
STRATEGIES = (STRATEGY_LATEST, STRATEGY_CONTAINING)


class BudgetPeriodValidator:
    def __init__(self, budget_store: BudgetStore, strategy: str | None = None, logger=None):
        strategy = strategy or settings.budget_period_strategy
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown budget period strategy: {strategy}")
        self.budget_store = budget_store
        self.strategy = strategy
        self.logger = logger or structlog.get_logger()

    async def validate(self, document_date: date, lines: list[DocumentLineCreate]) -> None:
        """Raise OutOfBudgetPeriodError on the first account whose budget misses the date."""
        for account_id in _distinct_accounts(lines):
            budget = await self._select_budget(account_id, document_date)
            if budget is None:
                continue
            if budget.covers(document_date):
                continue

            if self.strategy == STRATEGY_LATEST:
                await self._flag_latest_mismatch(account_id, document_date, budget)

            account = budget.analytical_account
            raise OutOfBudgetPeriodError(
                analytical_account_id=account_id,
                account_name=account.name if account else str(account_id),
                document_date=document_date,
                period_start=budget.period_start,
                period_end=budget.period_end,
            )

    async def _select_budget(self, account_id: int, on: date) -> Budget | None:
        if self.strategy == STRATEGY_CONTAINING:
            budget = await self.budget_store.find_containing(account_id, on)
            if budget is not None:
                return budget
        return await self.budget_store.find_latest_by_account(account_id)

    async def _flag_latest_mismatch(self, account_id: int, on: date, latest: Budget) -> None:
        # Only the latest budget is checked; an older one may still cover the date.
        covering = await self.budget_store.find_containing(account_id, on)
        if covering is not None and covering.id != latest.id:
            self.logger.warning(
                "budget_period_latest_mismatch",
                analytical_account_id=account_id,
                document_date=on.isoformat(),
                latest_budget_id=latest.id,
                covering_budget_id=covering.id,
            )


def _distinct_accounts(lines: list[DocumentLineCreate]) -> list[int]:
    seen: dict[int, None] = {}
    for line in lines:
        if line.analytical_account_id is not None:
            seen.setdefault(line.analytical_account_id, None)
    return list(seen)
