"""Read-side lookups used by the auto analytical engine.

The engine, the line processor and the budget period validator only depend
on the protocols below. The SQLAlchemy implementations read through the
request's session, so they see rows written earlier in the same transaction.
"""

from datetime import date
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.analytical_account import AnalyticalAccount
from app.models.auto_analytical_model import AutoAnalyticalModel
from app.models.budget import Budget
from app.models.contact import Contact
from app.models.product import Product


class RuleStore(Protocol):
    async def list_active_rules_by_recency_desc(self) -> list[AutoAnalyticalModel]: ...


class PartnerStore(Protocol):
    async def find_by_id(self, partner_id: int) -> Contact | None: ...


class ProductStore(Protocol):
    async def find_by_id(self, product_id: int) -> Product | None: ...


class AnalyticalAccountStore(Protocol):
    async def find_by_id(self, account_id: int) -> AnalyticalAccount | None: ...


class BudgetStore(Protocol):
    async def find_latest_by_account(self, account_id: int) -> Budget | None: ...

    async def find_containing(self, account_id: int, on: date) -> Budget | None: ...


class SqlRuleStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_active_rules_by_recency_desc(self) -> list[AutoAnalyticalModel]:
        """Active rules, newest first; id breaks ties between same-instant rows."""
        result = await self.db.execute(
            select(AutoAnalyticalModel)
            .where(AutoAnalyticalModel.is_active.is_(True))
            .order_by(AutoAnalyticalModel.created_at.desc(), AutoAnalyticalModel.id.desc())
        )
        return list(result.scalars().all())


class SqlPartnerStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, partner_id: int) -> Contact | None:
        return await self.db.get(Contact, partner_id)


class SqlProductStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, product_id: int) -> Product | None:
        return await self.db.get(Product, product_id)


class SqlAnalyticalAccountStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, account_id: int) -> AnalyticalAccount | None:
        return await self.db.get(AnalyticalAccount, account_id)


class SqlBudgetStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_latest_by_account(self, account_id: int) -> Budget | None:
        """The account's budget with the most recent period_start."""
        result = await self.db.execute(
            select(Budget)
            .options(selectinload(Budget.analytical_account))
            .where(Budget.analytical_account_id == account_id)
            .order_by(Budget.period_start.desc(), Budget.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def find_containing(self, account_id: int, on: date) -> Budget | None:
        """The account's budget whose period includes `on` (latest one if several overlap)."""
        result = await self.db.execute(
            select(Budget)
            .options(selectinload(Budget.analytical_account))
            .where(
                Budget.analytical_account_id == account_id,
                Budget.period_start <= on,
                Budget.period_end >= on,
            )
            .order_by(Budget.period_start.desc(), Budget.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
