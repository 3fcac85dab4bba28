"""Test doubles and data builders shared by the test modules."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from app.core.database import async_session_factory
from app.models import AutoAnalyticalModel, Budget

T0 = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


# ── In-memory stores ──────────────────────────────────


class InMemoryRuleStore:
    def __init__(self, rules=None):
        self.rules = list(rules or [])
        self.calls = 0

    async def list_active_rules_by_recency_desc(self):
        self.calls += 1
        active = [r for r in self.rules if r.is_active]
        return sorted(active, key=lambda r: (r.created_at, r.id), reverse=True)


class FailingRuleStore:
    async def list_active_rules_by_recency_desc(self):
        raise ConnectionError("rule store unavailable")


class InMemoryEntityStore:
    def __init__(self, entities=None):
        self.entities = {e.id: e for e in entities or []}
        self.lookups = []

    async def find_by_id(self, entity_id):
        self.lookups.append(entity_id)
        return self.entities.get(entity_id)


class InMemoryBudgetStore:
    def __init__(self, budgets=None):
        self.budgets = list(budgets or [])

    def _for_account(self, account_id):
        budgets = [b for b in self.budgets if b.analytical_account_id == account_id]
        return sorted(budgets, key=lambda b: (b.period_start, b.id), reverse=True)

    async def find_latest_by_account(self, account_id):
        budgets = self._for_account(account_id)
        return budgets[0] if budgets else None

    async def find_containing(self, account_id, on):
        for budget in self._for_account(account_id):
            if budget.period_start <= on <= budget.period_end:
                return budget
        return None


class RecordingLogger:
    """structlog-compatible logger that keeps events in memory."""

    def __init__(self):
        self.events = []

    def debug(self, event, **kw):
        self.events.append(("debug", event, kw))

    def info(self, event, **kw):
        self.events.append(("info", event, kw))

    def warning(self, event, **kw):
        self.events.append(("warning", event, kw))

    def names(self, level=None):
        return [event for lvl, event, _ in self.events if level is None or lvl == level]


# ── Builders ──────────────────────────────────────────


def make_rule(
    rule_id,
    account_id,
    *,
    minutes=0,
    partner_id=None,
    partner_tag=None,
    product_id=None,
    product_category_id=None,
    is_active=True,
):
    """Unsaved rule created `minutes` after T0."""
    return AutoAnalyticalModel(
        id=rule_id,
        name=f"Rule {rule_id}",
        partner_id=partner_id,
        partner_tag=partner_tag,
        product_id=product_id,
        product_category_id=product_category_id,
        analytical_account_id=account_id,
        is_active=is_active,
        created_at=T0 + timedelta(minutes=minutes),
    )


def make_budget(budget_id, account_id, start: date, end: date):
    return Budget(
        id=budget_id,
        analytical_account_id=account_id,
        period_start=start,
        period_end=end,
        budget_amount=Decimal("10000.00"),
    )


async def add_rule(**fields) -> int:
    """Insert a rule in its own committed transaction."""
    fields.setdefault("name", "rule")
    async with async_session_factory() as session:
        rule = AutoAnalyticalModel(**fields)
        session.add(rule)
        await session.commit()
        return rule.id


async def add_budget(account_id: int, start: date, end: date) -> int:
    async with async_session_factory() as session:
        budget = Budget(
            analytical_account_id=account_id,
            period_start=start,
            period_end=end,
            budget_amount=Decimal("5000.00"),
        )
        session.add(budget)
        await session.commit()
        return budget.id
