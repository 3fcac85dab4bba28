"""Auto analytical resolution engine.

Picks the analytical account (cost center) for a document line from the
active auto analytical models:

1. A model may constrain partner_id, partner_tag, product_id and/or
   product_category_id; a null field is a wildcard.
2. Its score is the number of non-null fields equal to the line's context.
3. The highest score wins; equal scores go to the most recently created
   model (then the highest id).
4. A model scoring 0 never wins. No winner means no account (None), which is
   a normal outcome, not an error.

Scores are computed at resolution time, nothing is cached between calls.
"""

from dataclasses import dataclass

import structlog

from app.core.exceptions import NotFoundError
from app.models.auto_analytical_model import AutoAnalyticalModel
from app.models.product import Product
from app.schemas.document import DocumentLineCreate
from app.services.analytical_stores import (
    AnalyticalAccountStore,
    PartnerStore,
    ProductStore,
    RuleStore,
)


@dataclass(frozen=True)
class MatchContext:
    """Values observed on the line being resolved. Any of them may be unknown."""

    partner_id: int | None = None
    partner_tag: str | None = None
    product_id: int | None = None
    product_category_id: int | None = None


@dataclass(frozen=True)
class RankedRule:
    rule: AutoAnalyticalModel
    score: int

    @property
    def analytical_account_id(self) -> int:
        return self.rule.analytical_account_id


def _field_matches(expected, observed) -> bool:
    # None on either side never counts as a match
    return expected is not None and observed is not None and expected == observed


def score_rule(rule: AutoAnalyticalModel, context: MatchContext) -> int:
    """Number of the rule's constraining fields satisfied by the context (0-4)."""
    return sum((
        _field_matches(rule.partner_id, context.partner_id),
        _field_matches(rule.partner_tag, context.partner_tag),
        _field_matches(rule.product_id, context.product_id),
        _field_matches(rule.product_category_id, context.product_category_id),
    ))


def rank_rules(rules: list[AutoAnalyticalModel], context: MatchContext) -> list[RankedRule]:
    """Applicable rules, best first: score desc, then created_at desc, then id desc.

    Rules scoring 0 are left out. The order does not depend on the order of
    `rules`.
    """
    scored = [RankedRule(rule=rule, score=score_rule(rule, context)) for rule in rules]
    applicable = [candidate for candidate in scored if candidate.score > 0]
    return sorted(
        applicable,
        key=lambda c: (c.score, c.rule.created_at, c.rule.id),
        reverse=True,
    )


class ResolutionEngine:
    def __init__(self, rule_store: RuleStore, logger=None):
        self.rule_store = rule_store
        self.logger = logger or structlog.get_logger()

    async def resolve(self, context: MatchContext) -> int | None:
        """Analytical account of the winning rule, or None when nothing matches."""
        winner = await self.resolve_with_details(context)
        return winner.analytical_account_id if winner else None

    async def resolve_with_details(self, context: MatchContext) -> RankedRule | None:
        rules = await self.rule_store.list_active_rules_by_recency_desc()
        if not rules:
            self.logger.debug("analytical_resolution_no_rules", context=context)
            return None

        ranked = rank_rules(rules, context)
        winner = ranked[0] if ranked else None

        self.logger.debug(
            "analytical_resolution",
            context=context,
            active_rules=len(rules),
            candidates=[(c.rule.id, c.score) for c in ranked],
            winner_rule_id=winner.rule.id if winner else None,
            analytical_account_id=winner.analytical_account_id if winner else None,
        )
        return winner


class ContextBuilder:
    def __init__(self, partner_store: PartnerStore, product_store: ProductStore, logger=None):
        self.partner_store = partner_store
        self.product_store = product_store
        self.logger = logger or structlog.get_logger()

    async def build(
        self,
        partner_id: int | None,
        product_id: int | None,
        *,
        require_product: bool = False,
    ) -> MatchContext:
        """Build the matching context for a (partner, product) pair.

        Unknown partners and products leave the tag / category empty. With
        `require_product`, an unknown product raises NotFoundError instead.
        The ids themselves always pass through so id-based rules still apply.
        """
        partner_tag = None
        if partner_id is not None:
            partner = await self.partner_store.find_by_id(partner_id)
            if partner is not None:
                partner_tag = partner.tag

        product_category_id = None
        if require_product:
            product_category_id = (await self.require_product(product_id)).category_id
        elif product_id is not None:
            product = await self.product_store.find_by_id(product_id)
            if product is not None:
                product_category_id = product.category_id

        context = MatchContext(
            partner_id=partner_id,
            partner_tag=partner_tag,
            product_id=product_id,
            product_category_id=product_category_id,
        )
        self.logger.debug("analytical_context_built", context=context)
        return context

    async def require_product(self, product_id: int | None) -> Product:
        product = None
        if product_id is not None:
            product = await self.product_store.find_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id}")
        return product


class LineProcessor:
    def __init__(
        self,
        context_builder: ContextBuilder,
        engine: ResolutionEngine,
        account_store: AnalyticalAccountStore,
    ):
        self.context_builder = context_builder
        self.engine = engine
        self.account_store = account_store

    async def assign_accounts(
        self, partner_id: int, lines: list[DocumentLineCreate]
    ) -> list[DocumentLineCreate]:
        """Return copies of `lines` with analytical_account_id resolved.

        Lines that already carry an analytical account are returned as they
        are, once their product and account are known to exist. The resolved
        value may be None.
        """
        contexts: dict[int, MatchContext] = {}
        known_products: set[int] = set()
        known_accounts: set[int] = set()
        processed = []
        for line in lines:
            if line.analytical_account_id is not None:
                if line.product_id not in known_products:
                    await self.context_builder.require_product(line.product_id)
                    known_products.add(line.product_id)
                if line.analytical_account_id not in known_accounts:
                    await self._require_account(line.analytical_account_id)
                    known_accounts.add(line.analytical_account_id)
                processed.append(line)
                continue

            context = contexts.get(line.product_id)
            if context is None:
                context = await self.context_builder.build(
                    partner_id, line.product_id, require_product=True
                )
                contexts[line.product_id] = context
                known_products.add(line.product_id)

            account_id = await self.engine.resolve(context)
            processed.append(line.model_copy(update={"analytical_account_id": account_id}))
        return processed

    async def _require_account(self, account_id: int) -> None:
        if await self.account_store.find_by_id(account_id) is None:
            raise NotFoundError(f"Analytical account {account_id}")
