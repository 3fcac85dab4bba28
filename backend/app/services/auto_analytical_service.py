"""Auto analytical model service.

Manages CRUD operations on auto analytical models and wires the resolution
engine onto the request's session.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.models.analytical_account import AnalyticalAccount
from app.models.auto_analytical_model import MATCH_FIELDS, AutoAnalyticalModel
from app.schemas.auto_analytical_model import (
    NO_CRITERIA_MESSAGE,
    AutoAnalyticalModelCreate,
    AutoAnalyticalModelUpdate,
    has_match_criteria,
)
from app.schemas.document import DocumentLineCreate
from app.services.analytical_stores import (
    SqlAnalyticalAccountStore,
    SqlPartnerStore,
    SqlProductStore,
    SqlRuleStore,
)
from app.services.auto_analytical_engine import ContextBuilder, LineProcessor, ResolutionEngine

logger = structlog.get_logger()


class AutoAnalyticalService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.engine = ResolutionEngine(SqlRuleStore(db))
        self.context_builder = ContextBuilder(SqlPartnerStore(db), SqlProductStore(db))
        self.line_processor = LineProcessor(
            self.context_builder, self.engine, SqlAnalyticalAccountStore(db)
        )

    # ── CRUD ───────────────────────────────────────────

    async def list_models(self, is_active: bool | None = None) -> list[dict]:
        """List auto analytical models, most recent first."""
        query = select(AutoAnalyticalModel).order_by(
            AutoAnalyticalModel.created_at.desc(), AutoAnalyticalModel.id.desc()
        )
        if is_active is not None:
            query = query.where(AutoAnalyticalModel.is_active.is_(is_active))
        result = await self.db.execute(query)
        return [await self._to_dict(model) for model in result.scalars().all()]

    async def get_model(self, model_id: int) -> dict:
        model = await self._get_model(model_id)
        return await self._to_dict(model)

    async def create_model(self, data: AutoAnalyticalModelCreate) -> dict:
        """Create a new auto analytical model."""
        await self._check_account(data.analytical_account_id)
        model = AutoAnalyticalModel(
            name=data.name,
            partner_id=data.partner_id,
            partner_tag=data.partner_tag,
            product_id=data.product_id,
            product_category_id=data.product_category_id,
            analytical_account_id=data.analytical_account_id,
            is_active=True,
        )
        self.db.add(model)
        await self.db.flush()
        await self.db.refresh(model)

        logger.info("auto_analytical_model_created", model_id=model.id, name=model.name)
        return await self._to_dict(model)

    async def update_model(self, model_id: int, data: AutoAnalyticalModelUpdate) -> dict:
        """Update an existing model. The result must still constrain at least one field."""
        model = await self._get_model(model_id)
        update_data = data.model_dump(exclude_unset=True)

        merged = {field: update_data.get(field, getattr(model, field)) for field in MATCH_FIELDS}
        if not has_match_criteria(**merged):
            raise ValidationError(NO_CRITERIA_MESSAGE)
        if "analytical_account_id" in update_data:
            await self._check_account(update_data["analytical_account_id"])

        for key, value in update_data.items():
            setattr(model, key, value)
        await self.db.flush()
        await self.db.refresh(model)

        logger.info("auto_analytical_model_updated", model_id=model.id, fields=sorted(update_data))
        return await self._to_dict(model)

    async def delete_model(self, model_id: int) -> None:
        model = await self._get_model(model_id)
        await self.db.delete(model)
        await self.db.flush()
        logger.info("auto_analytical_model_deleted", model_id=model_id)

    # ── Resolution ─────────────────────────────────────

    async def preview(self, partner_id: int | None, product_id: int | None) -> dict:
        """Dry run: what would a line with this partner and product be assigned?

        Goes through the same context building and resolution as document
        creation, but never fails on unknown ids.
        """
        if partner_id is None or product_id is None:
            return {"analytical_account_id": None, "matched_rule_id": None, "score": 0}

        context = await self.context_builder.build(partner_id, product_id)
        winner = await self.engine.resolve_with_details(context)
        if winner is None:
            return {"analytical_account_id": None, "matched_rule_id": None, "score": 0}
        return {
            "analytical_account_id": winner.analytical_account_id,
            "matched_rule_id": winner.rule.id,
            "score": winner.score,
        }

    async def assign_accounts(
        self, partner_id: int, lines: list[DocumentLineCreate]
    ) -> list[DocumentLineCreate]:
        return await self.line_processor.assign_accounts(partner_id, lines)

    # ── Helpers ─────────────────────────────────────────

    async def _get_model(self, model_id: int) -> AutoAnalyticalModel:
        model = await self.db.get(AutoAnalyticalModel, model_id)
        if not model:
            raise NotFoundError("Auto analytical model")
        return model

    async def _check_account(self, account_id: int) -> None:
        if await self.db.get(AnalyticalAccount, account_id) is None:
            raise NotFoundError("Analytical account")

    async def _to_dict(self, model: AutoAnalyticalModel) -> dict:
        account = await self.db.get(AnalyticalAccount, model.analytical_account_id)
        return {
            "id": model.id,
            "name": model.name,
            "partner_id": model.partner_id,
            "partner_tag": model.partner_tag,
            "product_id": model.product_id,
            "product_category_id": model.product_category_id,
            "analytical_account_id": model.analytical_account_id,
            "analytical_account_code": account.code if account else None,
            "analytical_account_name": account.name if account else None,
            "is_active": model.is_active,
            "created_at": model.created_at,
            "updated_at": model.updated_at,
        }
