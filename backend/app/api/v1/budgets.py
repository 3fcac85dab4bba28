"""Budget API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.schemas.budget import BudgetCreate, BudgetResponse
from app.services.budget_service import BudgetService

router = APIRouter()


@router.get("", response_model=list[BudgetResponse])
async def list_budgets(
    analytical_account_id: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """List budgets, optionally for one analytical account."""
    service = BudgetService(db)
    return await service.list_budgets(analytical_account_id)


@router.post("", response_model=BudgetResponse, status_code=201)
async def create_budget(
    data: BudgetCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a budget for an analytical account."""
    service = BudgetService(db)
    return await service.create_budget(data)
