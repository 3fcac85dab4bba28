"""Auto analytical models API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.schemas.auto_analytical_model import (
    AutoAnalyticalModelCreate,
    AutoAnalyticalModelResponse,
    AutoAnalyticalModelUpdate,
    ResolveRequest,
    ResolveResult,
)
from app.services.auto_analytical_service import AutoAnalyticalService

router = APIRouter()


@router.get("", response_model=list[AutoAnalyticalModelResponse])
async def list_models(
    is_active: bool | None = None,
    db: AsyncSession = Depends(get_db),
):
    """List auto analytical models, most recent first."""
    service = AutoAnalyticalService(db)
    return await service.list_models(is_active)


@router.post("", response_model=AutoAnalyticalModelResponse, status_code=201)
async def create_model(
    data: AutoAnalyticalModelCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new auto analytical model."""
    service = AutoAnalyticalService(db)
    return await service.create_model(data)


@router.post("/resolve", response_model=ResolveResult)
async def resolve(
    data: ResolveRequest,
    db: AsyncSession = Depends(get_db),
):
    """Preview the analytical account a line with this partner and product would get."""
    service = AutoAnalyticalService(db)
    return await service.preview(data.partner_id, data.product_id)


@router.get("/{model_id}", response_model=AutoAnalyticalModelResponse)
async def get_model(
    model_id: int,
    db: AsyncSession = Depends(get_db),
):
    service = AutoAnalyticalService(db)
    return await service.get_model(model_id)


@router.patch("/{model_id}", response_model=AutoAnalyticalModelResponse)
async def update_model(
    model_id: int,
    data: AutoAnalyticalModelUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an existing auto analytical model."""
    service = AutoAnalyticalService(db)
    return await service.update_model(model_id, data)


@router.delete("/{model_id}", status_code=204)
async def delete_model(
    model_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete an auto analytical model."""
    service = AutoAnalyticalService(db)
    await service.delete_model(model_id)
