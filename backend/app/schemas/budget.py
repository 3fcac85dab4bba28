"""Budget schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


class BudgetCreate(BaseModel):
    analytical_account_id: int
    period_start: date
    period_end: date
    budget_amount: Decimal = Field(ge=0)
    description: str | None = None

    @model_validator(mode="after")
    def check_period(self):
        if self.period_end <= self.period_start:
            raise ValueError("Period end must be after period start")
        return self


class BudgetResponse(BaseModel):
    id: int
    analytical_account_id: int
    analytical_account_code: str | None = None
    analytical_account_name: str | None = None
    period_start: date
    period_end: date
    budget_amount: Decimal
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
