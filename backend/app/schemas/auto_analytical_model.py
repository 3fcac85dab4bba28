"""Auto analytical model schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

REQUIRED_ON_UPDATE = ("name", "analytical_account_id", "is_active")

NO_CRITERIA_MESSAGE = (
    "At least one matching criteria (partner, partner_tag, product, or product_category) "
    "must be provided"
)


def has_match_criteria(partner_id, partner_tag, product_id, product_category_id) -> bool:
    return any(v is not None for v in (partner_id, partner_tag, product_id, product_category_id))


class AutoAnalyticalModelCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    partner_id: int | None = None
    partner_tag: str | None = Field(default=None, max_length=100)
    product_id: int | None = None
    product_category_id: int | None = None
    analytical_account_id: int

    @model_validator(mode="after")
    def check_match_criteria(self):
        if not has_match_criteria(
            self.partner_id, self.partner_tag, self.product_id, self.product_category_id
        ):
            raise ValueError(NO_CRITERIA_MESSAGE)
        return self


class AutoAnalyticalModelUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    partner_id: int | None = None
    partner_tag: str | None = Field(default=None, max_length=100)
    product_id: int | None = None
    product_category_id: int | None = None
    analytical_account_id: int | None = None
    is_active: bool | None = None

    @model_validator(mode="after")
    def check_required_not_null(self):
        # Match fields may be cleared; these columns may only be replaced.
        for field in REQUIRED_ON_UPDATE:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class AutoAnalyticalModelResponse(BaseModel):
    id: int
    name: str
    partner_id: int | None
    partner_tag: str | None
    product_id: int | None
    product_category_id: int | None
    analytical_account_id: int
    analytical_account_code: str | None = None
    analytical_account_name: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ResolveRequest(BaseModel):
    partner_id: int | None = None
    product_id: int | None = None


class ResolveResult(BaseModel):
    analytical_account_id: int | None
    matched_rule_id: int | None = None
    score: int = 0
