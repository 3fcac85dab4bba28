"""Auto analytical model (cost center assignment rule)."""

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

MATCH_FIELDS = ("partner_id", "partner_tag", "product_id", "product_category_id")


class AutoAnalyticalModel(Base, TimestampMixin):
    """A rule that assigns an analytical account to document lines.

    Each of the four matching fields is optional; a null field is a wildcard.
    When a line is resolved, the active rule matching the most fields wins,
    and the most recently created rule wins among equals.
    """

    __tablename__ = "auto_analytical_models"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    partner_id: Mapped[int | None] = mapped_column(ForeignKey("contacts.id"), nullable=True)
    partner_tag: Mapped[str | None] = mapped_column(String(100), nullable=True)
    product_id: Mapped[int | None] = mapped_column(ForeignKey("products.id"), nullable=True)
    product_category_id: Mapped[int | None] = mapped_column(
        ForeignKey("product_categories.id"), nullable=True
    )
    analytical_account_id: Mapped[int] = mapped_column(
        ForeignKey("analytical_accounts.id"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Relationships
    partner = relationship("Contact")
    product = relationship("Product")
    product_category = relationship("ProductCategory")
    analytical_account = relationship("AnalyticalAccount")

    __table_args__ = (
        Index("idx_auto_analytical_models_active", "is_active"),
        CheckConstraint(
            "partner_id IS NOT NULL OR partner_tag IS NOT NULL "
            "OR product_id IS NOT NULL OR product_category_id IS NOT NULL",
            name="ck_auto_analytical_models_has_criteria",
        ),
    )
