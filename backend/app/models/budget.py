"""Budget model."""

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class Budget(Base, TimestampMixin):
    """Planned spend for one analytical account over an inclusive date range."""

    __tablename__ = "budgets"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    analytical_account_id: Mapped[int] = mapped_column(
        ForeignKey("analytical_accounts.id"), nullable=False
    )
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)
    budget_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    analytical_account = relationship("AnalyticalAccount", back_populates="budgets")

    __table_args__ = (
        Index("idx_budgets_account_period", "analytical_account_id", "period_start"),
        CheckConstraint("period_end > period_start", name="ck_budgets_period_order"),
    )

    def covers(self, on: date) -> bool:
        return self.period_start <= on <= self.period_end
