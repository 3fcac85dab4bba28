"""Columns shared by every commercial document and its lines."""

from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

DOCUMENT_STATUS_DRAFT = "DRAFT"
DOCUMENT_STATUS_POSTED = "POSTED"
DOCUMENT_STATUS_CANCELLED = "CANCELLED"


class DocumentHeaderMixin:
    status: Mapped[str] = mapped_column(String(20), default=DOCUMENT_STATUS_DRAFT)  # DRAFT, POSTED, CANCELLED
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=Decimal("0.00"))
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class DocumentLineMixin:
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    # Null = no cost center resolved, to be set manually later
    analytical_account_id: Mapped[int | None] = mapped_column(
        ForeignKey("analytical_accounts.id"), nullable=True, index=True
    )
