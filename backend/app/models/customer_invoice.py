"""Customer invoice models."""

from datetime import date

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin
from app.models.document import DocumentHeaderMixin, DocumentLineMixin


class CustomerInvoice(Base, TimestampMixin, DocumentHeaderMixin):
    __tablename__ = "customer_invoices"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    invoice_number: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    customer_id: Mapped[int] = mapped_column(ForeignKey("contacts.id"), nullable=False, index=True)
    sales_order_id: Mapped[int | None] = mapped_column(ForeignKey("sales_orders.id"), nullable=True)
    invoice_date: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Relationships
    customer = relationship("Contact")
    lines = relationship(
        "CustomerInvoiceLine",
        back_populates="customer_invoice",
        cascade="all, delete-orphan",
        order_by="CustomerInvoiceLine.id",
    )


class CustomerInvoiceLine(Base, TimestampMixin, DocumentLineMixin):
    __tablename__ = "customer_invoice_lines"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    customer_invoice_id: Mapped[int] = mapped_column(
        ForeignKey("customer_invoices.id", ondelete="CASCADE"), nullable=False, index=True
    )

    customer_invoice = relationship("CustomerInvoice", back_populates="lines")
