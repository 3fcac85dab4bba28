"""Vendor bill models."""

from datetime import date

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin
from app.models.document import DocumentHeaderMixin, DocumentLineMixin


class VendorBill(Base, TimestampMixin, DocumentHeaderMixin):
    __tablename__ = "vendor_bills"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    bill_number: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    vendor_id: Mapped[int] = mapped_column(ForeignKey("contacts.id"), nullable=False, index=True)
    purchase_order_id: Mapped[int | None] = mapped_column(
        ForeignKey("purchase_orders.id"), nullable=True
    )
    bill_date: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Relationships
    vendor = relationship("Contact")
    lines = relationship(
        "VendorBillLine",
        back_populates="vendor_bill",
        cascade="all, delete-orphan",
        order_by="VendorBillLine.id",
    )


class VendorBillLine(Base, TimestampMixin, DocumentLineMixin):
    __tablename__ = "vendor_bill_lines"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vendor_bill_id: Mapped[int] = mapped_column(
        ForeignKey("vendor_bills.id", ondelete="CASCADE"), nullable=False, index=True
    )

    vendor_bill = relationship("VendorBill", back_populates="lines")
