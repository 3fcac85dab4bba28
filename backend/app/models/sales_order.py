"""Sales order models."""

from datetime import date

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin
from app.models.document import DocumentHeaderMixin, DocumentLineMixin


class SalesOrder(Base, TimestampMixin, DocumentHeaderMixin):
    __tablename__ = "sales_orders"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    order_number: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    customer_id: Mapped[int] = mapped_column(ForeignKey("contacts.id"), nullable=False, index=True)
    order_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Relationships
    customer = relationship("Contact")
    lines = relationship(
        "SalesOrderLine",
        back_populates="sales_order",
        cascade="all, delete-orphan",
        order_by="SalesOrderLine.id",
    )


class SalesOrderLine(Base, TimestampMixin, DocumentLineMixin):
    __tablename__ = "sales_order_lines"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    sales_order_id: Mapped[int] = mapped_column(
        ForeignKey("sales_orders.id", ondelete="CASCADE"), nullable=False, index=True
    )

    sales_order = relationship("SalesOrder", back_populates="lines")
