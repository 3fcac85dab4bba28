"""Contact (customer / vendor) model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin

CONTACT_TYPE_CUSTOMER = "CUSTOMER"
CONTACT_TYPE_VENDOR = "VENDOR"


class Contact(Base, TimestampMixin):
    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_type: Mapped[str] = mapped_column(String(20), nullable=False)  # CUSTOMER, VENDOR
    tag: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
