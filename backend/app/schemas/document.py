"""Purchase order, vendor bill, sales order and customer invoice schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class DocumentLineCreate(BaseModel):
    product_id: int
    description: str | None = None
    quantity: Decimal = Field(gt=0)
    unit_price: Decimal = Field(ge=0)
    # Set = manual override, never replaced by auto analytical resolution
    analytical_account_id: int | None = None


class DocumentLineResponse(BaseModel):
    id: int
    product_id: int
    description: str | None
    quantity: Decimal
    unit_price: Decimal
    subtotal: Decimal
    analytical_account_id: int | None

    model_config = {"from_attributes": True}


class PurchaseOrderCreate(BaseModel):
    vendor_id: int
    order_date: date | None = None
    expected_date: date | None = None
    notes: str | None = None
    lines: list[DocumentLineCreate] = Field(min_length=1)


class PurchaseOrderResponse(BaseModel):
    id: int
    order_number: str
    vendor_id: int
    vendor_name: str | None = None
    order_date: date
    expected_date: date | None
    status: str
    total_amount: Decimal
    notes: str | None
    lines: list[DocumentLineResponse]
    created_at: datetime

    model_config = {"from_attributes": True}


class VendorBillCreate(BaseModel):
    vendor_id: int
    purchase_order_id: int | None = None
    bill_date: date | None = None
    due_date: date | None = None
    notes: str | None = None
    lines: list[DocumentLineCreate] = Field(min_length=1)


class VendorBillResponse(BaseModel):
    id: int
    bill_number: str
    vendor_id: int
    vendor_name: str | None = None
    purchase_order_id: int | None
    bill_date: date
    due_date: date | None
    status: str
    total_amount: Decimal
    notes: str | None
    lines: list[DocumentLineResponse]
    created_at: datetime

    model_config = {"from_attributes": True}


class SalesOrderCreate(BaseModel):
    customer_id: int
    order_date: date | None = None
    notes: str | None = None
    lines: list[DocumentLineCreate] = Field(min_length=1)


class SalesOrderResponse(BaseModel):
    id: int
    order_number: str
    customer_id: int
    customer_name: str | None = None
    order_date: date
    status: str
    total_amount: Decimal
    notes: str | None
    lines: list[DocumentLineResponse]
    created_at: datetime

    model_config = {"from_attributes": True}


class CustomerInvoiceCreate(BaseModel):
    customer_id: int
    sales_order_id: int | None = None
    invoice_date: date | None = None
    due_date: date | None = None
    notes: str | None = None
    lines: list[DocumentLineCreate] = Field(min_length=1)


class CustomerInvoiceResponse(BaseModel):
    id: int
    invoice_number: str
    customer_id: int
    customer_name: str | None = None
    sales_order_id: int | None
    invoice_date: date
    due_date: date | None
    status: str
    total_amount: Decimal
    notes: str | None
    lines: list[DocumentLineResponse]
    created_at: datetime

    model_config = {"from_attributes": True}
