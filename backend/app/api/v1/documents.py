"""Document creation API routes.

One router per document kind; each is mounted under its own prefix.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.schemas.document import (
    CustomerInvoiceCreate,
    CustomerInvoiceResponse,
    PurchaseOrderCreate,
    PurchaseOrderResponse,
    SalesOrderCreate,
    SalesOrderResponse,
    VendorBillCreate,
    VendorBillResponse,
)
from app.services.document_service import DocumentService

purchase_orders_router = APIRouter()
vendor_bills_router = APIRouter()
sales_orders_router = APIRouter()
customer_invoices_router = APIRouter()


@purchase_orders_router.post("", response_model=PurchaseOrderResponse, status_code=201)
async def create_purchase_order(
    data: PurchaseOrderCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a purchase order; its date must fit the budget periods of its cost centers."""
    service = DocumentService(db)
    return await service.create_purchase_order(data)


@vendor_bills_router.post("", response_model=VendorBillResponse, status_code=201)
async def create_vendor_bill(
    data: VendorBillCreate,
    db: AsyncSession = Depends(get_db),
):
    service = DocumentService(db)
    return await service.create_vendor_bill(data)


@sales_orders_router.post("", response_model=SalesOrderResponse, status_code=201)
async def create_sales_order(
    data: SalesOrderCreate,
    db: AsyncSession = Depends(get_db),
):
    service = DocumentService(db)
    return await service.create_sales_order(data)


@customer_invoices_router.post("", response_model=CustomerInvoiceResponse, status_code=201)
async def create_customer_invoice(
    data: CustomerInvoiceCreate,
    db: AsyncSession = Depends(get_db),
):
    service = DocumentService(db)
    return await service.create_customer_invoice(data)
