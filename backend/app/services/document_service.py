"""Creation of purchase orders, vendor bills, sales orders and customer invoices.

Each document is created in the request's transaction: partner check,
auto analytical assignment of every line, the budget period check for
purchase orders, then header and line inserts. Any failure along the way
leaves nothing behind once the session rolls back.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BadRequestError, NotFoundError
from app.models.contact import CONTACT_TYPE_CUSTOMER, CONTACT_TYPE_VENDOR, Contact
from app.models.customer_invoice import CustomerInvoice, CustomerInvoiceLine
from app.models.purchase_order import PurchaseOrder, PurchaseOrderLine
from app.models.sales_order import SalesOrder, SalesOrderLine
from app.models.vendor_bill import VendorBill, VendorBillLine
from app.schemas.document import (
    CustomerInvoiceCreate,
    DocumentLineCreate,
    PurchaseOrderCreate,
    SalesOrderCreate,
    VendorBillCreate,
)
from app.services.analytical_stores import SqlBudgetStore
from app.services.auto_analytical_service import AutoAnalyticalService
from app.services.budget_period_validator import BudgetPeriodValidator

logger = structlog.get_logger()

CENT = Decimal("0.01")


class DocumentService:
    def __init__(self, db: AsyncSession, budget_period_strategy: str | None = None):
        self.db = db
        self.analytical = AutoAnalyticalService(db)
        self.budget_validator = BudgetPeriodValidator(
            SqlBudgetStore(db), strategy=budget_period_strategy
        )

    # ── Purchase side ──────────────────────────────────

    async def create_purchase_order(self, data: PurchaseOrderCreate) -> dict:
        vendor = await self._get_partner(data.vendor_id, CONTACT_TYPE_VENDOR)
        lines = await self.analytical.assign_accounts(vendor.id, data.lines)

        order_date = data.order_date or date.today()
        await self.budget_validator.validate(order_date, lines)

        order = PurchaseOrder(
            order_number=await self._next_number(PurchaseOrder, "PO"),
            vendor_id=vendor.id,
            order_date=order_date,
            expected_date=data.expected_date,
            notes=data.notes,
            total_amount=_total(lines),
        )
        created_lines = await self._insert(order, PurchaseOrderLine, "purchase_order_id", lines)

        logger.info(
            "purchase_order_created",
            order_id=order.id,
            order_number=order.order_number,
            vendor_id=vendor.id,
            lines=len(created_lines),
            unassigned_lines=_unassigned(created_lines),
        )
        return {
            **_header_dict(order, created_lines),
            "order_number": order.order_number,
            "vendor_id": order.vendor_id,
            "vendor_name": vendor.name,
            "order_date": order.order_date,
            "expected_date": order.expected_date,
        }

    async def create_vendor_bill(self, data: VendorBillCreate) -> dict:
        vendor = await self._get_partner(data.vendor_id, CONTACT_TYPE_VENDOR)
        lines = await self.analytical.assign_accounts(vendor.id, data.lines)

        bill = VendorBill(
            bill_number=await self._next_number(VendorBill, "BILL"),
            vendor_id=vendor.id,
            purchase_order_id=data.purchase_order_id,
            bill_date=data.bill_date or date.today(),
            due_date=data.due_date,
            notes=data.notes,
            total_amount=_total(lines),
        )
        created_lines = await self._insert(bill, VendorBillLine, "vendor_bill_id", lines)

        logger.info(
            "vendor_bill_created",
            bill_id=bill.id,
            bill_number=bill.bill_number,
            vendor_id=vendor.id,
            lines=len(created_lines),
            unassigned_lines=_unassigned(created_lines),
        )
        return {
            **_header_dict(bill, created_lines),
            "bill_number": bill.bill_number,
            "vendor_id": bill.vendor_id,
            "vendor_name": vendor.name,
            "purchase_order_id": bill.purchase_order_id,
            "bill_date": bill.bill_date,
            "due_date": bill.due_date,
        }

    # ── Sales side ─────────────────────────────────────

    async def create_sales_order(self, data: SalesOrderCreate) -> dict:
        customer = await self._get_partner(data.customer_id, CONTACT_TYPE_CUSTOMER)
        lines = await self.analytical.assign_accounts(customer.id, data.lines)

        order = SalesOrder(
            order_number=await self._next_number(SalesOrder, "SO"),
            customer_id=customer.id,
            order_date=data.order_date or date.today(),
            notes=data.notes,
            total_amount=_total(lines),
        )
        created_lines = await self._insert(order, SalesOrderLine, "sales_order_id", lines)

        logger.info(
            "sales_order_created",
            order_id=order.id,
            order_number=order.order_number,
            customer_id=customer.id,
            lines=len(created_lines),
            unassigned_lines=_unassigned(created_lines),
        )
        return {
            **_header_dict(order, created_lines),
            "order_number": order.order_number,
            "customer_id": order.customer_id,
            "customer_name": customer.name,
            "order_date": order.order_date,
        }

    async def create_customer_invoice(self, data: CustomerInvoiceCreate) -> dict:
        customer = await self._get_partner(data.customer_id, CONTACT_TYPE_CUSTOMER)
        lines = await self.analytical.assign_accounts(customer.id, data.lines)

        invoice = CustomerInvoice(
            invoice_number=await self._next_number(CustomerInvoice, "INV"),
            customer_id=customer.id,
            sales_order_id=data.sales_order_id,
            invoice_date=data.invoice_date or date.today(),
            due_date=data.due_date,
            notes=data.notes,
            total_amount=_total(lines),
        )
        created_lines = await self._insert(
            invoice, CustomerInvoiceLine, "customer_invoice_id", lines
        )

        logger.info(
            "customer_invoice_created",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            customer_id=customer.id,
            lines=len(created_lines),
            unassigned_lines=_unassigned(created_lines),
        )
        return {
            **_header_dict(invoice, created_lines),
            "invoice_number": invoice.invoice_number,
            "customer_id": invoice.customer_id,
            "customer_name": customer.name,
            "sales_order_id": invoice.sales_order_id,
            "invoice_date": invoice.invoice_date,
            "due_date": invoice.due_date,
        }

    # ── Helpers ─────────────────────────────────────────

    async def _get_partner(self, contact_id: int, contact_type: str) -> Contact:
        label = "Vendor" if contact_type == CONTACT_TYPE_VENDOR else "Customer"
        contact = await self.db.get(Contact, contact_id)
        if contact is None:
            raise NotFoundError(label)
        if contact.contact_type != contact_type:
            raise BadRequestError(f"Contact is not a {label.lower()}")
        return contact

    async def _next_number(self, model, prefix: str) -> str:
        count = await self.db.scalar(select(func.count()).select_from(model))
        return f"{prefix}-{(count or 0) + 1:05d}"

    async def _insert(self, header, line_model, parent_key: str, lines: list[DocumentLineCreate]):
        self.db.add(header)
        await self.db.flush()
        await self.db.refresh(header)

        created = [
            line_model(
                **{parent_key: header.id},
                product_id=line.product_id,
                description=line.description,
                quantity=line.quantity,
                unit_price=line.unit_price,
                subtotal=_subtotal(line),
                analytical_account_id=line.analytical_account_id,
            )
            for line in lines
        ]
        self.db.add_all(created)
        await self.db.flush()
        return created


def _subtotal(line: DocumentLineCreate) -> Decimal:
    return (line.quantity * line.unit_price).quantize(CENT, rounding=ROUND_HALF_UP)


def _total(lines: list[DocumentLineCreate]) -> Decimal:
    return sum((_subtotal(line) for line in lines), Decimal("0.00"))


def _unassigned(lines) -> int:
    return sum(1 for line in lines if line.analytical_account_id is None)


def _header_dict(header, lines) -> dict:
    return {
        "id": header.id,
        "status": header.status,
        "total_amount": header.total_amount,
        "notes": header.notes,
        "created_at": header.created_at,
        "lines": [
            {
                "id": line.id,
                "product_id": line.product_id,
                "description": line.description,
                "quantity": line.quantity,
                "unit_price": line.unit_price,
                "subtotal": line.subtotal,
                "analytical_account_id": line.analytical_account_id,
            }
            for line in lines
        ],
    }
