"""SQLAlchemy models."""

from app.models.analytical_account import AnalyticalAccount
from app.models.auto_analytical_model import AutoAnalyticalModel
from app.models.base import Base
from app.models.budget import Budget
from app.models.contact import Contact
from app.models.customer_invoice import CustomerInvoice, CustomerInvoiceLine
from app.models.product import Product, ProductCategory
from app.models.purchase_order import PurchaseOrder, PurchaseOrderLine
from app.models.sales_order import SalesOrder, SalesOrderLine
from app.models.vendor_bill import VendorBill, VendorBillLine

__all__ = [
    "Base",
    "Contact",
    "ProductCategory",
    "Product",
    "AnalyticalAccount",
    "Budget",
    "AutoAnalyticalModel",
    "PurchaseOrder",
    "PurchaseOrderLine",
    "VendorBill",
    "VendorBillLine",
    "SalesOrder",
    "SalesOrderLine",
    "CustomerInvoice",
    "CustomerInvoiceLine",
]
