"""Create purchase order, vendor bill, sales order and customer invoice tables.

Revision ID: 003
Revises: 002
Create Date: 2026-10-06
"""

from alembic import op
import sqlalchemy as sa

revision = "003"
down_revision = "002"
branch_labels = None
depends_on = None

# (header table, number column, partner column, line table, line FK column)
DOCUMENTS = [
    ("purchase_orders", "order_number", "vendor_id", "purchase_order_lines", "purchase_order_id"),
    ("vendor_bills", "bill_number", "vendor_id", "vendor_bill_lines", "vendor_bill_id"),
    ("sales_orders", "order_number", "customer_id", "sales_order_lines", "sales_order_id"),
    ("customer_invoices", "invoice_number", "customer_id", "customer_invoice_lines", "customer_invoice_id"),
]

EXTRA_HEADER_COLUMNS = {
    "purchase_orders": lambda: [
        sa.Column("order_date", sa.Date(), nullable=False),
        sa.Column("expected_date", sa.Date(), nullable=True),
    ],
    "vendor_bills": lambda: [
        sa.Column("purchase_order_id", sa.Integer(), sa.ForeignKey("purchase_orders.id"), nullable=True),
        sa.Column("bill_date", sa.Date(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
    ],
    "sales_orders": lambda: [
        sa.Column("order_date", sa.Date(), nullable=False),
    ],
    "customer_invoices": lambda: [
        sa.Column("sales_order_id", sa.Integer(), sa.ForeignKey("sales_orders.id"), nullable=True),
        sa.Column("invoice_date", sa.Date(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
    ],
}


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    for header, number_col, partner_col, line_table, line_fk in DOCUMENTS:
        op.create_table(
            header,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column(number_col, sa.String(30), nullable=False, unique=True),
            sa.Column(partner_col, sa.Integer(), sa.ForeignKey("contacts.id"), nullable=False),
            *EXTRA_HEADER_COLUMNS[header](),
            sa.Column("status", sa.String(20), server_default="DRAFT", nullable=False),
            sa.Column("total_amount", sa.Numeric(14, 2), server_default="0.00", nullable=False),
            sa.Column("notes", sa.Text(), nullable=True),
            *_timestamps(),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{header}_{partner_col}", header, [partner_col])

        op.create_table(
            line_table,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column(line_fk, sa.Integer(), sa.ForeignKey(f"{header}.id", ondelete="CASCADE"), nullable=False),
            sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
            sa.Column("description", sa.String(500), nullable=True),
            sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
            sa.Column("unit_price", sa.Numeric(12, 2), nullable=False),
            sa.Column("subtotal", sa.Numeric(14, 2), nullable=False),
            sa.Column("analytical_account_id", sa.Integer(), sa.ForeignKey("analytical_accounts.id"), nullable=True),
            *_timestamps(),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{line_table}_{line_fk}", line_table, [line_fk])
        op.create_index(f"ix_{line_table}_analytical_account_id", line_table, ["analytical_account_id"])


def downgrade() -> None:
    for header, _number_col, partner_col, line_table, line_fk in reversed(DOCUMENTS):
        op.drop_index(f"ix_{line_table}_analytical_account_id")
        op.drop_index(f"ix_{line_table}_{line_fk}")
        op.drop_table(line_table)
        op.drop_index(f"ix_{header}_{partner_col}")
        op.drop_table(header)
