"""Add budgets and auto_analytical_models tables.

Auto analytical models are the rules that assign a cost center to document
lines; budgets bound the dates purchase orders may carry per cost center.

Revision ID: 002
Revises: 001
Create Date: 2026-10-05
"""

from alembic import op
import sqlalchemy as sa

revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "budgets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("analytical_account_id", sa.Integer(), sa.ForeignKey("analytical_accounts.id"), nullable=False),
        sa.Column("period_start", sa.Date(), nullable=False),
        sa.Column("period_end", sa.Date(), nullable=False),
        sa.Column("budget_amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("period_end > period_start", name="ck_budgets_period_order"),
    )
    op.create_index(
        "idx_budgets_account_period",
        "budgets",
        ["analytical_account_id", "period_start"],
    )

    op.create_table(
        "auto_analytical_models",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("partner_id", sa.Integer(), sa.ForeignKey("contacts.id"), nullable=True),
        sa.Column("partner_tag", sa.String(100), nullable=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=True),
        sa.Column("product_category_id", sa.Integer(), sa.ForeignKey("product_categories.id"), nullable=True),
        sa.Column("analytical_account_id", sa.Integer(), sa.ForeignKey("analytical_accounts.id"), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "partner_id IS NOT NULL OR partner_tag IS NOT NULL "
            "OR product_id IS NOT NULL OR product_category_id IS NOT NULL",
            name="ck_auto_analytical_models_has_criteria",
        ),
    )
    op.create_index("idx_auto_analytical_models_active", "auto_analytical_models", ["is_active"])


def downgrade() -> None:
    op.drop_index("idx_auto_analytical_models_active")
    op.drop_table("auto_analytical_models")
    op.drop_index("idx_budgets_account_period")
    op.drop_table("budgets")
