"""init sales tables

Revision ID: 20261018_0001_init_sales_tables
Revises: None
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_0001_init_sales_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255)),
        sa.Column("customer_name", sa.String(length=255)),
        sa.Column("company_name", sa.String(length=255)),
        sa.Column("full_name", sa.String(length=255)),
        sa.Column("email", sa.String(length=255), unique=True),
        sa.Column("phone", sa.String(length=64)),
        sa.Column("address", sa.Text()),
        sa.Column("billing_address", sa.Text()),
        sa.Column("customer_type", sa.String(length=64)),
        sa.Column("classification", sa.String(length=64)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_customers_name", "customers", ["name"])
    op.create_index("ix_customers_email", "customers", ["email"])
    op.create_index("ix_customers_customer_type", "customers", ["customer_type"])
    op.create_index("ix_customers_classification", "customers", ["classification"])
    op.create_index("ix_customers_is_active", "customers", ["is_active"])

    op.create_table(
        "suppliers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255)),
        sa.Column("phone", sa.String(length=64)),
        sa.Column("address", sa.Text()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "quotations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("quote_number", sa.String(length=50), nullable=False, unique=True),
        sa.Column("revision", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("parent_quotation_id", sa.Integer(), sa.ForeignKey("quotations.id")),
        sa.Column("revision_reason", sa.Text()),
        sa.Column("superseded_at", sa.DateTime(timezone=True)),
        sa.Column("superseded_by", sa.Integer()),
        sa.Column("is_superseded", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("enquiry_id", sa.Integer()),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id")),
        sa.Column("customer_type", sa.String(length=64)),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="draft"),
        sa.Column("quote_date", sa.Date()),
        sa.Column("valid_until", sa.Date()),
        sa.Column("subtotal", sa.Float()),
        sa.Column("discount_percentage", sa.Float()),
        sa.Column("discount_amount", sa.Float()),
        sa.Column("tax_amount", sa.Float()),
        sa.Column("total_amount", sa.Float()),
        sa.Column("terms", sa.Text()),
        sa.Column("notes", sa.Text()),
        sa.Column("approval_status", sa.String(length=32)),
        sa.Column("required_approval_level", sa.String(length=32)),
        sa.Column("approved_by", sa.String(length=255)),
        sa.Column("approved_at", sa.DateTime(timezone=True)),
        sa.Column("rejection_reason", sa.Text()),
        sa.Column("created_by", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_quotations_enquiry_id", "quotations", ["enquiry_id"])
    op.create_index("ix_quotations_customer_id", "quotations", ["customer_id"])
    op.create_index("ix_quotations_status", "quotations", ["status"])
    op.create_index("ix_quotations_valid_until", "quotations", ["valid_until"])

    op.create_table(
        "quotation_items",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("quotation_id", sa.Integer(), sa.ForeignKey("quotations.id"), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False, server_default="1"),
        sa.Column("unit", sa.String(length=16)),
        sa.Column("unit_price", sa.Float()),
        sa.Column("line_total", sa.Float()),
        sa.Column("notes", sa.Text()),
    )
    op.create_index("ix_quotation_items_quotation_id", "quotation_items", ["quotation_id"])

    op.create_table(
        "sales_orders",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("order_number", sa.String(length=50), nullable=False, unique=True),
        sa.Column("quotation_id", sa.Integer(), sa.ForeignKey("quotations.id")),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id")),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="draft"),
        sa.Column("total_amount", sa.Float()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_sales_orders_quotation_id", "sales_orders", ["quotation_id"])
    op.create_index("ix_sales_orders_customer_id", "sales_orders", ["customer_id"])

    op.create_table(
        "customer_acceptances",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("quotation_id", sa.Integer(), sa.ForeignKey("quotations.id")),
        sa.Column("accepted_by", sa.String(length=255)),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_customer_acceptances_quotation_id", "customer_acceptances", ["quotation_id"])

    op.create_table(
        "purchase_orders",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("po_number", sa.String(length=50), nullable=False, unique=True),
        sa.Column("quotation_id", sa.Integer(), sa.ForeignKey("quotations.id")),
        sa.Column("supplier_id", sa.Integer(), sa.ForeignKey("suppliers.id")),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="draft"),
        sa.Column("total_amount", sa.Float()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_purchase_orders_quotation_id", "purchase_orders", ["quotation_id"])

    op.create_table(
        "quote_number_counters",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("period", sa.String(length=6), nullable=False, unique=True),
        sa.Column("last_seq", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("quote_number_counters")
    op.drop_table("purchase_orders")
    op.drop_table("customer_acceptances")
    op.drop_table("sales_orders")
    op.drop_table("quotation_items")
    op.drop_table("quotations")
    op.drop_table("suppliers")
    op.drop_table("customers")
