"""initial_stock_ledger_schema

Revision ID: 5b1e9c2d7a40
Revises:
Create Date: 2026-10-18 09:12:44.310518
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1e9c2d7a40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text("(CURRENT_TIMESTAMP)"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""

    # REFERENCE DATA
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_index("ix_categories_id", "categories", ["id"])
    op.create_index("ix_categories_name", "categories", ["name"], unique=True)

    op.create_table(
        "units_of_measure",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("unit", sa.String(), nullable=False, unique=True),
        sa.Column("abbreviation", sa.String(), nullable=False),
    )
    op.create_index("ix_units_of_measure_id", "units_of_measure", ["id"])
    op.create_index(
        "ix_units_of_measure_abbreviation",
        "units_of_measure",
        ["abbreviation"],
        unique=True,
    )

    op.create_table(
        "suppliers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("contact_person", sa.String(), nullable=True),
        sa.Column("phone_number", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True, unique=True),
        sa.Column("street_address", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("postal_code", sa.String(), nullable=True),
        sa.Column("country", sa.String(), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_suppliers_id", "suppliers", ["id"])
    op.create_index("ix_suppliers_name", "suppliers", ["name"])

    # INVENTORY ITEMS
    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("units_of_measure.id"), nullable=False),
        sa.Column("quantity_on_hand", sa.Numeric(12, 3), nullable=False),
        sa.Column("opening_quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("reorder_point", sa.Numeric(12, 3), nullable=False),
        sa.Column("item_type", sa.String(), nullable=False),
        _timestamp("created_at"),
        _timestamp("last_updated"),
        sa.CheckConstraint("quantity_on_hand >= 0", name="ck_item_quantity_non_negative"),
        sa.CheckConstraint("opening_quantity >= 0", name="ck_item_opening_non_negative"),
        sa.CheckConstraint("reorder_point >= 0", name="ck_item_reorder_non_negative"),
        sa.CheckConstraint(
            "item_type IN ('Perishable', 'NonPerishable', 'Tool')",
            name="ck_item_type_valid",
        ),
    )
    op.create_index("ix_inventory_items_id", "inventory_items", ["id"])
    op.create_index("ix_inventory_items_name", "inventory_items", ["name"], unique=True)
    op.create_index("ix_inventory_items_category_id", "inventory_items", ["category_id"])

    op.create_table(
        "perishable_items",
        sa.Column(
            "item_id",
            sa.Integer(),
            sa.ForeignKey("inventory_items.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("expiration_date", sa.Date(), nullable=True),
        sa.Column("storage_temperature", sa.String(), nullable=True),
    )
    op.create_table(
        "non_perishable_items",
        sa.Column(
            "item_id",
            sa.Integer(),
            sa.ForeignKey("inventory_items.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("warranty_period", sa.String(), nullable=True),
    )
    op.create_table(
        "tool_items",
        sa.Column(
            "item_id",
            sa.Integer(),
            sa.ForeignKey("inventory_items.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("maintenance_schedule", sa.String(), nullable=True),
    )

    op.create_table(
        "supplier_items",
        sa.Column(
            "supplier_id",
            sa.Integer(),
            sa.ForeignKey("suppliers.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "item_id",
            sa.Integer(),
            sa.ForeignKey("inventory_items.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("cost", sa.Numeric(10, 2), nullable=False),
        _timestamp("created_at"),
        sa.CheckConstraint("cost >= 0", name="ck_supplier_item_cost_non_negative"),
    )
    op.create_index("ix_supplier_items_item_id", "supplier_items", ["item_id"])

    # MENU
    op.create_table(
        "menu_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        _timestamp("created_at"),
        _timestamp("last_updated"),
        sa.CheckConstraint("price IS NULL OR price >= 0", name="ck_menu_item_price_non_negative"),
    )
    op.create_index("ix_menu_items_id", "menu_items", ["id"])
    op.create_index("ix_menu_items_name", "menu_items", ["name"], unique=True)

    op.create_table(
        "recipe_ingredients",
        sa.Column(
            "menu_item_id",
            sa.Integer(),
            sa.ForeignKey("menu_items.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "item_id",
            sa.Integer(),
            sa.ForeignKey("inventory_items.id"),
            primary_key=True,
        ),
        sa.Column("quantity_required", sa.Numeric(12, 3), nullable=False),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("units_of_measure.id"), nullable=False),
        sa.CheckConstraint("quantity_required > 0", name="ck_recipe_quantity_positive"),
    )
    op.create_index("ix_recipe_ingredients_item_id", "recipe_ingredients", ["item_id"])

    # LEDGER: DELIVERIES
    op.create_table(
        "deliveries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "supplier_id",
            sa.Integer(),
            sa.ForeignKey("suppliers.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("delivery_date", sa.Date(), nullable=False),
        sa.Column("invoice_number", sa.String(), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_deliveries_id", "deliveries", ["id"])
    op.create_index("ix_deliveries_supplier_id", "deliveries", ["supplier_id"])
    op.create_index("ix_deliveries_delivery_date", "deliveries", ["delivery_date"])

    op.create_table(
        "delivery_lines",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("delivery_id", sa.Integer(), sa.ForeignKey("deliveries.id"), nullable=False),
        sa.Column("item_id", sa.Integer(), sa.ForeignKey("inventory_items.id"), nullable=False),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("units_of_measure.id"), nullable=False),
        sa.Column("quantity_received", sa.Numeric(12, 3), nullable=False),
        sa.Column("unit_cost", sa.Numeric(10, 2), nullable=True),
        sa.Column("expiration_date", sa.Date(), nullable=True),
        _timestamp("created_at"),
        sa.CheckConstraint("quantity_received > 0", name="ck_delivery_quantity_positive"),
        sa.CheckConstraint(
            "unit_cost IS NULL OR unit_cost >= 0",
            name="ck_delivery_unit_cost_non_negative",
        ),
    )
    op.create_index("ix_delivery_lines_id", "delivery_lines", ["id"])
    op.create_index("ix_delivery_lines_delivery_id", "delivery_lines", ["delivery_id"])
    op.create_index("ix_delivery_lines_item_id", "delivery_lines", ["item_id"])
    op.create_index("ix_delivery_lines_expiration", "delivery_lines", ["expiration_date"])

    # LEDGER: USAGE
    op.create_table(
        "usage_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("item_id", sa.Integer(), sa.ForeignKey("inventory_items.id"), nullable=True),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("units_of_measure.id"), nullable=True),
        sa.Column("quantity_used", sa.Numeric(12, 3), nullable=False),
        sa.Column("usage_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("usage_type", sa.String(), nullable=False),
        sa.Column(
            "menu_item_id",
            sa.Integer(),
            sa.ForeignKey("menu_items.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _timestamp("created_at"),
        sa.CheckConstraint("quantity_used > 0", name="ck_usage_quantity_positive"),
        sa.CheckConstraint("usage_type IN ('manual', 'sale')", name="ck_usage_type_valid"),
        sa.CheckConstraint(
            "usage_type = 'sale' OR menu_item_id IS NULL",
            name="ck_usage_menu_item_only_for_sales",
        ),
    )
    op.create_index("ix_usage_records_id", "usage_records", ["id"])
    op.create_index("ix_usage_records_item_id", "usage_records", ["item_id"])
    op.create_index("ix_usage_records_menu_item_id", "usage_records", ["menu_item_id"])
    op.create_index("ix_usage_records_type_date", "usage_records", ["usage_type", "usage_date"])

    # LEDGER: WASTE
    op.create_table(
        "waste_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("item_id", sa.Integer(), sa.ForeignKey("inventory_items.id"), nullable=False),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("units_of_measure.id"), nullable=False),
        sa.Column("quantity_wasted", sa.Numeric(12, 3), nullable=False),
        sa.Column("waste_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        _timestamp("created_at"),
        sa.CheckConstraint("quantity_wasted > 0", name="ck_waste_quantity_positive"),
    )
    op.create_index("ix_waste_records_id", "waste_records", ["id"])
    op.create_index("ix_waste_records_item_id", "waste_records", ["item_id"])
    op.create_index("ix_waste_records_item_date", "waste_records", ["item_id", "waste_date"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("waste_records")
    op.drop_table("usage_records")
    op.drop_table("delivery_lines")
    op.drop_table("deliveries")
    op.drop_table("recipe_ingredients")
    op.drop_table("menu_items")
    op.drop_table("supplier_items")
    op.drop_table("tool_items")
    op.drop_table("non_perishable_items")
    op.drop_table("perishable_items")
    op.drop_table("inventory_items")
    op.drop_table("suppliers")
    op.drop_table("units_of_measure")
    op.drop_table("categories")
