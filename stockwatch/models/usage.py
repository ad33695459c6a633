# stockwatch/models/usage.py

import enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stockwatch.database import Base


class UsageType(str, enum.Enum):
    MANUAL = "manual"
    SALE = "sale"


class UsageRecord(Base):
    __tablename__ = "usage_records"

    id = Column(Integer, primary_key=True, index=True)

    # NULL only for the sale of a menu item without a recipe
    item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=True, index=True)
    unit_id = Column(Integer, ForeignKey("units_of_measure.id"), nullable=True)

    quantity_used = Column(Numeric(12, 3), nullable=False)
    usage_date = Column(DateTime(timezone=True), nullable=False)
    usage_type = Column(String, nullable=False)

    menu_item_id = Column(
        Integer,
        ForeignKey("menu_items.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    item = relationship("InventoryItem")
    unit = relationship("UnitOfMeasure")
    menu_item = relationship("MenuItem")

    __table_args__ = (
        Index("ix_usage_records_type_date", "usage_type", "usage_date"),
        CheckConstraint("quantity_used > 0", name="ck_usage_quantity_positive"),
        CheckConstraint(
            "usage_type IN ('manual', 'sale')",
            name="ck_usage_type_valid",
        ),
        CheckConstraint(
            "usage_type = 'sale' OR menu_item_id IS NULL",
            name="ck_usage_menu_item_only_for_sales",
        ),
    )
