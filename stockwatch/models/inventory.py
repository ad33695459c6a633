# stockwatch/models/inventory.py

import enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stockwatch.database import Base


class ItemType(str, enum.Enum):
    PERISHABLE = "Perishable"
    NON_PERISHABLE = "NonPerishable"
    TOOL = "Tool"


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    unit_id = Column(Integer, ForeignKey("units_of_measure.id"), nullable=False)

    # Only the stock ledger writes this once the row exists
    quantity_on_hand = Column(Numeric(12, 3), nullable=False, default=0)
    opening_quantity = Column(Numeric(12, 3), nullable=False, default=0)
    reorder_point = Column(Numeric(12, 3), nullable=False, default=0)

    item_type = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_updated = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    category = relationship("Category")
    unit = relationship("UnitOfMeasure")

    perishable = relationship(
        "PerishableItem", uselist=False, cascade="all, delete-orphan"
    )
    non_perishable = relationship(
        "NonPerishableItem", uselist=False, cascade="all, delete-orphan"
    )
    tool = relationship("ToolItem", uselist=False, cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("quantity_on_hand >= 0", name="ck_item_quantity_non_negative"),
        CheckConstraint("opening_quantity >= 0", name="ck_item_opening_non_negative"),
        CheckConstraint("reorder_point >= 0", name="ck_item_reorder_non_negative"),
        CheckConstraint(
            "item_type IN ('Perishable', 'NonPerishable', 'Tool')",
            name="ck_item_type_valid",
        ),
    )

    @property
    def details(self):
        """Satellite row for this item's type (None if it was never created)."""
        if self.item_type == ItemType.PERISHABLE.value:
            return self.perishable
        if self.item_type == ItemType.NON_PERISHABLE.value:
            return self.non_perishable
        if self.item_type == ItemType.TOOL.value:
            return self.tool
        return None


class PerishableItem(Base):
    __tablename__ = "perishable_items"

    item_id = Column(
        Integer,
        ForeignKey("inventory_items.id", ondelete="CASCADE"),
        primary_key=True,
    )
    expiration_date = Column(Date, nullable=True)
    storage_temperature = Column(String, nullable=True)


class NonPerishableItem(Base):
    __tablename__ = "non_perishable_items"

    item_id = Column(
        Integer,
        ForeignKey("inventory_items.id", ondelete="CASCADE"),
        primary_key=True,
    )
    warranty_period = Column(String, nullable=True)


class ToolItem(Base):
    __tablename__ = "tool_items"

    item_id = Column(
        Integer,
        ForeignKey("inventory_items.id", ondelete="CASCADE"),
        primary_key=True,
    )
    maintenance_schedule = Column(String, nullable=True)
