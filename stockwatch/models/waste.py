# stockwatch/models/waste.py

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stockwatch.database import Base


class WasteRecord(Base):
    __tablename__ = "waste_records"

    id = Column(Integer, primary_key=True, index=True)

    item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False, index=True)
    unit_id = Column(Integer, ForeignKey("units_of_measure.id"), nullable=False)

    quantity_wasted = Column(Numeric(12, 3), nullable=False)
    waste_date = Column(Date, nullable=False)
    reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    item = relationship("InventoryItem")
    unit = relationship("UnitOfMeasure")

    __table_args__ = (
        Index("ix_waste_records_item_date", "item_id", "waste_date"),
        CheckConstraint("quantity_wasted > 0", name="ck_waste_quantity_positive"),
    )
