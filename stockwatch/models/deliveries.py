# stockwatch/models/deliveries.py

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
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


class Delivery(Base):
    __tablename__ = "deliveries"

    id = Column(Integer, primary_key=True, index=True)

    supplier_id = Column(
        Integer,
        ForeignKey("suppliers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    delivery_date = Column(Date, nullable=False, index=True)
    invoice_number = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    supplier = relationship("Supplier")
    lines = relationship(
        "DeliveryLine",
        back_populates="delivery",
        order_by="DeliveryLine.id",
    )


class DeliveryLine(Base):
    __tablename__ = "delivery_lines"

    id = Column(Integer, primary_key=True, index=True)

    delivery_id = Column(Integer, ForeignKey("deliveries.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False, index=True)
    unit_id = Column(Integer, ForeignKey("units_of_measure.id"), nullable=False)

    quantity_received = Column(Numeric(12, 3), nullable=False)
    unit_cost = Column(Numeric(10, 2), nullable=True)
    expiration_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    delivery = relationship("Delivery", back_populates="lines")
    item = relationship("InventoryItem")
    unit = relationship("UnitOfMeasure")

    __table_args__ = (
        Index("ix_delivery_lines_expiration", "expiration_date"),
        CheckConstraint("quantity_received > 0", name="ck_delivery_quantity_positive"),
        CheckConstraint(
            "unit_cost IS NULL OR unit_cost >= 0",
            name="ck_delivery_unit_cost_non_negative",
        ),
    )
