# stockwatch/models/menu.py

from sqlalchemy import (
    CheckConstraint,
    Column,
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


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_updated = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    ingredients = relationship(
        "RecipeIngredient",
        back_populates="menu_item",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("price IS NULL OR price >= 0", name="ck_menu_item_price_non_negative"),
    )


class RecipeIngredient(Base):
    __tablename__ = "recipe_ingredients"

    menu_item_id = Column(
        Integer,
        ForeignKey("menu_items.id", ondelete="CASCADE"),
        primary_key=True,
    )
    item_id = Column(
        Integer,
        ForeignKey("inventory_items.id"),
        primary_key=True,
        index=True,
    )

    # Per single unit of the menu item sold
    quantity_required = Column(Numeric(12, 3), nullable=False)
    unit_id = Column(Integer, ForeignKey("units_of_measure.id"), nullable=False)

    menu_item = relationship("MenuItem", back_populates="ingredients")
    item = relationship("InventoryItem")
    unit = relationship("UnitOfMeasure")

    __table_args__ = (
        CheckConstraint("quantity_required > 0", name="ck_recipe_quantity_positive"),
    )
