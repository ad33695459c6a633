# Importing every model registers its table on Base.metadata
from stockwatch.models.category import Category
from stockwatch.models.units import UnitOfMeasure
from stockwatch.models.suppliers import Supplier, SupplierItem
from stockwatch.models.inventory import (
    InventoryItem,
    ItemType,
    NonPerishableItem,
    PerishableItem,
    ToolItem,
)
from stockwatch.models.menu import MenuItem, RecipeIngredient
from stockwatch.models.deliveries import Delivery, DeliveryLine
from stockwatch.models.usage import UsageRecord, UsageType
from stockwatch.models.waste import WasteRecord

__all__ = [
    "Category",
    "UnitOfMeasure",
    "Supplier",
    "SupplierItem",
    "InventoryItem",
    "ItemType",
    "PerishableItem",
    "NonPerishableItem",
    "ToolItem",
    "MenuItem",
    "RecipeIngredient",
    "Delivery",
    "DeliveryLine",
    "UsageRecord",
    "UsageType",
    "WasteRecord",
]
