"""
Pytest fixtures for the StockWatch test suite.

Provides:
- A fresh file-backed SQLite database per test (shared by threads)
- A session factory and a session bound to it
- A TestClient whose get_db dependency points at that database
- A seeded kitchen: category, units, supplier, Flour/Tomato/Whisk, Bread recipe
"""

import os

# Must be set before stockwatch.core.config is imported
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from stockwatch import models  # noqa: F401
from stockwatch.database import Base, build_engine, get_db
from stockwatch.main import app
from stockwatch.models.category import Category
from stockwatch.models.menu import MenuItem, RecipeIngredient
from stockwatch.models.suppliers import Supplier
from stockwatch.models.units import UnitOfMeasure
from stockwatch.schemas.item import ItemCreate
from stockwatch.services import catalog


@dataclass
class Kitchen:
    category_id: int
    kg_id: int
    g_id: int
    supplier_id: int
    flour_id: int
    tomato_id: int
    whisk_id: int
    bread_id: int


@pytest.fixture
def engine(tmp_path):
    test_engine = build_engine(f"sqlite:///{tmp_path / 'stockwatch_test.db'}")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def kitchen(db) -> Kitchen:
    """Flour starts at 0 kg (reorder at 40), Tomato at 12 kg, Whisk at 3."""
    category = Category(name="Dry Goods", description="Flour, sugar, grains")
    kg = UnitOfMeasure(unit="Kilogram", abbreviation="kg")
    g = UnitOfMeasure(unit="Gram", abbreviation="g")
    supplier = Supplier(name="Mill & Co", email="orders@mill.example.com")
    db.add_all([category, kg, g, supplier])
    db.commit()

    flour = catalog.create_item(
        db,
        ItemCreate(
            name="Flour",
            category_id=category.id,
            unit_id=kg.id,
            quantity_on_hand=Decimal("0"),
            reorder_point=Decimal("40"),
            item_type="NonPerishable",
            warranty_period="12 months",
        ),
    )
    tomato = catalog.create_item(
        db,
        ItemCreate(
            name="Tomato",
            category_id=category.id,
            unit_id=kg.id,
            quantity_on_hand=Decimal("12"),
            reorder_point=Decimal("5"),
            item_type="Perishable",
            expiration_date=date.today() + timedelta(days=4),
            storage_temperature="4C",
        ),
    )
    whisk = catalog.create_item(
        db,
        ItemCreate(
            name="Whisk",
            category_id=category.id,
            unit_id=kg.id,
            quantity_on_hand=Decimal("3"),
            item_type="Tool",
            maintenance_schedule="monthly",
        ),
    )

    bread = MenuItem(name="Bread", price=Decimal("3.50"))
    db.add(bread)
    db.flush()
    db.add(
        RecipeIngredient(
            menu_item_id=bread.id,
            item_id=flour.id,
            quantity_required=Decimal("0.5"),
            unit_id=kg.id,
        )
    )
    db.commit()

    return Kitchen(
        category_id=category.id,
        kg_id=kg.id,
        g_id=g.id,
        supplier_id=supplier.id,
        flour_id=flour.id,
        tomato_id=tomato.id,
        whisk_id=whisk.id,
        bread_id=bread.id,
    )
