# tests/conftest.py
import pytest
from decimal import Decimal
from pathlib import Path

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from door_catalog.core.config import clear_settings_cache
from door_catalog.database import Base, create_session_factory
from door_catalog.dependencies import get_db
from door_catalog.main import app
from door_catalog.models import Category, Subcategory, Door, PanelModel, Supplier, SupplierPanel


@pytest.fixture
def database_url(tmp_path):
    # A file database so every connection (test, app and CLI) sees the same tables
    return f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"


@pytest.fixture
async def test_engine(database_url):
    """Create the test database engine with all tables (function-scoped)."""
    engine = create_async_engine(database_url, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
async def db_session(session_factory):
    """Provide a database session for tests"""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client for the app, with get_db handing out sessions on the test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest.fixture
def cli_env(monkeypatch, database_url, tmp_path):
    """Point the CLI's settings at the test database and tmp_path data dir."""
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.delenv("SUPPLIER_ID", raising=False)
    clear_settings_cache()
    yield tmp_path
    clear_settings_cache()


@pytest.fixture
def write_csv(tmp_path):
    """Write a CSV file into tmp_path and return its path."""
    def _write(name: str, header: str, *lines: str) -> Path:
        path = tmp_path / name
        path.write_text("\n".join([header, *lines]) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
async def catalog_data(db_session):
    """
    A small catalog: two categories, doors in one subcategory (one inactive),
    panels across materials, three suppliers (one inactive).
    """
    interior = Category(name="Interior")
    exterior = Category(name="Exterior")
    wood = Subcategory(name="Wood", category=interior)
    glass = Subcategory(name="Glass", category=interior)
    db_session.add_all([interior, exterior, wood, glass])
    await db_session.flush()

    doors = [
        Door(
            name=name, subcategory_id=wood.id, category_name="Interior", subcategory_name="Wood",
            material="wood", height="6'8\"", widths=["30", "32"], base_price=Decimal("450"),
            is_active=active,
        )
        for name, active in [("Shaker", True), ("Arch", True), ("Retired", False)]
    ]
    db_session.add_all(doors)

    panels = {
        code: PanelModel(
            code=code, name=code, material=material, collection=collection,
            height="6'8\"", widths=["32", "36"],
        )
        for code, material, collection in [
            ("WC-1", "Wood", "Classic"),
            ("WC-2", "Wood", "Classic"),
            ("WM-1", "Wood", "Modern"),
            ("SC-1", "Steel", "Classic"),
            ("wc-lower", "wood", "classic"),
        ]
    }
    db_session.add_all(panels.values())

    cobra = Supplier(name="Cobra", location="Dallas")
    acme = Supplier(name="Acme")
    dormant = Supplier(name="Dormant", is_active=False)
    db_session.add_all([cobra, acme, dormant])
    await db_session.flush()

    links = [
        SupplierPanel(supplier_id=cobra.id, panel_model_id=panels["WC-1"].id, base_price=Decimal("120"),
                      price_per_width={"32": 120.0, "36": 120.0}, lead_time="2-3 weeks"),
        SupplierPanel(supplier_id=cobra.id, panel_model_id=panels["WM-1"].id, base_price=Decimal("150"),
                      price_per_width={"32": 150.0}, lead_time="2-3 weeks"),
        SupplierPanel(supplier_id=cobra.id, panel_model_id=panels["SC-1"].id, base_price=Decimal("90"),
                      lead_time="2-3 weeks"),
        SupplierPanel(supplier_id=cobra.id, panel_model_id=panels["WC-2"].id, base_price=Decimal("99"),
                      is_active=False),
        SupplierPanel(supplier_id=acme.id, panel_model_id=panels["WC-1"].id, base_price=Decimal("130")),
        SupplierPanel(supplier_id=acme.id, panel_model_id=panels["WC-2"].id, base_price=Decimal("131")),
    ]
    db_session.add_all(links)
    await db_session.commit()

    return {
        "categories": {"Interior": interior.id, "Exterior": exterior.id},
        "subcategories": {"Wood": wood.id, "Glass": glass.id},
        "doors": {door.name: door.id for door in doors},
        "panels": {code: panel.id for code, panel in panels.items()},
        "suppliers": {"Cobra": cobra.id, "Acme": acme.id, "Dormant": dormant.id},
        "supplier_panels": [link.id for link in links],
    }
