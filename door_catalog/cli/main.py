# door_catalog/cli/main.py
"""
Import and maintenance commands.

Each command reads one CSV export (default location under DATA_DIR, or
--file), opens its own database engine for the run and disposes it at the
end. Skipped rows do not change the exit code; any top-level failure
(missing file, unknown supplier, database error, invalid repair file) exits
with status 1.
"""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional

import click
from sqlalchemy.ext.asyncio import AsyncSession

from door_catalog import models  # noqa: F401  registers every table on Base.metadata
from door_catalog.core.config import Settings, get_settings
from door_catalog.core.logging_config import configure_logging
from door_catalog.database import Base, create_engine_from_settings, session_scope
from door_catalog.services.importers import (
    iter_csv_rows,
    read_csv_rows,
    DoorImporter,
    PanelImporter,
    SupplierPanelImporter,
    SupplierPanelReattacher,
    PanelHeightRepair,
)
from door_catalog.services.importers.base import BaseImporter

logger = logging.getLogger(__name__)

DOORS_CSV = "collection.csv"
PANELS_CSV = "panels.csv"
SUPPLIER_PANELS_CSV = "CobraPanels.csv"
HEIGHT_FIX_CSV = "modify.csv"


async def run_import(
    path: Path,
    make_importer: Callable[[AsyncSession], BaseImporter],
    settings: Settings,
) -> Dict[str, int]:
    """Stream ``path`` through one importer inside a scoped session."""
    rows = iter_csv_rows(path)
    async with session_scope(settings) as db:
        return await make_importer(db).run(rows)


async def run_height_repair(path: Path, settings: Settings) -> Dict[str, int]:
    rows = read_csv_rows(path)
    async with session_scope(settings) as db:
        return await PanelHeightRepair(db).run(rows)


async def create_all_tables(settings: Settings) -> None:
    engine = create_engine_from_settings(settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


def execute(description: str, coro) -> Dict[str, int]:
    """Run a command coroutine, turning any failure into exit status 1."""
    start_time = datetime.now()
    logger.info(f"Starting {description} at {start_time}")
    try:
        result = asyncio.run(coro)
    except Exception as e:
        logger.exception(f"Error during {description}")
        click.echo(f"❌ {description} failed: {e}", err=True)
        sys.exit(1)

    logger.info(f"Completed {description} in {datetime.now() - start_time}")
    return result


def echo_stats(stats: Dict[str, int]) -> None:
    for key, value in stats.items():
        click.echo(f"{key.replace('_', ' ').capitalize()}: {value}")


def resolve_path(settings: Settings, file: Optional[str], default_name: str) -> Path:
    return Path(file) if file else settings.data_file(default_name)


def resolve_supplier_id(settings: Settings, supplier_id: Optional[str]) -> str:
    supplier_id = supplier_id or settings.SUPPLIER_ID
    if not supplier_id:
        click.echo("❌ No supplier given: pass --supplier-id or set SUPPLIER_ID", err=True)
        sys.exit(1)
    return supplier_id


file_option = click.option(
    '--file', 'file', type=click.Path(dir_okay=False),
    help='CSV file to read instead of the default under DATA_DIR',
)
supplier_option = click.option(
    '--supplier-id', 'supplier_id',
    help='Supplier to attach panels to (defaults to the SUPPLIER_ID setting)',
)


@click.group()
@click.option('--log-level', default=None, help='Override LOG_LEVEL for this run')
def cli(log_level):
    """Door catalog import and maintenance commands"""
    configure_logging(log_level)


@cli.command('seed-doors')
@file_option
def seed_doors(file):
    """Seed categories, subcategories and doors from the collection export"""
    settings = get_settings()
    path = resolve_path(settings, file, DOORS_CSV)
    stats = execute("door seed", run_import(
        path, lambda db: DoorImporter(db, default_price=settings.DEFAULT_DOOR_PRICE), settings
    ))
    click.echo("\n🎉 Door seed completed!")
    echo_stats(stats)


@cli.command('seed-panels')
@file_option
def seed_panels(file):
    """Seed panel models, one per height variant"""
    settings = get_settings()
    path = resolve_path(settings, file, PANELS_CSV)
    stats = execute("panel seed", run_import(path, PanelImporter, settings))
    click.echo(f"\n✅ Seeded panel models from {stats['total']} rows.")
    echo_stats(stats)


@cli.command('attach-supplier')
@supplier_option
@file_option
@click.option('--lead-time', default=None, help='Lead time stored on every supplier panel')
def attach_supplier(supplier_id, file, lead_time):
    """Create or update a supplier's panel prices"""
    settings = get_settings()
    supplier_id = resolve_supplier_id(settings, supplier_id)
    path = resolve_path(settings, file, SUPPLIER_PANELS_CSV)
    lead_time = lead_time or settings.DEFAULT_LEAD_TIME
    stats = execute("supplier panel import", run_import(
        path, lambda db: SupplierPanelImporter(db, supplier_id, lead_time=lead_time), settings
    ))
    click.echo(f"\n🎉 Supplier panels processed for supplier {supplier_id}")
    echo_stats(stats)


@cli.command('fix-panel-heights')
@file_option
def fix_panel_heights(file):
    """Split multi-height panel models into one model per height (single transaction)"""
    settings = get_settings()
    path = resolve_path(settings, file, HEIGHT_FIX_CSV)
    stats = execute("panel height fix", run_height_repair(path, settings))
    click.echo("\n✨ Panel height fix completed successfully")
    echo_stats(stats)


@cli.command('reattach-supplier-panels')
@supplier_option
@file_option
@click.option('--base-price', type=float, default=None, help='Price for newly created supplier panels')
def reattach_supplier_panels(supplier_id, file, base_price):
    """Link a supplier to the panel variants created by fix-panel-heights"""
    settings = get_settings()
    supplier_id = resolve_supplier_id(settings, supplier_id)
    path = resolve_path(settings, file, HEIGHT_FIX_CSV)
    price = base_price if base_price is not None else settings.REATTACH_BASE_PRICE
    stats = execute("supplier panel reattach", run_import(
        path, lambda db: SupplierPanelReattacher(db, supplier_id, base_price=price), settings
    ))
    click.echo("\n✨ Supplier panels reattached successfully")
    echo_stats(stats)


@cli.command('create-tables')
def create_tables():
    """Create all database tables directly using SQLAlchemy"""
    settings = get_settings()
    execute("table creation", create_all_tables(settings))
    click.echo("All tables created successfully!")


if __name__ == "__main__":
    cli()
