# tests/integration/test_importers.py
import pytest
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError

from door_catalog.core.exceptions import CodeConflictError, CSVParseError, RecordNotFoundError
from door_catalog.models import Category, Subcategory, Door, PanelModel, Supplier, SupplierPanel
from door_catalog.services.importers import (
    read_csv_rows,
    DoorImporter,
    PanelImporter,
    SupplierPanelImporter,
    SupplierPanelReattacher,
    PanelHeightRepair,
)

DOOR_HEADER = "Category,Subcategory,Height,Name,Widths,Price"
PANEL_HEADER = "model_code,material,collection,height,widths"
SUPPLIER_HEADER = "supplier,model_code,material,collection,height,widths,price"


async def fetch_all(db_session, model, *order_by):
    result = await db_session.execute(
        select(model).order_by(*order_by).execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def count(db_session, model):
    return await db_session.scalar(select(func.count()).select_from(model))


@pytest.fixture
async def supplier(db_session):
    cobra = Supplier(name="Cobra", location="Dallas")
    db_session.add(cobra)
    await db_session.commit()
    return cobra


# --- Doors ---

async def test_door_import_builds_tree(db_session, write_csv):
    path = write_csv(
        "collection.csv", DOOR_HEADER,
        'Interior,Wood,"6\'8""",Shaker,"30, 32, 36",$450',
        'Interior,Wood,"6\'8""",Arch,36,',
        'Interior,Glass,"8\'0""",Lite,"32, 36","$1,000 "',
    )

    stats = await DoorImporter(db_session).run(read_csv_rows(path))

    assert stats["total"] == 3
    assert stats["created"] == 3
    assert stats["errors"] == 0
    assert await count(db_session, Category) == 1
    assert await count(db_session, Subcategory) == 2

    doors = {door.name: door for door in await fetch_all(db_session, Door, Door.name)}
    shaker = doors["Shaker"]
    assert shaker.widths == ["30", "32", "36"]
    assert shaker.base_price == Decimal("450")
    assert shaker.material == "wood"
    assert shaker.category_name == "Interior"
    assert shaker.subcategory_name == "Wood"
    assert shaker.height == "6'8\""
    # empty price falls back to the default, never zero
    assert doors["Arch"].base_price == Decimal("500")
    assert doors["Lite"].base_price == Decimal("1000")


async def test_door_import_is_idempotent(db_session, write_csv):
    path = write_csv(
        "collection.csv", DOOR_HEADER,
        'Interior,Wood,"6\'8""",Shaker,"30, 32",450',
        'Interior,Wood,"6\'8""",Arch,36,500',
    )

    await DoorImporter(db_session).run(read_csv_rows(path))
    stats = await DoorImporter(db_session).run(read_csv_rows(path))

    assert stats["created"] == 0
    assert stats["unchanged"] == 2
    assert await count(db_session, Door) == 2
    assert await count(db_session, Category) == 1
    assert await count(db_session, Subcategory) == 1


async def test_door_reimport_updates_owned_fields(db_session, write_csv):
    await DoorImporter(db_session).run(read_csv_rows(write_csv(
        "v1.csv", DOOR_HEADER, 'Interior,Wood,"6\'8""",Shaker,"30, 32",450',
    )))

    stats = await DoorImporter(db_session).run(read_csv_rows(write_csv(
        "v2.csv", DOOR_HEADER, 'Interior,Wood,"6\'8""",Shaker,"30, 32, 34",475',
    )))

    assert stats["updated"] == 1
    [door] = await fetch_all(db_session, Door)
    assert door.widths == ["30", "32", "34"]
    assert door.base_price == Decimal("475")


async def test_door_import_custom_default_price(db_session, write_csv):
    path = write_csv("collection.csv", DOOR_HEADER, 'Exterior,Steel,"6\'8""",Guard,36,n/a')

    await DoorImporter(db_session, default_price=650).run(read_csv_rows(path))

    [door] = await fetch_all(db_session, Door)
    assert door.base_price == Decimal("650")


async def test_door_row_with_only_commas_in_widths_is_an_error(db_session, write_csv):
    path = write_csv(
        "collection.csv", DOOR_HEADER,
        'Interior,Wood,"6\'8""",Shaker,",",450',
        'Interior,Wood,"6\'8""",Arch,36,450',
    )

    stats = await DoorImporter(db_session).run(read_csv_rows(path))

    assert stats["errors"] == 1
    assert [door.name for door in await fetch_all(db_session, Door)] == ["Arch"]


async def test_door_rows_missing_key_fields_are_skipped(db_session, write_csv):
    path = write_csv(
        "collection.csv", DOOR_HEADER,
        'Interior,Wood,"6\'8""",,36,450',
        'Interior,,"6\'8""",Arch,36,450',
        'Interior,Wood,"6\'8""",Shaker,36,450',
    )

    stats = await DoorImporter(db_session).run(read_csv_rows(path))

    assert stats["skipped"] == 2
    assert stats["created"] == 1
    assert await count(db_session, Door) == 1


# --- Panels ---

async def test_panel_import_expands_multiple_heights(db_session, write_csv):
    path = write_csv(
        "panels.csv", PANEL_HEADER,
        'HAR-BS05,Wood,Classic,"6\'8"", 8\'0""","32, 36"',
    )

    stats = await PanelImporter(db_session).run(read_csv_rows(path))

    assert stats["created"] == 2
    panels = await fetch_all(db_session, PanelModel, PanelModel.code)
    assert [(p.code, p.height) for p in panels] == [("HAR-BS05-68", "6'8\""), ("HAR-BS05-80", "8'0\"")]
    for panel in panels:
        assert panel.widths == ["32", "36"]
        assert panel.name == "HAR-BS05"
        assert panel.material == "Wood"
        assert panel.collection == "Classic"


async def test_panel_import_single_height_keeps_code(db_session, write_csv):
    path = write_csv("panels.csv", PANEL_HEADER, 'HAR-BS06,Wood,Classic,"6\'8""",36')

    await PanelImporter(db_session).run(read_csv_rows(path))

    [panel] = await fetch_all(db_session, PanelModel)
    assert panel.code == "HAR-BS06"
    assert panel.height == "6'8\""


async def test_panel_reimport_keeps_widths(db_session, write_csv):
    path = write_csv("panels.csv", PANEL_HEADER, 'HAR-BS06,Wood,Classic,"6\'8""","32, 36"')
    await PanelImporter(db_session).run(read_csv_rows(path))

    [panel] = await fetch_all(db_session, PanelModel)
    panel.widths = ["32", "36", "40"]
    await db_session.commit()

    stats = await PanelImporter(db_session).run(read_csv_rows(path))

    assert stats["unchanged"] == 1
    [panel] = await fetch_all(db_session, PanelModel)
    assert panel.widths == ["32", "36", "40"]


async def test_panel_row_with_colliding_heights_is_an_error(db_session, write_csv):
    path = write_csv(
        "panels.csv", PANEL_HEADER,
        'BAD-1,Wood,Classic,"6\'8"", 68",36',
        'GOOD-1,Wood,Classic,"6\'8""",36',
    )

    stats = await PanelImporter(db_session).run(read_csv_rows(path))

    assert stats["errors"] == 1
    assert stats["created"] == 1
    assert [p.code for p in await fetch_all(db_session, PanelModel)] == ["GOOD-1"]


# --- Supplier panels ---

async def seed_panels(db_session, write_csv, *lines):
    await PanelImporter(db_session).run(read_csv_rows(write_csv("panels.csv", PANEL_HEADER, *lines)))


async def test_supplier_attach_partial_failure(db_session, write_csv, supplier):
    await seed_panels(
        db_session, write_csv,
        'P-1,Wood,Classic,"6\'8""","32, 36"',
        'P-2,Wood,Classic,"6\'8""","32, 36"',
        'P-3,Wood,Classic,"6\'8""","32, 36"',
    )
    path = write_csv(
        "CobraPanels.csv", SUPPLIER_HEADER,
        'Cobra,P-1,Wood,Classic,"6\'8""","32, 36",$120',
        'Cobra,NOPE,Wood,Classic,"6\'8""","32, 36",$120',
        'Cobra,P-3,Wood,Classic,"6\'8""",,$130',
    )

    stats = await SupplierPanelImporter(db_session, supplier.id).run(read_csv_rows(path))

    assert stats["total"] == 3
    assert stats["created"] == 2
    assert stats["skipped"] == 1
    assert stats["errors"] == 0

    links = await fetch_all(db_session, SupplierPanel, SupplierPanel.base_price)
    assert [link.base_price for link in links] == [Decimal("120"), Decimal("130")]
    assert links[0].price_per_width == {"32": 120.0, "36": 120.0}
    assert links[0].lead_time == "2-3 weeks"
    assert links[0].is_active is True
    # no widths in the row: the panel's own widths are priced
    assert links[1].price_per_width == {"32": 130.0, "36": 130.0}


async def test_supplier_attach_resolves_height_variants(db_session, write_csv, supplier):
    await seed_panels(db_session, write_csv, 'HAR-BS05,Wood,Classic,"6\'8"", 8\'0""","32, 36"')
    path = write_csv(
        "CobraPanels.csv", SUPPLIER_HEADER,
        'Cobra,HAR-BS05,Wood,Classic,"6\'8"", 8\'0""","32, 36",200',
    )

    stats = await SupplierPanelImporter(db_session, supplier.id, lead_time="4 weeks").run(read_csv_rows(path))

    assert stats["created"] == 2
    links = await fetch_all(db_session, SupplierPanel)
    assert {link.lead_time for link in links} == {"4 weeks"}


async def test_supplier_attach_bad_price_is_row_error(db_session, write_csv, supplier):
    await seed_panels(db_session, write_csv, 'P-1,Wood,Classic,"6\'8""",36')
    path = write_csv("CobraPanels.csv", SUPPLIER_HEADER, 'Cobra,P-1,Wood,Classic,"6\'8""",36,TBD')

    stats = await SupplierPanelImporter(db_session, supplier.id).run(read_csv_rows(path))

    assert stats["errors"] == 1
    assert await count(db_session, SupplierPanel) == 0


async def test_supplier_attach_is_idempotent_and_updates_price(db_session, write_csv, supplier):
    await seed_panels(db_session, write_csv, 'P-1,Wood,Classic,"6\'8""","32, 36"')
    first = write_csv("a.csv", SUPPLIER_HEADER, 'Cobra,P-1,Wood,Classic,"6\'8""","32, 36",120')
    second = write_csv("b.csv", SUPPLIER_HEADER, 'Cobra,P-1,Wood,Classic,"6\'8""","32, 36",125')

    await SupplierPanelImporter(db_session, supplier.id).run(read_csv_rows(first))
    again = await SupplierPanelImporter(db_session, supplier.id).run(read_csv_rows(first))
    changed = await SupplierPanelImporter(db_session, supplier.id).run(read_csv_rows(second))

    assert again["unchanged"] == 1
    assert changed["updated"] == 1
    [link] = await fetch_all(db_session, SupplierPanel)
    assert link.base_price == Decimal("125")
    assert link.price_per_width == {"32": 125.0, "36": 125.0}


async def test_supplier_attach_unknown_supplier_aborts(db_session, write_csv):
    path = write_csv("CobraPanels.csv", SUPPLIER_HEADER, 'Cobra,P-1,Wood,Classic,"6\'8""",36,120')

    with pytest.raises(RecordNotFoundError):
        await SupplierPanelImporter(db_session, "no-such-supplier").run(read_csv_rows(path))


# --- Height repair ---

async def seed_multi_height_panel(db_session, supplier):
    panel = PanelModel(
        code="HAR-BS05", name="HAR-BS05", material="Wood", collection="Classic",
        height="6'8\", 8'0\"", widths=["32", "36"],
    )
    untouched = PanelModel(
        code="KEEP-1", name="KEEP-1", material="Wood", collection="Classic",
        height="6'8\"", widths=["32"],
    )
    db_session.add_all([panel, untouched])
    await db_session.flush()
    db_session.add(SupplierPanel(supplier_id=supplier.id, panel_model_id=panel.id, base_price=Decimal("150")))
    db_session.add(SupplierPanel(supplier_id=supplier.id, panel_model_id=untouched.id, base_price=Decimal("90")))
    await db_session.commit()


async def test_height_repair_splits_panels(db_session, write_csv, supplier):
    await seed_multi_height_panel(db_session, supplier)
    path = write_csv("modify.csv", PANEL_HEADER, 'HAR-BS05,Wood,Classic,"6\'8"", 8\'0""","32, 36"')

    stats = await PanelHeightRepair(db_session).run(read_csv_rows(path))

    assert stats == {
        "supplier_panels_deleted": 1,
        "panel_models_deleted": 1,
        "created": 2,
        "skipped": 0,
    }
    panels = await fetch_all(db_session, PanelModel, PanelModel.code)
    assert [(p.code, p.height) for p in panels] == [
        ("HAR-BS05-68", "6'8\""),
        ("HAR-BS05-80", "8'0\""),
        ("KEEP-1", "6'8\""),
    ]
    assert panels[0].widths == ["32", "36"]
    # only the untouched panel's supplier link survives
    assert await count(db_session, SupplierPanel) == 1


async def test_height_repair_rerun_is_a_noop(db_session, write_csv, supplier):
    await seed_multi_height_panel(db_session, supplier)
    path = write_csv("modify.csv", PANEL_HEADER, 'HAR-BS05,Wood,Classic,"6\'8"", 8\'0""","32, 36"')

    await PanelHeightRepair(db_session).run(read_csv_rows(path))
    stats = await PanelHeightRepair(db_session).run(read_csv_rows(path))

    assert stats["panel_models_deleted"] == 0
    assert stats["created"] == 0
    assert stats["skipped"] == 2
    assert await count(db_session, PanelModel) == 3


async def test_height_repair_single_height_rerun_keeps_reattached_links(db_session, write_csv, supplier):
    panel = PanelModel(
        code="SOLO-1", name="SOLO-1", material="Wood", collection="Classic", height="6'8\"", widths=["36"],
    )
    db_session.add(panel)
    await db_session.flush()
    db_session.add(SupplierPanel(supplier_id=supplier.id, panel_model_id=panel.id, base_price=Decimal("150")))
    await db_session.commit()
    path = write_csv("modify.csv", PANEL_HEADER, 'SOLO-1,Wood,Classic,"6\'8""",36')

    first = await PanelHeightRepair(db_session).run(read_csv_rows(path))
    await SupplierPanelReattacher(db_session, supplier.id, base_price=250).run(read_csv_rows(path))
    rerun = await PanelHeightRepair(db_session).run(read_csv_rows(path))

    assert first["panel_models_deleted"] == 1
    assert first["created"] == 1
    assert rerun == {
        "supplier_panels_deleted": 0,
        "panel_models_deleted": 0,
        "created": 0,
        "skipped": 1,
    }
    [variant] = await fetch_all(db_session, PanelModel)
    assert variant.code == "SOLO-1-68"
    [link] = await fetch_all(db_session, SupplierPanel)
    assert link.panel_model_id == variant.id
    assert link.base_price == Decimal("250")
    assert link.is_active is True


async def test_height_repair_invalid_file_deletes_nothing(db_session, write_csv, supplier):
    await seed_multi_height_panel(db_session, supplier)
    path = write_csv(
        "modify.csv", PANEL_HEADER,
        'HAR-BS05,Wood,Classic,"6\'8"", 8\'0""","32, 36"',
        'BROKEN,Wood,Classic,,36',
    )

    with pytest.raises(CSVParseError):
        await PanelHeightRepair(db_session).run(read_csv_rows(path))

    assert await count(db_session, PanelModel) == 2
    assert await count(db_session, SupplierPanel) == 2


async def test_height_repair_conflicting_rows_rejected(db_session, write_csv, supplier):
    await seed_multi_height_panel(db_session, supplier)
    path = write_csv(
        "modify.csv", PANEL_HEADER,
        'HAR-BS05,Wood,Classic,"6\'8"", 8\'0""",36',
        'HAR-BS05,Wood,Classic,"6\'8"", 7\'0""",36',
    )

    with pytest.raises(CodeConflictError):
        await PanelHeightRepair(db_session).run(read_csv_rows(path))

    assert await count(db_session, PanelModel) == 2


async def test_height_repair_failure_rolls_back_deletes(db_session, write_csv, supplier, mocker):
    await seed_multi_height_panel(db_session, supplier)
    path = write_csv("modify.csv", PANEL_HEADER, 'HAR-BS05,Wood,Classic,"6\'8"", 8\'0""","32, 36"')
    mocker.patch.object(
        db_session, "flush",
        side_effect=OperationalError("INSERT", {}, Exception("disk full")),
    )

    with pytest.raises(OperationalError):
        await PanelHeightRepair(db_session).run(read_csv_rows(path))

    mocker.stopall()
    codes = [p.code for p in await fetch_all(db_session, PanelModel, PanelModel.code)]
    assert codes == ["HAR-BS05", "KEEP-1"]
    assert await count(db_session, SupplierPanel) == 2


# --- Reattach ---

async def test_reattach_links_supplier_to_variants(db_session, write_csv, supplier):
    await seed_multi_height_panel(db_session, supplier)
    path = write_csv(
        "modify.csv", PANEL_HEADER,
        'HAR-BS05,Wood,Classic,"6\'8"", 8\'0""","32, 36"',
        'GONE-1,Wood,Classic,"6\'8""",36',
    )
    await PanelHeightRepair(db_session).run(read_csv_rows(path)[:1])

    stats = await SupplierPanelReattacher(db_session, supplier.id, base_price=100).run(read_csv_rows(path))

    assert stats["created"] == 2
    assert stats["skipped"] == 1
    links = await fetch_all(db_session, SupplierPanel, SupplierPanel.base_price)
    assert [link.base_price for link in links] == [Decimal("90"), Decimal("100"), Decimal("100")]
    assert all(link.is_active for link in links)


async def test_reattach_reactivates_without_touching_price(db_session, write_csv, supplier):
    panel = PanelModel(code="P-1-68", name="P-1", material="Wood", collection="Classic", height="6'8\"", widths=["36"])
    db_session.add(panel)
    await db_session.flush()
    db_session.add(SupplierPanel(
        supplier_id=supplier.id, panel_model_id=panel.id, base_price=Decimal("175"), is_active=False,
    ))
    await db_session.commit()
    path = write_csv("modify.csv", PANEL_HEADER, 'P-1,Wood,Classic,"6\'8""",36')

    stats = await SupplierPanelReattacher(db_session, supplier.id).run(read_csv_rows(path))

    assert stats["updated"] == 1
    [link] = await fetch_all(db_session, SupplierPanel)
    assert link.is_active is True
    assert link.base_price == Decimal("175")
