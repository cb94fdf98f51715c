from .csv_reader import iter_csv_rows, read_csv_rows
from .door_importer import DoorImporter
from .panel_importer import PanelImporter
from .supplier_panel_importer import SupplierPanelImporter, SupplierPanelReattacher
from .height_repair import PanelHeightRepair

__all__ = [
    'iter_csv_rows',
    'read_csv_rows',
    'DoorImporter',
    'PanelImporter',
    'SupplierPanelImporter',
    'SupplierPanelReattacher',
    'PanelHeightRepair',
]
