from .catalog_service import CatalogService
from .panel_service import PanelService
from .supplier_service import SupplierService
