from .catalog import Catalog
from .loader import CATALOG_SCHEMA, catalog_from_dict, load_catalog
from .models import PieceDefinition

__all__ = [
    "Catalog",
    "PieceDefinition",
    "CATALOG_SCHEMA",
    "catalog_from_dict",
    "load_catalog",
]
