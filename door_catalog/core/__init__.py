"""
Core module exports.
"""
from .exceptions import (
    CatalogError,
    CSVReadError,
    CSVParseError,
    RecordNotFoundError,
    CodeConflictError,
    StoreError
)
