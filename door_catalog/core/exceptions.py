class CatalogError(Exception):
    """Base exception for all catalog errors."""
    pass

class CSVReadError(CatalogError, IOError):
    """Raised when an import file is missing or unreadable."""
    pass

class CSVParseError(CatalogError):
    """Raised when delimited text or a numeric/size field cannot be parsed."""
    pass

class RecordNotFoundError(CatalogError):
    """Raised when a referenced natural key or id does not exist."""
    pass

class CodeConflictError(CatalogError):
    """Raised when two height variants synthesize the same panel code."""
    pass

class StoreError(CatalogError):
    """Raised when the database layer fails."""
    pass
