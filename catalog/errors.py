"""
Catalog error taxonomy.

All failures surfaced by the store derive from CatalogError.
"""


class CatalogError(Exception):
    """Base class for catalog failures."""


class ItemNotFoundError(CatalogError, LookupError):
    """Raised when an operation targets an id with no catalog entry."""

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Product with id {item_id} does not exist")


class MalformedRecordError(CatalogError, ValueError):
    """Raised by the strict record parsers for a line that cannot be decoded."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")


class SnapshotError(CatalogError):
    """Raised when a snapshot file is unreadable or has an unknown version."""
