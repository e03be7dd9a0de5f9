"""
Custom exceptions for vendor table generation.

Provides specific error types for different failure modes so that scripts
can report configuration problems separately from empty results.
"""


class VendorTablesError(Exception):
    pass


class CatalogError(VendorTablesError):
    pass


class CriteriaError(VendorTablesError):
    pass


class PartitionOverlapError(VendorTablesError):
    def __init__(self, item_ids: list[str]):
        self.item_ids = item_ids
        super().__init__(f"Partitions declared disjoint share item IDs: {item_ids}")


class EmptyTableError(VendorTablesError):
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"No eligible items for table '{table_name}'")
