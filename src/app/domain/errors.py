from __future__ import annotations


class CatalogError(Exception):
    pass


class SourceNotFoundError(CatalogError):
    def __init__(self, source_id: int):
        super().__init__(f"Source not found: {source_id}")
        self.source_id = source_id


class RecipeNotFoundError(CatalogError):
    def __init__(self, recipe_id: int):
        super().__init__(f"Recipe not found: {recipe_id}")
        self.recipe_id = recipe_id


class ReferentialIntegrityError(CatalogError):
    def __init__(self, source_id: int, recipe_count: int):
        super().__init__(f"Source {source_id} is still referenced by {recipe_count} recipe(s)")
        self.source_id = source_id
        self.recipe_count = recipe_count


class CatalogRepositoryError(CatalogError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Catalog repository error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason


class InvalidOperationError(Exception):
    """Raised by the error-simulation endpoint."""
