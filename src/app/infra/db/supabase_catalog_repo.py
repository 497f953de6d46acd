from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client, create_client

from src.app.config import settings
from src.app.domain.errors import (
    CatalogRepositoryError,
    RecipeNotFoundError,
    ReferentialIntegrityError,
    SourceNotFoundError,
)
from src.app.domain.models import Recipe, Source
from src.app.infra.db.base import RecipeRepository, SourceRepository

logger = logging.getLogger(__name__)

SOURCES_TABLE = "sources"
RECIPES_TABLE = "recipes"

Row = dict[str, Any]


def _create_supabase_client() -> Client:
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY required")
    return create_client(str(settings.SUPABASE_URL), settings.SUPABASE_SERVICE_ROLE_KEY)


def _optional_int(value: object) -> Optional[int]:
    return int(value) if value is not None else None


def _row_to_source(row: Row) -> Source:
    return Source(
        id=int(row["id"]),
        name=str(row["name"]),
        has_page_numbers=bool(row["has_page_numbers"]),
    )


def _row_to_recipe(row: Row) -> Recipe:
    return Recipe(
        id=int(row["id"]),
        name=str(row["name"]),
        source_id=int(row["source_id"]),
        page_number=_optional_int(row.get("page_number")),
        preparation_time=int(row["preparation_time"]),
    )


def _source_to_row(source: Source) -> Row:
    return {"name": source.name, "has_page_numbers": source.has_page_numbers}


def _recipe_to_row(recipe: Recipe) -> Row:
    return {
        "name": recipe.name,
        "source_id": recipe.source_id,
        "page_number": recipe.page_number,
        "preparation_time": recipe.preparation_time,
    }


class _SupabaseTable:
    TABLE_NAME = ""

    def __init__(self, client: Client | None = None):
        self._client = client or _create_supabase_client()
        logger.info("%s initialized", type(self).__name__)

    def _table(self, name: str | None = None):
        return self._client.table(name or self.TABLE_NAME)

    def _fetch_row(self, table: str, row_id: Optional[int]) -> Row | None:
        if row_id is None:
            return None
        rows = self._run(f"fetch_{table}", self._table(table).select("*").eq("id", row_id).limit(1))
        return rows[0] if rows else None

    def _run(self, operation: str, query) -> list[Row]:
        try:
            return query.execute().data or []
        except (ConnectionError, TimeoutError) as error:
            logger.error("Network error during %s: %s", operation, error)
            raise CatalogRepositoryError(operation, str(error)) from error


class SupabaseSourceRepository(_SupabaseTable, SourceRepository):
    TABLE_NAME = SOURCES_TABLE

    def add(self, source: Source) -> Source:
        rows = self._run("add_source", self._table().insert(_source_to_row(source)))
        if not rows:
            raise CatalogRepositoryError("add_source", "insert returned no rows")
        created = _row_to_source(rows[0])
        logger.info("Created source: id=%s, name=%s", created.id, created.name)
        return created

    def get(self, source_id: int) -> Source:
        rows = self._run("get_source", self._table().select("*").eq("id", source_id).limit(1))
        if not rows:
            raise SourceNotFoundError(source_id)
        source = _row_to_source(rows[0])
        recipe_rows = self._run(
            "get_source",
            self._table(RECIPES_TABLE).select("*").eq("source_id", source_id).order("id"),
        )
        for row in recipe_rows:
            _row_to_recipe(row).attach_source(source)
        return source

    def list_sources(self, limit: int = 100, offset: int = 0) -> list[Source]:
        rows = self._run(
            "list_sources",
            self._table().select("*").order("id").range(offset, offset + limit - 1),
        )
        return [_row_to_source(row) for row in rows]

    def update(self, source: Source) -> Source:
        rows = self._run(
            "update_source",
            self._table().update(_source_to_row(source)).eq("id", source.id),
        )
        if not rows:
            raise SourceNotFoundError(source.id)
        return _row_to_source(rows[0])

    def delete(self, source_id: int) -> None:
        if self._fetch_row(SOURCES_TABLE, source_id) is None:
            raise SourceNotFoundError(source_id)

        referencing = self._run(
            "delete_source",
            self._table(RECIPES_TABLE).select("id").eq("source_id", source_id),
        )
        if referencing:
            raise ReferentialIntegrityError(source_id, len(referencing))

        self._run("delete_source", self._table().delete().eq("id", source_id))
        logger.info("Deleted source: id=%s", source_id)


class SupabaseRecipeRepository(_SupabaseTable, RecipeRepository):
    TABLE_NAME = RECIPES_TABLE

    def add(self, recipe: Recipe) -> Recipe:
        source_row = self._require_source(recipe.source_id)
        rows = self._run("add_recipe", self._table().insert(_recipe_to_row(recipe)))
        if not rows:
            raise CatalogRepositoryError("add_recipe", "insert returned no rows")
        created = _row_to_recipe(rows[0])
        created.source = _row_to_source(source_row)
        logger.info("Created recipe: id=%s, source_id=%s", created.id, created.source_id)
        return created

    def get(self, recipe_id: int) -> Recipe:
        rows = self._run("get_recipe", self._table().select("*").eq("id", recipe_id).limit(1))
        if not rows:
            raise RecipeNotFoundError(recipe_id)
        recipe = _row_to_recipe(rows[0])
        source_row = self._fetch_row(SOURCES_TABLE, recipe.source_id)
        if source_row is not None:
            recipe.source = _row_to_source(source_row)
        return recipe

    def list_recipes(
        self,
        source_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Recipe]:
        query = self._table().select("*")
        if source_id is not None:
            query = query.eq("source_id", source_id)
        rows = self._run("list_recipes", query.order("id").range(offset, offset + limit - 1))
        recipes = [_row_to_recipe(row) for row in rows]
        if not recipes:
            return recipes

        source_ids = sorted({recipe.source_id for recipe in recipes})
        source_rows = self._run(
            "list_recipes",
            self._table(SOURCES_TABLE).select("*").in_("id", source_ids),
        )
        sources = {int(row["id"]): _row_to_source(row) for row in source_rows}
        for recipe in recipes:
            recipe.source = sources.get(recipe.source_id)
        return recipes

    def update(self, recipe: Recipe) -> Recipe:
        source_row = self._require_source(recipe.source_id)
        rows = self._run(
            "update_recipe",
            self._table().update(_recipe_to_row(recipe)).eq("id", recipe.id),
        )
        if not rows:
            raise RecipeNotFoundError(recipe.id)
        updated = _row_to_recipe(rows[0])
        updated.source = _row_to_source(source_row)
        return updated

    def delete(self, recipe_id: int) -> None:
        rows = self._run("delete_recipe", self._table().delete().eq("id", recipe_id))
        if not rows:
            raise RecipeNotFoundError(recipe_id)
        logger.info("Deleted recipe: id=%s", recipe_id)

    def _require_source(self, source_id: Optional[int]) -> Row:
        row = self._fetch_row(SOURCES_TABLE, source_id)
        if row is None:
            raise SourceNotFoundError(source_id)
        return row
