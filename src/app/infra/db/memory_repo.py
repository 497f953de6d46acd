from __future__ import annotations

import itertools
import logging
import threading
from typing import Optional

from src.app.domain.errors import RecipeNotFoundError, ReferentialIntegrityError, SourceNotFoundError
from src.app.domain.models import Recipe, Source
from src.app.infra.db.base import RecipeRepository, SourceRepository

logger = logging.getLogger(__name__)


def _copy_source(source: Source) -> Source:
    return Source(name=source.name, has_page_numbers=source.has_page_numbers, id=source.id)


def _copy_recipe(recipe: Recipe) -> Recipe:
    return Recipe(
        name=recipe.name,
        source_id=recipe.source_id,
        preparation_time=recipe.preparation_time,
        page_number=recipe.page_number,
        id=recipe.id,
    )


class InMemoryCatalog:
    """Shared process-local store backing both in-memory repositories."""

    def __init__(self) -> None:
        self.sources: dict[int, Source] = {}
        self.recipes: dict[int, Recipe] = {}
        self.lock = threading.RLock()
        self._source_ids = itertools.count(1)
        self._recipe_ids = itertools.count(1)

    def next_source_id(self) -> int:
        return next(self._source_ids)

    def next_recipe_id(self) -> int:
        return next(self._recipe_ids)

    def recipes_of(self, source_id: int) -> list[Recipe]:
        return [r for _, r in sorted(self.recipes.items()) if r.source_id == source_id]

    def require_source(self, source_id: Optional[int]) -> Source:
        if source_id is None or source_id not in self.sources:
            raise SourceNotFoundError(source_id)
        return self.sources[source_id]


class InMemorySourceRepository(SourceRepository):
    def __init__(self, catalog: Optional[InMemoryCatalog] = None):
        self.catalog = catalog or InMemoryCatalog()

    def add(self, source: Source) -> Source:
        with self.catalog.lock:
            stored = _copy_source(source)
            stored.id = self.catalog.next_source_id()
            self.catalog.sources[stored.id] = stored
            created = self._load(stored)
        logger.info("Created source: id=%s, name=%s", created.id, created.name)
        return created

    def get(self, source_id: int) -> Source:
        with self.catalog.lock:
            return self._load(self.catalog.require_source(source_id))

    def list_sources(self, limit: int = 100, offset: int = 0) -> list[Source]:
        with self.catalog.lock:
            ordered = [s for _, s in sorted(self.catalog.sources.items())]
            return [self._load(s) for s in ordered[offset:offset + limit]]

    def update(self, source: Source) -> Source:
        with self.catalog.lock:
            self.catalog.require_source(source.id)
            stored = _copy_source(source)
            self.catalog.sources[stored.id] = stored
            return self._load(stored)

    def delete(self, source_id: int) -> None:
        with self.catalog.lock:
            self.catalog.require_source(source_id)
            referencing = self.catalog.recipes_of(source_id)
            if referencing:
                raise ReferentialIntegrityError(source_id, len(referencing))
            del self.catalog.sources[source_id]
        logger.info("Deleted source: id=%s", source_id)

    def _load(self, stored: Source) -> Source:
        source = _copy_source(stored)
        for recipe in self.catalog.recipes_of(stored.id):
            _copy_recipe(recipe).attach_source(source)
        return source


class InMemoryRecipeRepository(RecipeRepository):
    def __init__(self, catalog: Optional[InMemoryCatalog] = None):
        self.catalog = catalog or InMemoryCatalog()

    def add(self, recipe: Recipe) -> Recipe:
        with self.catalog.lock:
            self.catalog.require_source(recipe.source_id)
            stored = _copy_recipe(recipe)
            stored.id = self.catalog.next_recipe_id()
            self.catalog.recipes[stored.id] = stored
            created = self._load(stored)
        logger.info("Created recipe: id=%s, source_id=%s", created.id, created.source_id)
        return created

    def get(self, recipe_id: int) -> Recipe:
        with self.catalog.lock:
            return self._load(self._require(recipe_id))

    def list_recipes(
        self,
        source_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Recipe]:
        with self.catalog.lock:
            ordered = [r for _, r in sorted(self.catalog.recipes.items())]
            if source_id is not None:
                ordered = [r for r in ordered if r.source_id == source_id]
            return [self._load(r) for r in ordered[offset:offset + limit]]

    def update(self, recipe: Recipe) -> Recipe:
        with self.catalog.lock:
            self._require(recipe.id)
            self.catalog.require_source(recipe.source_id)
            stored = _copy_recipe(recipe)
            self.catalog.recipes[stored.id] = stored
            return self._load(stored)

    def delete(self, recipe_id: int) -> None:
        with self.catalog.lock:
            self._require(recipe_id)
            del self.catalog.recipes[recipe_id]
        logger.info("Deleted recipe: id=%s", recipe_id)

    def _require(self, recipe_id: Optional[int]) -> Recipe:
        if recipe_id is None or recipe_id not in self.catalog.recipes:
            raise RecipeNotFoundError(recipe_id)
        return self.catalog.recipes[recipe_id]

    def _load(self, stored: Recipe) -> Recipe:
        recipe = _copy_recipe(stored)
        recipe.source = _copy_source(self.catalog.sources[stored.source_id])
        return recipe
