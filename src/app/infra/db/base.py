# src/app/infra/db/base.py
"""
Abstract base classes for the recipe catalog repositories.
This interface allows easy swapping between different storage backends.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from src.app.domain.models import Recipe, Source


class SourceRepository(ABC):
    """
    Abstract interface for Source persistence.

    Implementations:
    - InMemorySourceRepository: process-local storage (tests, local dev)
    - SupabaseSourceRepository: Postgres table via Supabase
    """

    @abstractmethod
    def add(self, source: Source) -> Source:
        """
        Store a new source and assign its id.

        Args:
            source: The source to store (its id is ignored)

        Returns:
            The stored Source with its id set
        """
        pass

    @abstractmethod
    def get(self, source_id: int) -> Source:
        """
        Get a source by id.

        Raises:
            SourceNotFoundError: If no source has this id
        """
        pass

    @abstractmethod
    def list_sources(self, limit: int = 100, offset: int = 0) -> list[Source]:
        """List sources ordered by id."""
        pass

    @abstractmethod
    def update(self, source: Source) -> Source:
        """
        Persist changes to an existing source.

        Raises:
            SourceNotFoundError: If the source does not exist
        """
        pass

    @abstractmethod
    def delete(self, source_id: int) -> None:
        """
        Delete a source.

        Raises:
            SourceNotFoundError: If the source does not exist
            ReferentialIntegrityError: If recipes still reference it
        """
        pass


class RecipeRepository(ABC):
    """
    Abstract interface for Recipe persistence.
    Every stored recipe references an existing Source.
    """

    @abstractmethod
    def add(self, recipe: Recipe) -> Recipe:
        """
        Store a new recipe and assign its id.

        Raises:
            SourceNotFoundError: If recipe.source_id does not identify a source
        """
        pass

    @abstractmethod
    def get(self, recipe_id: int) -> Recipe:
        """
        Get a recipe by id, with its source attached.

        Raises:
            RecipeNotFoundError: If no recipe has this id
        """
        pass

    @abstractmethod
    def list_recipes(
        self,
        source_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Recipe]:
        """
        List recipes ordered by id, optionally only those of one source.
        Every returned recipe has its source attached.
        """
        pass

    @abstractmethod
    def update(self, recipe: Recipe) -> Recipe:
        """
        Persist changes to an existing recipe.

        Raises:
            RecipeNotFoundError: If the recipe does not exist
            SourceNotFoundError: If the new source_id does not identify a source
        """
        pass

    @abstractmethod
    def delete(self, recipe_id: int) -> None:
        """
        Delete a recipe.

        Raises:
            RecipeNotFoundError: If the recipe does not exist
        """
        pass
