# src/app/deps.py
from __future__ import annotations

from src.app.config import settings
from src.app.infra.db.base import RecipeRepository, SourceRepository
from src.app.infra.db.memory_repo import (
    InMemoryCatalog,
    InMemoryRecipeRepository,
    InMemorySourceRepository,
)
from src.app.infra.db.supabase_catalog_repo import SupabaseRecipeRepository, SupabaseSourceRepository
from src.app.services.forecast_service import ForecastService

_forecast_service: ForecastService | None = None
_catalog: InMemoryCatalog | None = None


def get_forecast_service() -> ForecastService:
    global _forecast_service
    if _forecast_service is None:
        _forecast_service = ForecastService()
    return _forecast_service


def get_catalog() -> InMemoryCatalog:
    global _catalog
    if _catalog is None:
        _catalog = InMemoryCatalog()
    return _catalog


def _use_supabase() -> bool:
    backend = settings.CATALOG_BACKEND.lower()
    if backend not in ("memory", "supabase"):
        raise ValueError(f"CATALOG_BACKEND must be 'memory' or 'supabase', got: {settings.CATALOG_BACKEND}")
    return backend == "supabase"


def get_source_repository() -> SourceRepository:
    if _use_supabase():
        return SupabaseSourceRepository()
    return InMemorySourceRepository(get_catalog())


def get_recipe_repository() -> RecipeRepository:
    if _use_supabase():
        return SupabaseRecipeRepository()
    return InMemoryRecipeRepository(get_catalog())
