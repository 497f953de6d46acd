# src/app/domain/models.py
"""
Domain models for the recipe catalog.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import MISSING, dataclass, field, fields
from datetime import date
from typing import Any, Optional

# Ordered from coldest to hottest connotation (presentation only)
SUMMARIES: tuple[str, ...] = (
    "Freezing",
    "Bracing",
    "Chilly",
    "Cool",
    "Mild",
    "Warm",
    "Balmy",
    "Hot",
    "Sweltering",
    "Scorching",
)


def _build_partial(cls: type, values: dict[str, Any]) -> Any:
    """Create an instance of a dataclass without running its constructor."""
    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise TypeError(f"Unknown fields for {cls.__name__}: {', '.join(sorted(unknown))}")

    instance = object.__new__(cls)
    for f in fields(cls):
        if f.name in values:
            value = values[f.name]
        elif f.default is not MISSING:
            value = f.default
        elif f.default_factory is not MISSING:
            value = f.default_factory()
        else:
            value = None
        setattr(instance, f.name, value)
    return instance


@dataclass
class Source:
    """
    Where a recipe comes from: a cookbook, a website, a family member.
    `recipes` is a navigation back-reference; a Source does not own its recipes.
    """
    name: str
    has_page_numbers: bool
    id: Optional[int] = None
    recipes: list["Recipe"] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def partial(cls, **values: Any) -> "Source":
        """Unchecked builder: any required field left out is None."""
        return _build_partial(cls, values)


@dataclass
class Recipe:
    """
    An ice cream recipe.
    `page_number` is only meaningful when the source has page numbers.
    """
    name: str
    source_id: int
    preparation_time: int  # minutes
    page_number: Optional[int] = None
    id: Optional[int] = None
    source: Optional[Source] = field(default=None, repr=False, compare=False)

    @classmethod
    def partial(cls, **values: Any) -> "Recipe":
        """Unchecked builder: any required field left out is None."""
        return _build_partial(cls, values)

    def attach_source(self, source: Source) -> None:
        """Link this recipe to `source` and register it in the back-reference."""
        self.source = source
        if source.id is not None:
            self.source_id = source.id
        if not any(existing is self for existing in source.recipes):
            source.recipes.append(self)


@dataclass
class WeatherForecast:
    """Demo value created per request and discarded after serialization."""
    date: date
    temperature_c: int
    summary: Optional[str] = None

    @property
    def temperature_f(self) -> int:
        return 32 + round(self.temperature_c / 0.5556)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "temperatureC": self.temperature_c,
            "temperatureF": self.temperature_f,
            "summary": self.summary,
        }
