"""
Purpose: The one object the scorer talks to for location questions.
What it does:
Bundles normalization, same-place checks and the catalog distance fallback
over a single shared, read-only CityCatalog.
"""

from __future__ import annotations

from typing import Optional

from .catalog import CityCatalog, default_catalog
from .normalize import is_same_location, normalize_location


class LocationComparator:

    def __init__(self, catalog: Optional[CityCatalog] = None):
        self.catalog = catalog or default_catalog()

    @staticmethod
    def normalize(location: str) -> str:
        return normalize_location(location)

    @staticmethod
    def is_same_location(first: str, second: str) -> bool:
        return is_same_location(first, second)

    def distance_km(self, first: str, second: str) -> float:
        return self.catalog.distance_km(first, second)


# Built once at import and shared by every caller that does not bring its own.
DEFAULT_COMPARATOR = LocationComparator()
