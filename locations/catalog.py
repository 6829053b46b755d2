"""
Purpose: Closed city -> coordinate lookup used as the distance fallback.
What it does:
- Holds a fixed, read-only table of known cities (name -> latitude/longitude)
- Resolves free-text names by direct key, then by partial (substring) match
- Substitutes the anchor city for names it does not know, so scoring stays total
- Computes great-circle (haversine) distance in kilometers

Rule: This is a lookup table, not a geocoder. Unknown inputs get the anchor's
coordinates, which gives misleading distances outside the catalog.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from .normalize import normalize_location

EARTH_RADIUS_KM = 6371.0

DEFAULT_ANCHOR = "mumbai"


@dataclass(frozen=True)
class City:
    name: str
    latitude: float
    longitude: float


# Intercity catalog (key, display name, lat, lon). Order matters for partial matches.
INDIAN_CITIES: Tuple[Tuple[str, str, float, float], ...] = (
    ("mumbai", "Mumbai", 19.0760, 72.8777),
    ("delhi", "Delhi", 28.6139, 77.2090),
    ("bangalore", "Bangalore", 12.9716, 77.5946),
    ("hyderabad", "Hyderabad", 17.3850, 78.4867),
    ("chennai", "Chennai", 13.0827, 80.2707),
    ("kolkata", "Kolkata", 22.5726, 88.3639),
    ("pune", "Pune", 18.5204, 73.8567),
    ("ahmedabad", "Ahmedabad", 23.0225, 72.5714),
    ("jaipur", "Jaipur", 26.9124, 75.7873),
    ("surat", "Surat", 21.1702, 72.8311),
    ("lucknow", "Lucknow", 26.8467, 80.9462),
    ("kanpur", "Kanpur", 26.4499, 80.3319),
    ("nagpur", "Nagpur", 21.1458, 79.0882),
    ("patna", "Patna", 25.5941, 85.1376),
    ("indore", "Indore", 22.7196, 75.8577),
    ("thane", "Thane", 19.2183, 72.9781),
    ("bhopal", "Bhopal", 23.2599, 77.4126),
    ("visakhapatnam", "Visakhapatnam", 17.6868, 83.2185),
    ("vadodara", "Vadodara", 22.3072, 73.1812),
    ("firozabad", "Firozabad", 27.1592, 78.3957),
)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two (lat, lon) points in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


class CityCatalog:
    """
    Read-only city table. Build once at startup and share it; use
    `extended` to get a bigger catalog rather than mutating this one.
    """

    def __init__(self, cities: Dict[str, City], anchor: str = DEFAULT_ANCHOR):
        if not cities:
            raise ValueError("City catalog must contain at least one city.")

        self._cities: Dict[str, City] = {normalize_location(key): city for key, city in cities.items()}
        self.anchor_key = normalize_location(anchor)

        if self.anchor_key not in self._cities:
            raise ValueError(f"Anchor city '{anchor}' is not in the catalog.")

    def __len__(self) -> int:
        return len(self._cities)

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    @property
    def anchor(self) -> City:
        return self._cities[self.anchor_key]

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._cities)

    def find(self, name: str) -> Optional[City]:
        """
        Direct key match first, then the first key (in catalog order) that
        contains the name or is contained in it.
        """
        normalized = normalize_location(name)
        if not normalized:
            return None

        if normalized in self._cities:
            return self._cities[normalized]

        for key, city in self._cities.items():
            if key in normalized or normalized in key:
                return city

        return None

    def locate(self, name: str) -> City:
        return self.find(name) or self.anchor

    def distance_km(self, from_name: str, to_name: str) -> float:
        origin = self.locate(from_name)
        target = self.locate(to_name)
        return haversine_km(origin.latitude, origin.longitude, target.latitude, target.longitude)

    def extended(self, cities: Iterable[Tuple[str, City]]) -> CityCatalog:
        merged = dict(self._cities)
        for key, city in cities:
            merged[normalize_location(key)] = city
        return CityCatalog(merged, anchor=self.anchor_key)


def default_catalog() -> CityCatalog:
    """
    Convenience factory for the built-in intercity catalog.
    """
    return CityCatalog(
        {key: City(name=name, latitude=lat, longitude=lon) for key, name, lat, lon in INDIAN_CITIES},
        anchor=DEFAULT_ANCHOR,
    )
