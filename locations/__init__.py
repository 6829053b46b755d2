#Marks locations as a package.
#Re-exports the Location Comparator API (normalize, same-place check,
#city catalog distance fallback) so callers import from locations without
#knowing internal file names.
#No business logic.

from .normalize import normalize_location, is_same_location
from .catalog import City, CityCatalog, default_catalog, haversine_km, INDIAN_CITIES, DEFAULT_ANCHOR
from .comparator import LocationComparator, DEFAULT_COMPARATOR

__all__ = [
           "normalize_location",
           "is_same_location",
             "City",
             "CityCatalog",
             "default_catalog",
             "haversine_km",
             "INDIAN_CITIES",
             "DEFAULT_ANCHOR",
             "LocationComparator",
             "DEFAULT_COMPARATOR",
             ]
