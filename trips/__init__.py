"""
Trips domain package.

Public API:
- Domain models: TripQuery, TripCandidate, ScoredCandidate, TripStatus, TripKind
- Boundary helpers: Address, Unresolved, location_from_record, location_text, parse_timestamp
"""
from .models import (
    Address,
    ScoredCandidate,
    TripCandidate,
    TripKind,
    TripQuery,
    TripStatus,
    Unresolved,
    location_from_record,
    location_text,
    parse_timestamp,
)

__all__ = ["TripQuery",
           "TripCandidate",
             "ScoredCandidate",
               "TripStatus",
               "TripKind",
               "Address",
               "Unresolved",
               "location_from_record",
               "location_text",
               "parse_timestamp",
               ]
