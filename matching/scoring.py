"""
Purpose: Compatibility score between a query trip and a candidate trip.
What it does:

Computes three independent components, in this order:

destination (max 70): same place -> full points, else distance brackets

pickup (max 20): same place -> full points, else distance brackets

time (max 10): absolute hours apart -> time brackets

Sums them and clamps to [0, 100].

Degraded inputs never raise:

unknown city -> catalog anchor coordinates (via LocationComparator)

unparseable timestamp -> time component 0

Rule: Scoring is pure. It does not filter, sort or touch any store.
"""

# matching/scoring.py

from __future__ import annotations

from typing import Optional

from locations import DEFAULT_COMPARATOR, LocationComparator
from trips.models import Timestamp, TripCandidate, TripQuery, parse_timestamp

from .policy import DEFAULT_POLICY, Brackets


def score(
    query: TripQuery,
    candidate: TripCandidate,
    comparator: Optional[LocationComparator] = None,
) -> float:
    """
    Score how well `candidate` matches `query` on a 0-100 scale.

    Inputs:
      - query: the trip being matched (passenger request or driver offer).
      - candidate: a stored trip from the other side.
      - comparator: location comparator to use; defaults to the shared one
        built over the default city catalog.

    Output:
      - float in [0, 100]. Identical trips score 100.
    """
    comparator = comparator or DEFAULT_COMPARATOR

    total = (
        destination_points(query.destination, candidate.destination, comparator)
        + pickup_points(query.pickup, candidate.pickup, comparator)
        + time_points(query.time, candidate.time)
    )

    return float(max(0.0, min(total, DEFAULT_POLICY.max_score)))


def destination_points(first: str, second: str, comparator: LocationComparator) -> float:
    return _location_points(
        first,
        second,
        comparator,
        full_points=DEFAULT_POLICY.destination_weight,
        brackets=DEFAULT_POLICY.destination_brackets,
    )


def pickup_points(first: str, second: str, comparator: LocationComparator) -> float:
    return _location_points(
        first,
        second,
        comparator,
        full_points=DEFAULT_POLICY.pickup_weight,
        brackets=DEFAULT_POLICY.pickup_brackets,
    )


def time_points(first: Timestamp, second: Timestamp) -> float:
    hours = hours_apart(first, second)
    if hours is None:
        return 0.0
    return _bracket_points(hours, DEFAULT_POLICY.time_brackets)


def hours_apart(first: Timestamp, second: Timestamp) -> Optional[float]:
    """
    Absolute difference in hours, or None if either side is not a timestamp.
    """
    first_dt = parse_timestamp(first)
    second_dt = parse_timestamp(second)
    if first_dt is None or second_dt is None:
        return None
    return abs((first_dt - second_dt).total_seconds()) / 3600.0


def compatibility_label(value: float) -> str:
    """
    Display band for a score. The last band ("Possible Match") cannot occur
    after ranking, but display code elsewhere reuses the mapping.
    """
    for threshold, label in DEFAULT_POLICY.label_bands:
        if value >= threshold:
            return label
    return DEFAULT_POLICY.fallback_label


# -------------------------
# Component helpers
# -------------------------

def _location_points(
    first: str,
    second: str,
    comparator: LocationComparator,
    *,
    full_points: float,
    brackets: Brackets,
) -> float:
    if comparator.is_same_location(first, second):
        return float(full_points)

    distance = comparator.distance_km(first, second)
    return _bracket_points(distance, brackets)


def _bracket_points(value: float, brackets: Brackets) -> float:
    for upper_bound, points in brackets:
        if value <= upper_bound:
            return float(points)
    return 0.0
