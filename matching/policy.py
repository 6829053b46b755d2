"""
Purpose: Central configuration for compatibility scoring (single source of truth).
What it does:

Stores all scoring weights/thresholds:

DESTINATION_WEIGHT = 70

PICKUP_WEIGHT = 20

TIME_WEIGHT = 10

MIN_COMPATIBILITY = 40

plus the distance/time bracket tables and the display label bands.

The policy is global: scoring reads DEFAULT_POLICY, it is not passed per call.

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# (upper bound, points) - first bracket whose bound is >= the value wins.
Brackets = Tuple[Tuple[float, float], ...]

DESTINATION_WEIGHT = 70
PICKUP_WEIGHT = 20
TIME_WEIGHT = 10

MIN_COMPATIBILITY = 40
MAX_SCORE = 100

# Distance brackets in kilometers
DESTINATION_DISTANCE_BRACKETS: Brackets = ((30, 50), (80, 30), (150, 15))
PICKUP_DISTANCE_BRACKETS: Brackets = ((30, 15), (80, 10), (150, 5))

# Time brackets in hours
TIME_BRACKETS: Brackets = ((1, 10), (2, 8), (4, 5), (8, 3))

LABEL_BANDS: Tuple[Tuple[float, str], ...] = (
    (80, "Excellent Match"),
    (60, "Good Match"),
    (40, "Fair Match"),
)
FALLBACK_LABEL = "Possible Match"


@dataclass(frozen=True)
class MatchingPolicy:
    """
    Central configuration for compatibility scoring.

    Notes:
    - destination matters most: two trips ending in different places cannot
      be shared whatever their pickups or times.
    - pickup is secondary: riders can walk to a shared pickup point.
    - time is least weighted: schedules commonly shift by an hour or two.
    """

    # --- Component weights (full points on a same-location / on-time match) ---
    destination_weight: float = DESTINATION_WEIGHT
    pickup_weight: float = PICKUP_WEIGHT
    time_weight: float = TIME_WEIGHT

    # --- Fallback brackets when locations are not the same place ---
    destination_brackets: Brackets = DESTINATION_DISTANCE_BRACKETS
    pickup_brackets: Brackets = PICKUP_DISTANCE_BRACKETS

    # --- Time proximity brackets ---
    time_brackets: Brackets = TIME_BRACKETS

    # --- Acceptance ---
    # Candidates scoring below this are not viable matches.
    min_compatibility: float = MIN_COMPATIBILITY
    max_score: float = MAX_SCORE

    # --- Display ---
    label_bands: Tuple[Tuple[float, str], ...] = LABEL_BANDS
    fallback_label: str = FALLBACK_LABEL

    def validate(self) -> None:
        """
        Basic sanity checks. Called once at startup by default_policy().
        """
        for name in ("destination_weight", "pickup_weight", "time_weight"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")

        if self.max_score <= 0:
            raise ValueError("max_score must be > 0")

        if not 0 <= self.min_compatibility <= self.max_score:
            raise ValueError("min_compatibility must be within [0, max_score]")

        _validate_brackets("destination_brackets", self.destination_brackets, self.destination_weight)
        _validate_brackets("pickup_brackets", self.pickup_brackets, self.pickup_weight)
        _validate_brackets("time_brackets", self.time_brackets, self.time_weight)

        thresholds = [threshold for threshold, _ in self.label_bands]
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError("label_bands must be ordered from highest to lowest threshold")


def _validate_brackets(name: str, brackets: Brackets, weight: float) -> None:
    if not brackets:
        raise ValueError(f"{name} must not be empty")

    previous = None
    for bound, points in brackets:
        if bound < 0:
            raise ValueError(f"{name} bounds must be >= 0")
        if previous is not None and bound <= previous:
            raise ValueError(f"{name} bounds must be strictly increasing")
        if not 0 <= points <= weight:
            raise ValueError(f"{name} points must be within [0, {weight}]")
        previous = bound


def default_policy() -> MatchingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = MatchingPolicy()
    p.validate()
    return p


DEFAULT_POLICY = default_policy()
