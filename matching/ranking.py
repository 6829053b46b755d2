"""
Purpose: Ranking/selection layer (the "who fits best" list).
Takes candidates (pending offers or requests from the record store) and produces
a thresholded, ordered list of ScoredCandidate.

Same algorithm in both directions: passenger->drivers and driver->passengers
only swap which trip is the query.

Rule: Pure and synchronous. No store calls, no status changes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from locations import LocationComparator
from trips.models import ScoredCandidate, TripCandidate, TripQuery, TripStatus, parse_timestamp

from .policy import DEFAULT_POLICY
from .scoring import compatibility_label, score

# Unparseable created_at sorts after every real timestamp among equal scores.
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def rank_candidates(
    query: TripQuery,
    candidates: Iterable[TripCandidate],
    comparator: Optional[LocationComparator] = None,
) -> List[ScoredCandidate]:
    """
    Score every pending candidate against `query`, drop the ones below the
    minimum compatibility, and order the rest.

    Ordering:
      1) compatibility_score descending
      2) created_at descending (most recent first)

    Returns an empty list when nothing qualifies.
    """
    ranked: List[ScoredCandidate] = []

    for candidate in candidates:
        # only pending trips are eligible, whatever the store handed us
        if candidate.status != TripStatus.PENDING:
            continue

        value = score(query, candidate, comparator)
        if value < DEFAULT_POLICY.min_compatibility:
            continue

        ranked.append(
            ScoredCandidate(
                candidate=candidate,
                compatibility_score=value,
                label=compatibility_label(value),
            )
        )

    ranked.sort(
        key=lambda scored: (scored.compatibility_score, _created_at_key(scored)),
        reverse=True,
    )
    return ranked


def _created_at_key(scored: ScoredCandidate) -> datetime:
    return parse_timestamp(scored.created_at) or _OLDEST
