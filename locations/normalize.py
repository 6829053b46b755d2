#Purpose: Free-text location comparison without a geocoder.
#Decides whether two typed place names denote "the same place":
#lower-case + collapse punctuation/whitespace runs into one space
#exact match after normalization
#substring match either way ("City" vs "City, State")
#Known approximation: short names substring-match longer ones
#("Pune" matches "Puneet Nagar"). Kept on purpose, not a bug to tighten here.
#An empty name is a substring of every name, so it matches anything.

import re

_SEPARATORS = re.compile(r"[,.\s]+")


def normalize_location(location: str) -> str:
    """Lower-case, collapse comma/period/whitespace runs to one space, strip."""
    return _SEPARATORS.sub(" ", (location or "").lower()).strip()


def is_same_location(first: str, second: str) -> bool:
    norm_first = normalize_location(first)
    norm_second = normalize_location(second)

    if norm_first == norm_second:
        return True

    return norm_first in norm_second or norm_second in norm_first
