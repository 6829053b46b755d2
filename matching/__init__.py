#Expose the high-level pipeline pieces:
#Policy (weights, brackets, threshold)
#Scoring (one query vs one candidate)
#Ranking (threshold + ordering over a candidate set)
#Matcher orchestrator (the "one call" entry point for both search directions)

from .policy import MatchingPolicy, DEFAULT_POLICY, default_policy
from .scoring import score, compatibility_label
from .ranking import rank_candidates
from .matcher import Matcher, MatchResult

__all__ = [
    "MatchingPolicy",
    "DEFAULT_POLICY",
    "default_policy",
    "score",
    "compatibility_label",
    "rank_candidates",
    "Matcher",
    "MatchResult",
]
