"""
Scoring module.

Heuristic keyword metrics, the tunable scoring profile, and the composite score.
"""

from idea_oracle.scoring.keywords import (
    AI_KEYWORDS,
    BUZZWORDS,
    CRINGE_PHRASES,
    KEYWORD_LISTS,
    get_keywords,
)

from idea_oracle.scoring.profile import (
    DEFAULT_PROFILE,
    HitCurve,
    MarketViabilityParams,
    PivotBand,
    PivotBranch,
    ScoringProfile,
    get_profile,
    load_profile,
    profile_from_dict,
)

from idea_oracle.scoring.scorer import (
    KeywordScorer,
    base_score_from_hits,
    count_matches,
    count_words,
    score_from_hits,
)

from idea_oracle.scoring.composite import combine

__all__ = [
    # Keyword configuration
    "AI_KEYWORDS",
    "BUZZWORDS",
    "CRINGE_PHRASES",
    "KEYWORD_LISTS",
    "get_keywords",
    # Profile
    "DEFAULT_PROFILE",
    "HitCurve",
    "MarketViabilityParams",
    "PivotBand",
    "PivotBranch",
    "ScoringProfile",
    "get_profile",
    "load_profile",
    "profile_from_dict",
    # Scoring functions
    "KeywordScorer",
    "base_score_from_hits",
    "count_matches",
    "count_words",
    "score_from_hits",
    "combine",
]
