"""
Data models module.

Defines score containers, the founder rank enumeration, and metric keys.
"""

from idea_oracle.models.score_set import (
    AUGMENTED_KEYS,
    HEURISTIC_KEYS,
    METRIC_KEYS,
    AugmentedScores,
    FounderRank,
    HeuristicScores,
    ScoreRequest,
    ScoreSet,
    clamp,
    round_half_up,
)

__all__ = [
    "AUGMENTED_KEYS",
    "HEURISTIC_KEYS",
    "METRIC_KEYS",
    "AugmentedScores",
    "FounderRank",
    "HeuristicScores",
    "ScoreRequest",
    "ScoreSet",
    "clamp",
    "round_half_up",
]
