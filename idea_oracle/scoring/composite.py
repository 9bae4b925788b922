"""
Composite score: the single-number summary of all seven metrics.
"""

from typing import Mapping

from idea_oracle.models.score_set import METRIC_KEYS, clamp


def combine(scores: Mapping[str, int]) -> int:
    """
    Unweighted mean of the seven metrics, rounded half up, clamped to [0, 100].

    Args:
        scores: Mapping holding every key in METRIC_KEYS. Extra keys are ignored.

    Returns:
        Composite score.

    Raises:
        ValueError: If any metric is missing. Callers must only combine a
            complete set; a partial set is a programming error.
    """
    missing = [key for key in METRIC_KEYS if key not in scores]
    if missing:
        raise ValueError(f"Cannot combine partial score set, missing: {', '.join(missing)}")

    total = sum(scores[key] for key in METRIC_KEYS)
    return clamp(total / len(METRIC_KEYS))
