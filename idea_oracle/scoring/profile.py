"""
Scoring profile: every tunable constant of the heuristic and augmented metrics.

The engine never hardcodes floors, ramps, or pivot thresholds. They live in a
ScoringProfile, which defaults to DEFAULT_PROFILE and can be overridden with a
JSON file (SCORING_PROFILE_PATH). A profile file only needs the keys it wants
to change:

    {
        "jitter": 5,
        "curves": {"ai_hype_beast": {"floor": 8, "offset": 20}},
        "market_viability": {"base": 20},
        "pivot": {
            "branches": [
                {"metric": "ai_hype_beast", "threshold": 60, "low": 10, "spread": 20}
            ],
            "fallback": {"low": 55, "spread": 30}
        },
        "ranges": {"delusion_index": [60, 100]}
    }

Curve shape for a keyword metric with h hits:

    h == 0  ->  floor
    h >= 1  ->  max(floor, min(100, round(offset + scale * ln(h * ramp))))

followed by +/- jitter and a clamp to [0, 100].
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

from idea_oracle.config import SCORING_PROFILE_PATH


KEYWORD_METRICS: Tuple[str, ...] = (
    "ai_hype_beast",
    "buzzword_density",
    "cringe_founder_energy",
)

# Metrics a pivot branch may test, in the order the default policy checks them
PIVOT_METRICS: Tuple[str, ...] = (
    "ai_hype_beast",
    "buzzword_density",
    "market_viability",
)


@dataclass(frozen=True)
class HitCurve:
    """
    Logarithmic hit-count curve for one keyword metric.

    Attributes:
        floor: Score for zero hits, and the lowest score any hit count yields.
        offset: Score at h * ramp == 1.
        scale: Points gained per unit of ln(h * ramp).
        ramp: Sensitivity; higher ramps reach the ceiling with fewer hits.
    """
    floor: int
    offset: float
    scale: float
    ramp: float


@dataclass(frozen=True)
class MarketViabilityParams:
    """Length bonus and hype penalty for market_viability."""
    base: float
    words_per_point: float
    max_bonus: float
    penalty_divisor: float


@dataclass(frozen=True)
class PivotBranch:
    """If `metric` >= `threshold`, pick from [low, low + spread)."""
    metric: str
    threshold: int
    low: int
    spread: int


@dataclass(frozen=True)
class PivotBand:
    """Fallback band used when no branch matches."""
    low: int
    spread: int


@dataclass(frozen=True)
class ScoringProfile:
    """All constants consumed by KeywordScorer and LLMAugmenter."""
    jitter: int
    curves: dict
    market_viability: MarketViabilityParams
    pivot_branches: Tuple[PivotBranch, ...]
    pivot_fallback: PivotBand
    ranges: dict = field(default_factory=dict)

    def curve(self, metric: str) -> HitCurve:
        return self.curves[metric]

    def range_for(self, metric: str) -> Tuple[int, int]:
        """Declared (low, high) range of a metric; [0, 100] unless overridden."""
        return tuple(self.ranges.get(metric, (0, 100)))

    def validate(self) -> None:
        """
        Check that the profile can only ever produce in-range scores.

        Raises:
            ValueError: With every problem found, joined by "; ".
        """
        errors = []

        if self.jitter < 0:
            errors.append("jitter cannot be negative")

        for metric in KEYWORD_METRICS:
            curve = self.curves.get(metric)
            if curve is None:
                errors.append(f"missing curve for {metric}")
                continue
            if not (0 <= curve.floor <= 100):
                errors.append(f"{metric}.floor must be between 0 and 100")
            if curve.scale < 0:
                errors.append(f"{metric}.scale cannot be negative")
            if curve.ramp <= 0:
                errors.append(f"{metric}.ramp must be positive")

        mv = self.market_viability
        if mv.words_per_point <= 0:
            errors.append("market_viability.words_per_point must be positive")
        if mv.penalty_divisor <= 0:
            errors.append("market_viability.penalty_divisor must be positive")
        if mv.max_bonus < 0:
            errors.append("market_viability.max_bonus cannot be negative")

        for i, branch in enumerate(self.pivot_branches):
            if branch.metric not in PIVOT_METRICS:
                errors.append(
                    f"pivot branch {i}: metric must be one of {', '.join(PIVOT_METRICS)}"
                )
            if branch.spread < 1:
                errors.append(f"pivot branch {i}: spread must be at least 1")
        if self.pivot_fallback.spread < 1:
            errors.append("pivot fallback: spread must be at least 1")

        for metric, bounds in self.ranges.items():
            low, high = bounds
            if not (0 <= low <= high <= 100):
                errors.append(f"range for {metric} must satisfy 0 <= low <= high <= 100")

        if errors:
            raise ValueError(f"Invalid scoring profile: {'; '.join(errors)}")


# =============================================================================
# Default Profile
# =============================================================================

# Numbers currently deployed. Zero-hit floors sit around 60 and two or
# three hits already reach the 90s.
DEFAULT_PROFILE = ScoringProfile(
    jitter=7,
    curves={
        "ai_hype_beast": HitCurve(floor=60, offset=65, scale=22, ramp=2.5),
        "buzzword_density": HitCurve(floor=60, offset=65, scale=22, ramp=2.0),
        "cringe_founder_energy": HitCurve(floor=60, offset=65, scale=22, ramp=3.0),
    },
    market_viability=MarketViabilityParams(
        base=55,
        words_per_point=1.2,
        max_bonus=30,
        penalty_divisor=14,
    ),
    pivot_branches=(
        # Already AI-native: nowhere left to pivot
        PivotBranch(metric="ai_hype_beast", threshold=60, low=55, spread=20),
        # Buzzword-heavy but not AI yet: extremely likely to pivot
        PivotBranch(metric="buzzword_density", threshold=50, low=82, spread=15),
        # Viable idea that gets "AI-enhanced" in the Series A deck
        PivotBranch(metric="market_viability", threshold=55, low=70, spread=20),
    ),
    # Bad idea that pivots to survive
    pivot_fallback=PivotBand(low=65, spread=25),
    ranges={
        "yc_bait_score": (0, 100),
        "delusion_index": (55, 100),
    },
)


# =============================================================================
# Loading
# =============================================================================

def profile_from_dict(data: dict, base: ScoringProfile = DEFAULT_PROFILE) -> ScoringProfile:
    """
    Overlay a (partial) profile dict onto a base profile.

    Curves and market_viability merge field by field. Pivot branches, when
    given, replace the base branches entirely since their order is the policy.

    Args:
        data: Parsed JSON profile.
        base: Profile supplying every value not in `data`.

    Returns:
        A validated ScoringProfile.

    Raises:
        ValueError: If the result is invalid or a key is unknown.
    """
    unknown = set(data) - {"jitter", "curves", "market_viability", "pivot", "ranges"}
    if unknown:
        raise ValueError(f"Unknown scoring profile keys: {', '.join(sorted(unknown))}")

    try:
        curves = dict(base.curves)
        for metric, overrides in data.get("curves", {}).items():
            if metric not in KEYWORD_METRICS:
                raise ValueError(f"Unknown curve metric: {metric}")
            curves[metric] = replace(curves[metric], **overrides)

        market = replace(base.market_viability, **data.get("market_viability", {}))

        pivot = data.get("pivot", {})
        branches = base.pivot_branches
        if "branches" in pivot:
            branches = tuple(PivotBranch(**b) for b in pivot["branches"])
        fallback = base.pivot_fallback
        if "fallback" in pivot:
            fallback = replace(fallback, **pivot["fallback"])

        ranges = dict(base.ranges)
        for metric, bounds in data.get("ranges", {}).items():
            low, high = bounds
            ranges[metric] = (int(low), int(high))
    except TypeError as e:
        # replace()/PivotBranch() reject unknown field names with TypeError
        raise ValueError(f"Invalid scoring profile: {e}") from e

    profile = ScoringProfile(
        jitter=int(data.get("jitter", base.jitter)),
        curves=curves,
        market_viability=market,
        pivot_branches=branches,
        pivot_fallback=fallback,
        ranges=ranges,
    )
    profile.validate()
    return profile


def load_profile(path) -> ScoringProfile:
    """
    Load a scoring profile from a JSON file.

    Args:
        path: Path to the JSON profile.

    Returns:
        DEFAULT_PROFILE with the file's values applied.
    """
    with open(Path(path), encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Scoring profile must be a JSON object: {path}")
    return profile_from_dict(data)


_profile: Optional[ScoringProfile] = None


def get_profile() -> ScoringProfile:
    """Get the configured profile (SCORING_PROFILE_PATH or the default)."""
    global _profile
    if _profile is None:
        _profile = load_profile(SCORING_PROFILE_PATH) if SCORING_PROFILE_PATH else DEFAULT_PROFILE
    return _profile
