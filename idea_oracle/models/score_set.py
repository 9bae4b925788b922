"""
Core data model for Idea Oracle.

Defines the score containers that flow through the engine:

    KeywordScorer -> HeuristicScores
    LLMAugmenter  -> AugmentedScores
    Orchestrator  -> ScoreSet (heuristics + augmentation + composite)

All of them are frozen: a ScoreSet is produced once per accepted request
and handed to the caller and the storage backend unchanged.
"""

import math
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Tuple


HEURISTIC_KEYS: Tuple[str, ...] = (
    "ai_hype_beast",
    "buzzword_density",
    "cringe_founder_energy",
    "market_viability",
    "pivot_to_ai_probability",
)

AUGMENTED_KEYS: Tuple[str, ...] = (
    "yc_bait_score",
    "delusion_index",
)

# Closed set of the seven metric keys, in display order
METRIC_KEYS: Tuple[str, ...] = HEURISTIC_KEYS + AUGMENTED_KEYS


class FounderRank(str, Enum):
    """The four founder archetypes the Oracle hands out."""

    CHAD = "Chad"
    BETA = "Beta"
    GAMMA = "Gamma"
    FOUNDER_EXTRAORDINAIRE = "Founder Extraordinaire"

    @classmethod
    def labels(cls) -> list[str]:
        return [rank.value for rank in cls]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from minus infinity."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: int = 0, high: int = 100) -> int:
    """Round half up to an integer and clamp into [low, high]."""
    return min(max(round_half_up(value), low), high)


@dataclass(frozen=True)
class HeuristicScores:
    """The five metrics computed locally from the idea text."""

    ai_hype_beast: int
    buzzword_density: int
    cringe_founder_energy: int
    market_viability: int
    pivot_to_ai_probability: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AugmentedScores:
    """Metrics, rank, and verdict obtained from the text-generation service."""

    yc_bait_score: int
    delusion_index: int
    founder_rank: FounderRank
    goblin_verdict: str


@dataclass(frozen=True)
class ScoreSet:
    """
    Complete scoring result for one idea.

    Attributes:
        ai_hype_beast .. delusion_index: The seven metrics (integers).
        composite_score: Rounded mean of the seven metrics (0-100).
        founder_rank: One of the FounderRank labels.
        goblin_verdict: Two or three generated sentences.
        delusion_floor: Lowest legal delusion_index for this result.
    """

    ai_hype_beast: int
    buzzword_density: int
    cringe_founder_energy: int
    market_viability: int
    pivot_to_ai_probability: int
    yc_bait_score: int
    delusion_index: int
    composite_score: int
    founder_rank: FounderRank
    goblin_verdict: str
    delusion_floor: int = 55

    def __post_init__(self) -> None:
        """Validate fields after initialization."""
        self.validate()

    def validate(self) -> None:
        """
        Validate metric ranges, rank, and verdict.

        Raises:
            ValueError: If validation fails.
        """
        errors = []

        for key in METRIC_KEYS + ("composite_score",):
            value = getattr(self, key)
            low = self.delusion_floor if key == "delusion_index" else 0
            if not isinstance(value, int) or isinstance(value, bool):
                errors.append(f"{key} must be an integer, got {value!r}")
            elif not (low <= value <= 100):
                errors.append(f"{key} must be between {low} and 100, got {value}")

        if not isinstance(self.founder_rank, FounderRank):
            errors.append(f"founder_rank must be a FounderRank, got {self.founder_rank!r}")

        if not isinstance(self.goblin_verdict, str) or not self.goblin_verdict.strip():
            errors.append("goblin_verdict is required and cannot be empty")

        if errors:
            raise ValueError(f"ScoreSet validation failed: {'; '.join(errors)}")

    @classmethod
    def assemble(
        cls,
        heuristics: HeuristicScores,
        augmented: AugmentedScores,
        composite_score: int,
        delusion_floor: int = 55,
    ) -> "ScoreSet":
        """Build a ScoreSet from the two halves of the pipeline."""
        return cls(
            **heuristics.to_dict(),
            yc_bait_score=augmented.yc_bait_score,
            delusion_index=augmented.delusion_index,
            composite_score=composite_score,
            founder_rank=augmented.founder_rank,
            goblin_verdict=augmented.goblin_verdict,
            delusion_floor=delusion_floor,
        )

    def metrics(self) -> dict[str, int]:
        """The seven metrics keyed by metric name."""
        return {key: getattr(self, key) for key in METRIC_KEYS}

    def to_dict(self) -> dict:
        """
        Caller-facing JSON body.

        Returns:
            The seven metrics, founder_rank, goblin_verdict, composite_score.
        """
        data = self.metrics()
        data["founder_rank"] = self.founder_rank.value
        data["goblin_verdict"] = self.goblin_verdict
        data["composite_score"] = self.composite_score
        return data

    def to_record(self, idea_id: str, user_id: str) -> dict:
        """
        Row written to the scores table.

        Args:
            idea_id: Identifier of the submitted idea.
            user_id: Identifier of the submitting user.
        """
        record = {"idea_id": idea_id, "user_id": user_id}
        record.update(self.to_dict())
        return record

    def __str__(self) -> str:
        return f"{self.founder_rank.value} (composite: {self.composite_score})"


@dataclass(frozen=True)
class ScoreRequest:
    """Inbound scoring request as received from the HTTP boundary."""

    idea: object
    identity: str = "unknown"
    idea_id: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def persistable(self) -> bool:
        """Both ids present; anonymous previews are never stored."""
        return bool(self.idea_id) and bool(self.user_id)
