"""
Heuristic scoring for Idea Oracle.

Computes the five locally derived metrics from the idea text:
1. ai_hype_beast, buzzword_density, cringe_founder_energy from keyword hits
2. market_viability from text length minus a hype penalty
3. pivot_to_ai_probability from a first-match branch policy

Keyword matching and the pre-jitter curve are pure functions. Jitter is
drawn from an injectable random.Random so tests can seed it.
"""

import math
import random
import re
from typing import Optional

from idea_oracle.models.score_set import HeuristicScores, clamp, round_half_up
from idea_oracle.scoring.keywords import get_keywords
from idea_oracle.scoring.profile import HitCurve, ScoringProfile, get_profile


# =============================================================================
# Keyword Matching
# =============================================================================

def count_matches(text: str, keywords: list[str]) -> int:
    """
    Count every occurrence of every keyword in the text.

    Matching rules:
    - Case-insensitive comparison
    - Substring matches allowed ("neural" matches "neuralink")
    - Non-overlapping occurrences of each term are all counted
    - Terms are matched literally (regex metacharacters are escaped)

    Args:
        text: The idea text.
        keywords: Terms to look for.

    Returns:
        Total number of hits across all terms.

    Example:
        >>> count_matches("AI for AI people", ["ai"])
        2
    """
    lower = text.lower()
    return sum(
        len(re.findall(re.escape(keyword.lower()), lower))
        for keyword in keywords
    )


def count_words(text: str) -> int:
    """Number of whitespace-separated words."""
    return len(text.split())


# =============================================================================
# Hit Curves
# =============================================================================

def base_score_from_hits(hits: int, curve: HitCurve) -> int:
    """
    Pre-jitter score for a hit count.

    Zero hits score the curve's floor. Otherwise the score grows with
    ln(hits * ramp), is capped at 100, and never drops below the floor,
    which keeps the curve non-decreasing in `hits`.

    Args:
        hits: Keyword hit count (>= 0).
        curve: Floor and shape parameters for the metric.

    Returns:
        Integer score in [floor, 100].
    """
    if hits <= 0:
        return curve.floor
    raw = curve.offset + curve.scale * math.log(hits * curve.ramp)
    return max(curve.floor, min(100, round_half_up(raw)))


def jitter_value(rng: random.Random, amplitude: int) -> int:
    """Symmetric integer jitter in [-amplitude, +amplitude]."""
    if amplitude <= 0:
        return 0
    return rng.randint(-amplitude, amplitude)


def score_from_hits(
    hits: int,
    curve: HitCurve,
    rng: random.Random,
    jitter: int = 7,
) -> int:
    """
    Final score for a hit count: base curve plus jitter, clamped to [0, 100].

    Args:
        hits: Keyword hit count.
        curve: Floor and shape parameters for the metric.
        rng: Random source for jitter.
        jitter: Jitter amplitude.
    """
    return clamp(base_score_from_hits(hits, curve) + jitter_value(rng, jitter))


# =============================================================================
# KeywordScorer
# =============================================================================

class KeywordScorer:
    """
    Stateless heuristic scorer.

    Usage:
        scorer = KeywordScorer()
        heuristics = scorer.compute("Uber for dog walkers, powered by AI")

    Pass `rng=random.Random(seed)` for reproducible output.
    """

    def __init__(
        self,
        profile: Optional[ScoringProfile] = None,
        rng: Optional[random.Random] = None,
    ):
        self.profile = profile if profile is not None else get_profile()
        self.rng = rng if rng is not None else random.Random()

    def _keyword_metric(self, text: str, metric: str) -> int:
        hits = count_matches(text, get_keywords(metric))
        return score_from_hits(hits, self.profile.curve(metric), self.rng, self.profile.jitter)

    def market_viability(self, text: str, ai_hype_beast: int, buzzword_density: int) -> int:
        """
        Longer, more concrete, less hyped text scores higher.

        base + min(words / words_per_point, max_bonus)
             - round((ai_hype_beast + buzzword_density) / penalty_divisor)
             + jitter
        """
        params = self.profile.market_viability
        specificity_bonus = min(count_words(text) / params.words_per_point, params.max_bonus)
        hype_penalty = round_half_up((ai_hype_beast + buzzword_density) / params.penalty_divisor)
        value = params.base + specificity_bonus - hype_penalty
        return clamp(value + jitter_value(self.rng, self.profile.jitter))

    def pivot_to_ai_probability(
        self,
        ai_hype_beast: int,
        buzzword_density: int,
        market_viability: int,
    ) -> int:
        """
        Pick a jittered band from the first pivot branch whose metric clears
        its threshold; fall back to the profile's default band.
        """
        values = {
            "ai_hype_beast": ai_hype_beast,
            "buzzword_density": buzzword_density,
            "market_viability": market_viability,
        }
        band = self.profile.pivot_fallback
        for branch in self.profile.pivot_branches:
            if values[branch.metric] >= branch.threshold:
                band = branch
                break
        return clamp(band.low + self.rng.randrange(band.spread))

    def compute(self, text: str) -> HeuristicScores:
        """
        Compute the five heuristic metrics.

        Args:
            text: The idea text (non-empty).

        Returns:
            HeuristicScores with every value clamped to [0, 100].
        """
        ai_hype_beast = self._keyword_metric(text, "ai_hype_beast")
        buzzword_density = self._keyword_metric(text, "buzzword_density")
        cringe_founder_energy = self._keyword_metric(text, "cringe_founder_energy")

        market_viability = self.market_viability(text, ai_hype_beast, buzzword_density)
        pivot = self.pivot_to_ai_probability(ai_hype_beast, buzzword_density, market_viability)

        return HeuristicScores(
            ai_hype_beast=ai_hype_beast,
            buzzword_density=buzzword_density,
            cringe_founder_energy=cringe_founder_energy,
            market_viability=market_viability,
            pivot_to_ai_probability=pivot,
        )
