"""
Idea Oracle Pipeline - Core execution logic.

This module orchestrates one scoring request:

    Input check → Rate limit → Heuristics → Augmentation → Composite → Storage

Steps:
1. Reject missing, non-text, or blank ideas (InputError, no side effects)
2. Count the request against the caller identity (RateLimitError if denied)
3. Compute the five heuristic metrics once
4. Ask the text-generation service for the remaining metrics and verdict
5. Combine all seven metrics into the composite score
6. Store the ScoreSet when both idea_id and user_id are known (best effort,
   optionally on a background executor)
7. Return the ScoreSet

Design principles:
- Linear: no retries, no rollback, heuristics are never recomputed
- All or nothing: a failed augmentation yields no partial ScoreSet
- Persistence never affects the response
"""

import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from idea_oracle.config import LLM_API_KEY, PERSIST_WORKERS, SUPABASE_SERVICE_ROLE_KEY, SUPABASE_URL
from idea_oracle.errors import InputError, PersistenceError, RateLimitError
from idea_oracle.models.score_set import ScoreRequest, ScoreSet
from idea_oracle.observability.logging import get_logger
from idea_oracle.scoring.composite import combine
from idea_oracle.scoring.profile import ScoringProfile, get_profile
from idea_oracle.scoring.scorer import KeywordScorer
from idea_oracle.services.llm_augmenter import ChatCompletionClient, LLMAugmenter
from idea_oracle.services.rate_limiter import RateLimiter
from idea_oracle.storage.base import ScoreStorage
from idea_oracle.storage.memory import MockScoreStorage
from idea_oracle.storage.supabase import SupabaseScoreStorage

logger = get_logger(__name__)


@dataclass
class ScoreOutcome:
    """
    ScoreSet plus request bookkeeping, for callers that want more than scores.

    persisted reports a synchronous write. When the engine hands writes to
    an executor, persist_future resolves to the same flag instead.
    """
    score_set: ScoreSet
    remaining: int
    persisted: bool
    duration_ms: float = 0.0
    persist_future: Optional[Future] = None


class ScoringEngine:
    """
    Sequences the scoring components for one request at a time.

    Usage:
        engine = ScoringEngine(
            rate_limiter=RateLimiter(),
            keyword_scorer=KeywordScorer(),
            augmenter=LLMAugmenter(ChatCompletionClient()),
            storage=MockScoreStorage(),
        )
        score_set = engine.score_idea("Uber for dog walkers", identity="203.0.113.7")

    The rate limiter is the only cross-request state and is owned by
    whoever constructs the engine. With a persist_executor, score rows are
    written after the response is returned.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        keyword_scorer: KeywordScorer,
        augmenter: LLMAugmenter,
        storage: Optional[ScoreStorage] = None,
        profile: Optional[ScoringProfile] = None,
        persist_executor: Optional[Executor] = None,
    ):
        self.rate_limiter = rate_limiter
        self.keyword_scorer = keyword_scorer
        self.augmenter = augmenter
        self.storage = storage
        self.profile = profile if profile is not None else keyword_scorer.profile
        self.persist_executor = persist_executor

    def _persist(self, score_set: ScoreSet, idea_id: str, user_id: str) -> bool:
        """Write the score row; log and swallow any failure."""
        if self.storage is None:
            return False
        try:
            result = self.storage.insert_score(score_set.to_record(idea_id, user_id))
        except PersistenceError as e:
            logger.error("Failed to persist scores", backend=self.storage.name,
                         idea_id=idea_id, error=e.detail)
            return False
        except Exception:
            logger.exception("Unexpected storage failure", backend=self.storage.name,
                             idea_id=idea_id)
            return False
        logger.info("Scores persisted", backend=self.storage.name, idea_id=idea_id,
                    record_id=result.record_id)
        return True

    def run(self, request: ScoreRequest) -> ScoreOutcome:
        """
        Execute the full pipeline for one request.

        Returns:
            ScoreOutcome with the ScoreSet, remaining allowance, and whether
            the row was stored.

        Raises:
            InputError: Idea missing, not a string, or blank.
            RateLimitError: Identity exceeded its allowance.
            UpstreamError: Text-generation call failed.
            ParseError: Text-generation reply was unusable.
        """
        started = time.monotonic()
        idea = request.idea

        # Step 1: Validate input before touching any state
        if not isinstance(idea, str) or not idea.strip():
            raise InputError(f"Idea must be a non-empty string, got {type(idea).__name__}")

        # Step 2: Rate limit
        decision = self.rate_limiter.check(request.identity)
        if not decision.allowed:
            logger.warning("Rate limit exceeded", identity=request.identity)
            raise RateLimitError(
                f"Rate limit exceeded for {request.identity}",
                remaining=decision.remaining,
            )

        # Step 3: Heuristics (computed exactly once per request)
        heuristics = self.keyword_scorer.compute(idea)

        # Step 4: Augmentation; failures propagate and no ScoreSet is built
        augmented = self.augmenter.augment(idea, heuristics)

        # Step 5: Composite over the complete seven-metric set
        metrics = heuristics.to_dict()
        metrics["yc_bait_score"] = augmented.yc_bait_score
        metrics["delusion_index"] = augmented.delusion_index
        composite_score = combine(metrics)

        score_set = ScoreSet.assemble(
            heuristics,
            augmented,
            composite_score,
            delusion_floor=self.profile.range_for("delusion_index")[0],
        )

        # Step 6: Best-effort persistence (anonymous previews are skipped)
        persisted = False
        persist_future = None
        if request.persistable and self.storage is not None:
            if self.persist_executor is not None:
                persist_future = self.persist_executor.submit(
                    self._persist, score_set, request.idea_id, request.user_id
                )
            else:
                persisted = self._persist(score_set, request.idea_id, request.user_id)

        duration_ms = (time.monotonic() - started) * 1000
        logger.info(
            "Idea scored",
            composite_score=score_set.composite_score,
            founder_rank=score_set.founder_rank.value,
            remaining=decision.remaining,
            persisted=persisted,
            persist_queued=persist_future is not None,
            duration_ms=round(duration_ms, 1),
        )

        return ScoreOutcome(
            score_set=score_set,
            remaining=decision.remaining,
            persisted=persisted,
            duration_ms=duration_ms,
            persist_future=persist_future,
        )

    def score_idea(
        self,
        idea,
        identity: str = "unknown",
        idea_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> ScoreSet:
        """
        Score one idea and return its ScoreSet.

        Args:
            idea: Idea text (validated here; anything but non-blank text is rejected).
            identity: Caller key for rate limiting (e.g. client IP).
            idea_id: Idea identifier; stored only together with user_id.
            user_id: User identifier; stored only together with idea_id.
        """
        request = ScoreRequest(idea=idea, identity=identity, idea_id=idea_id, user_id=user_id)
        return self.run(request).score_set


# =============================================================================
# Convenience Functions
# =============================================================================

def get_storage() -> ScoreStorage:
    """Get the configured storage backend."""
    if SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY:
        return SupabaseScoreStorage()
    return MockScoreStorage()


def build_engine(
    rate_limiter: Optional[RateLimiter] = None,
    storage: Optional[ScoreStorage] = None,
    profile: Optional[ScoringProfile] = None,
    rng=None,
    background_persistence: bool = False,
) -> ScoringEngine:
    """
    Wire a ScoringEngine from configuration.

    Args:
        rate_limiter: Shared limiter. Defaults to a new one from config.
        storage: Storage backend. Defaults to get_storage().
        profile: Scoring profile. Defaults to get_profile().
        rng: random.Random for jitter (seed it for reproducible scores).
        background_persistence: Write score rows on a PERSIST_WORKERS thread
            pool instead of the request thread.
    """
    if profile is None:
        profile = get_profile()
    if not LLM_API_KEY:
        logger.warning("LLM_API_KEY not set; scoring requests will fail upstream")

    persist_executor = None
    if background_persistence:
        persist_executor = ThreadPoolExecutor(
            max_workers=PERSIST_WORKERS,
            thread_name_prefix="score-persist",
        )

    return ScoringEngine(
        rate_limiter=rate_limiter if rate_limiter is not None else RateLimiter(),
        keyword_scorer=KeywordScorer(profile=profile, rng=rng),
        augmenter=LLMAugmenter(ChatCompletionClient(), profile=profile),
        storage=storage if storage is not None else get_storage(),
        profile=profile,
        persist_executor=persist_executor,
    )
