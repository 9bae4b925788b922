"""
LLM augmentation for Idea Oracle.

Asks an OpenAI-compatible chat completions endpoint (Cerebras by default) for
the two augmented metrics, the founder rank, and the goblin verdict.

The network call is an injectable capability: LLMAugmenter takes any callable
mapping chat messages to the reply text. ChatCompletionClient is the
production implementation; tests pass a plain function.
"""

import json
import math
import re
from typing import Any, Callable, Dict, List, Optional

import requests

from idea_oracle.config import (
    LLM_API_KEY,
    LLM_API_URL,
    LLM_MODEL,
    LLM_TEMPERATURE,
    REQUEST_TIMEOUT,
)
from idea_oracle.errors import ParseError, UpstreamError
from idea_oracle.models.score_set import AugmentedScores, FounderRank, HeuristicScores, clamp
from idea_oracle.observability.logging import get_logger
from idea_oracle.scoring.profile import ScoringProfile, get_profile
from idea_oracle.services.persona import load_persona, load_prompt_template, render_prompt

logger = get_logger(__name__)

Messages = List[Dict[str, str]]
CompletionFn = Callable[[Messages], str]

REQUIRED_FIELDS = ("yc_bait_score", "delusion_index", "founder_rank", "goblin_verdict")

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


# =============================================================================
# Transport
# =============================================================================

class ChatCompletionClient:
    """
    Minimal chat completions client using requests.

    Calling the client POSTs {model, messages, temperature} and returns
    choices[0].message.content. Any failure raises UpstreamError; there is
    no retry and no timeout beyond REQUEST_TIMEOUT.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        api_url: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout: Optional[int] = None,
    ):
        self.api_key = api_key if api_key is not None else LLM_API_KEY
        self.model = model or LLM_MODEL
        self.api_url = api_url or LLM_API_URL
        self.temperature = temperature if temperature is not None else LLM_TEMPERATURE
        self.timeout = timeout or REQUEST_TIMEOUT

    def is_available(self) -> bool:
        """Check if the service is configured (API key present)."""
        return bool(self.api_key)

    def build_payload(self, messages: Messages) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
        }

    def __call__(self, messages: Messages) -> str:
        if not self.is_available():
            raise UpstreamError("Text generation not configured. Add LLM_API_KEY to .env")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = requests.post(
                self.api_url,
                headers=headers,
                json=self.build_payload(messages),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"Request to {self.api_url} failed: {e}") from e

        if not response.ok:
            raise UpstreamError(
                f"API error ({response.status_code}): {response.text[:500]}",
                upstream_status=response.status_code,
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError(f"Malformed completion envelope: {e}") from e

        if not isinstance(content, str):
            raise UpstreamError("Completion content is not text")

        tokens = (data.get("usage") or {}).get("total_tokens", 0)
        logger.debug("Completion received", model=self.model, tokens_used=tokens)
        return content


# =============================================================================
# Reply Parsing
# =============================================================================

def strip_code_fences(content: str) -> str:
    """Remove ```json / ``` markers anywhere in the reply and trim whitespace."""
    return _FENCE_RE.sub("", content).strip()


def _as_number(data: dict, key: str) -> float:
    value = data[key]
    if isinstance(value, bool):
        raise ParseError(f"{key} must be a number, got {value!r}")
    # JSON integers may exceed float range; they are bounded before rounding
    if isinstance(value, int):
        return value
    number = None
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            pass
    if number is not None and math.isfinite(number):
        return number
    raise ParseError(f"{key} must be a number, got {value!r}")


def _bounded_score(data: dict, key: str, profile: ScoringProfile) -> int:
    low, high = profile.range_for(key)
    return clamp(min(max(_as_number(data, key), low), high), low, high)


def parse_augmentation(content: str, profile: Optional[ScoringProfile] = None) -> AugmentedScores:
    """
    Parse and validate the model's structured reply.

    Args:
        content: Raw reply text, optionally wrapped in code fences.
        profile: Supplies the declared ranges of the two numeric fields.

    Returns:
        AugmentedScores with numbers clamped into range.

    Raises:
        ParseError: Not JSON, not an object, a required field missing or of
            the wrong type, or an unrecognized founder_rank.
    """
    if profile is None:
        profile = get_profile()

    try:
        data = json.loads(strip_code_fences(content))
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Reply is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Reply must be a JSON object, got {type(data).__name__}")

    missing = [key for key in REQUIRED_FIELDS if key not in data]
    if missing:
        raise ParseError(f"Reply missing required fields: {', '.join(missing)}")

    yc_bait_score = _bounded_score(data, "yc_bait_score", profile)
    delusion_index = _bounded_score(data, "delusion_index", profile)

    rank_label = data["founder_rank"]
    if not isinstance(rank_label, str):
        raise ParseError(f"founder_rank must be a string, got {rank_label!r}")
    try:
        founder_rank = FounderRank(rank_label.strip())
    except ValueError as e:
        raise ParseError(
            f"Unrecognized founder_rank {rank_label!r}; expected one of "
            f"{', '.join(FounderRank.labels())}"
        ) from e

    verdict = data["goblin_verdict"]
    if not isinstance(verdict, str) or not verdict.strip():
        raise ParseError("goblin_verdict must be a non-empty string")

    return AugmentedScores(
        yc_bait_score=yc_bait_score,
        delusion_index=delusion_index,
        founder_rank=founder_rank,
        goblin_verdict=verdict.strip(),
    )


# =============================================================================
# Augmenter
# =============================================================================

class LLMAugmenter:
    """
    Builds the Oracle prompt, calls the completion capability once, and
    parses the verdict.

    Usage:
        augmenter = LLMAugmenter(ChatCompletionClient())
        augmented = augmenter.augment(idea, heuristics)
    """

    def __init__(
        self,
        complete: CompletionFn,
        profile: Optional[ScoringProfile] = None,
        persona: Optional[str] = None,
        prompt_template: Optional[str] = None,
    ):
        self.complete = complete
        self.profile = profile if profile is not None else get_profile()
        self.persona = persona if persona is not None else load_persona()
        self.prompt_template = prompt_template if prompt_template is not None else load_prompt_template()

    def build_messages(self, idea: str, heuristics: HeuristicScores) -> Messages:
        """System persona plus the user prompt with the heuristics as read-only context."""
        return [
            {"role": "system", "content": self.persona},
            {"role": "user", "content": render_prompt(self.prompt_template, idea, heuristics)},
        ]

    def augment(self, idea: str, heuristics: HeuristicScores) -> AugmentedScores:
        """
        Obtain yc_bait_score, delusion_index, founder_rank, goblin_verdict.

        Only these four fields are read from the reply, so the model cannot
        override the heuristic metrics.

        Raises:
            UpstreamError: The completion call failed.
            ParseError: The reply was not a valid verdict.
        """
        content = self.complete(self.build_messages(idea, heuristics))
        try:
            return parse_augmentation(content, self.profile)
        except ParseError as e:
            logger.warning("Unparseable augmentation reply", error=str(e), reply=content[:500])
            raise
