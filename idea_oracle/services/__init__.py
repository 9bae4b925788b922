"""
Services module.

Rate limiting and the text-generation integration.
"""

from idea_oracle.services.rate_limiter import RateDecision, RateLimiter, RateWindowEntry
from idea_oracle.services.llm_augmenter import (
    ChatCompletionClient,
    LLMAugmenter,
    parse_augmentation,
    strip_code_fences,
)

__all__ = [
    "RateDecision",
    "RateLimiter",
    "RateWindowEntry",
    "ChatCompletionClient",
    "LLMAugmenter",
    "parse_augmentation",
    "strip_code_fences",
]
