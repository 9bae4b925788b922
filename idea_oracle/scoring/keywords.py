"""
Keyword lists for the heuristic metrics.

This file is the single source of truth for what the Oracle considers hype.
Each list feeds exactly one metric:

    AI_KEYWORDS     -> ai_hype_beast
    BUZZWORDS       -> buzzword_density
    CRINGE_PHRASES  -> cringe_founder_energy

CUSTOMIZATION:

To add a term:
    1. Append it (lowercase) to the matching list
    2. Terms are matched as substrings, case-insensitively, and every
       occurrence counts ("ai" also matches inside "paid" - be specific!)
    3. Punctuation is matched literally; no regex syntax is interpreted
"""

# =============================================================================
# AI terminology
# =============================================================================

AI_KEYWORDS: list[str] = [
    "ai",
    "artificial intelligence",
    "machine learning",
    "ml",
    "llm",
    "gpt",
    "neural",
    "deep learning",
    "nlp",
    "computer vision",
    "generative",
    "agent",
    "autonomous",
    "copilot",
    "chatbot",
    "embedding",
    "vector",
    "diffusion",
    "transformer",
    "fine-tun",  # fine-tune, fine-tuning, fine-tuned
    "rag",
    "multimodal",
]


# =============================================================================
# Generic startup buzzwords
# =============================================================================

BUZZWORDS: list[str] = [
    # Crypto era
    "blockchain",
    "web3",
    "nft",
    "crypto",
    "metaverse",
    "defi",
    "dao",
    # Pitch deck verbs
    "disrupt",
    "disruption",
    "10x",
    "100x",
    "democratize",
    "revolutionize",
    "paradigm",
    "synergy",
    "ecosystem",
    "scalable",
    "scale",
    "platform",
    "network effect",
    "frictionless",
    "seamless",
    # "X for Y" pitches
    "uber for",
    "airbnb for",
    "tinder for",
    "future of",
    "next generation",
    "next-gen",
    "world-class",
    "best-in-class",
    "end-to-end",
    "full-stack",
    "holistic",
    "leverage",
    "ideate",
    "pivot",
    "mvp",
    "b2b",
    "b2c",
    "saas",
    "paas",
]


# =============================================================================
# Founder cringe
# =============================================================================

CRINGE_PHRASES: list[str] = [
    "change the world",
    "make the world a better place",
    "passionate",
    "on a mission",
    "we believe",
    "i believe",
    "journey",
    "space",
    "in the x space",
    "the x space",
    "move fast",
    "hustle",
    "grind",
    "thought leader",
    "serial entrepreneur",
    "visionary",
    "disrupting the",
    "pain point",
    "game changer",
    "game-changer",
    "low-hanging fruit",
    "move the needle",
    "circle back",
    "deep dive",
    "at the end of the day",
    "skin in the game",
    "fail fast",
    "growth hacking",
    "north star",
    "bleeding edge",
    "cutting edge",
    "first principles",
]


# Metric name -> keyword list
KEYWORD_LISTS: dict[str, list[str]] = {
    "ai_hype_beast": AI_KEYWORDS,
    "buzzword_density": BUZZWORDS,
    "cringe_founder_energy": CRINGE_PHRASES,
}


def get_keywords(metric: str) -> list[str]:
    """
    Get the keyword list feeding a metric.

    Args:
        metric: One of the keyword-driven metric names.

    Returns:
        List of lowercase terms.

    Raises:
        KeyError: If the metric is not keyword-driven.
    """
    return KEYWORD_LISTS[metric]
