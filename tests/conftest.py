"""
Pytest Configuration and Fixtures

This module provides shared fixtures for all tests:
- Seeded random sources and a controllable clock
- Fake completion capabilities (no network)
- Pre-wired scoring engines
"""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tests.fakes import FakeClock, FakeCompletion
from tests.test_config import CONFIG, TEST_DATA

from idea_oracle.pipeline import ScoringEngine
from idea_oracle.scoring.profile import DEFAULT_PROFILE
from idea_oracle.scoring.scorer import KeywordScorer
from idea_oracle.services.llm_augmenter import LLMAugmenter
from idea_oracle.services.rate_limiter import RateLimiter
from idea_oracle.storage.memory import MockScoreStorage


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(CONFIG["seed"])


@pytest.fixture
def clock():
    """Controllable clock for rate limiter tests."""
    return FakeClock()


@pytest.fixture
def rate_limiter(clock):
    """RateLimiter with test settings and a fake clock."""
    return RateLimiter(clock=clock, **CONFIG["rate_limit"])


@pytest.fixture
def keyword_scorer(rng):
    """KeywordScorer on the default profile with seeded jitter."""
    return KeywordScorer(profile=DEFAULT_PROFILE, rng=rng)


@pytest.fixture
def fake_completion():
    """Completion returning the standard augmentation reply."""
    return FakeCompletion()


@pytest.fixture
def augmenter(fake_completion):
    """LLMAugmenter backed by the fake completion."""
    return LLMAugmenter(fake_completion, profile=DEFAULT_PROFILE)


@pytest.fixture
def mock_storage():
    """Empty in-memory storage."""
    return MockScoreStorage()


@pytest.fixture
def engine(rate_limiter, keyword_scorer, augmenter, mock_storage):
    """Fully wired engine with no network dependencies."""
    return ScoringEngine(
        rate_limiter=rate_limiter,
        keyword_scorer=keyword_scorer,
        augmenter=augmenter,
        storage=mock_storage,
        profile=DEFAULT_PROFILE,
    )


@pytest.fixture
def sample_ideas():
    """Named sample ideas."""
    return dict(TEST_DATA["ideas"])


# =============================================================================
# MARKERS FOR TEST CATEGORIES
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "config_validation: Configuration validation tests"
    )
    config.addinivalue_line(
        "markers", "cli_behavior: CLI interface tests"
    )
    config.addinivalue_line(
        "markers", "operational_sanity: End-to-end behavior tests"
    )
