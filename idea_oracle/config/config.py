"""
Configuration module for Idea Oracle.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of idea_oracle/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode for verbose logging (only in development)
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Minimum level for log output (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()


# =============================================================================
# Text Generation Service
# =============================================================================

# API key for the OpenAI-compatible chat completions endpoint
# CEREBRAS_API_KEY is accepted for existing deployments
LLM_API_KEY: str = os.getenv("LLM_API_KEY", os.getenv("CEREBRAS_API_KEY", ""))

LLM_API_URL: str = os.getenv("LLM_API_URL", "https://api.cerebras.ai/v1/chat/completions")

LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-oss-120b")

# High temperature keeps verdicts varied between submissions
LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.95"))

# HTTP request timeout in seconds (the only timeout on the upstream call)
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))

# Optional files replacing the built-in persona and user prompt template
ORACLE_PERSONA_PATH: str = os.getenv("ORACLE_PERSONA_PATH", "")
ORACLE_PROMPT_TEMPLATE_PATH: str = os.getenv("ORACLE_PROMPT_TEMPLATE_PATH", "")


# =============================================================================
# Rate Limiting
# =============================================================================

# Scoring requests allowed per identity within one window
RATE_LIMIT_REQUESTS: int = int(os.getenv("RATE_LIMIT_REQUESTS", "5"))

# Window length in seconds (sliding, refreshed on each counted request)
RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "3600"))

# Maximum identities tracked at once; least recently used is forgotten first
RATE_LIMIT_MAX_IDENTITIES: int = int(os.getenv("RATE_LIMIT_MAX_IDENTITIES", "500"))


# =============================================================================
# Scoring
# =============================================================================

# Longest idea text accepted at the HTTP boundary
MAX_IDEA_LENGTH: int = int(os.getenv("MAX_IDEA_LENGTH", "500"))

# JSON file overriding the default scoring profile (floors, ramps, pivot branches)
SCORING_PROFILE_PATH: str = os.getenv("SCORING_PROFILE_PATH", "")


# =============================================================================
# Supabase Configuration
# =============================================================================

SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")

# Service role key: inserts bypass row level security
SUPABASE_SERVICE_ROLE_KEY: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")

SUPABASE_SCORES_TABLE: str = os.getenv("SUPABASE_SCORES_TABLE", "scores")

# Threads writing score rows after the web response is sent
PERSIST_WORKERS: int = int(os.getenv("PERSIST_WORKERS", "2"))


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate that required configuration is present for production.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if is_production():
        if not LLM_API_KEY:
            errors.append("LLM_API_KEY is required in production")
        if not SUPABASE_URL:
            errors.append("SUPABASE_URL is required in production")
        if not SUPABASE_SERVICE_ROLE_KEY:
            errors.append("SUPABASE_SERVICE_ROLE_KEY is required in production")

    if RATE_LIMIT_REQUESTS < 1:
        errors.append("RATE_LIMIT_REQUESTS must be at least 1")

    if RATE_LIMIT_WINDOW_SECONDS < 1:
        errors.append("RATE_LIMIT_WINDOW_SECONDS must be at least 1 second")

    if RATE_LIMIT_MAX_IDENTITIES < 1:
        errors.append("RATE_LIMIT_MAX_IDENTITIES must be at least 1")

    if MAX_IDEA_LENGTH < 1:
        errors.append("MAX_IDEA_LENGTH must be at least 1")

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if PERSIST_WORKERS < 1:
        errors.append("PERSIST_WORKERS must be at least 1")

    if not (0.0 <= LLM_TEMPERATURE <= 2.0):
        errors.append("LLM_TEMPERATURE must be between 0.0 and 2.0")

    if SCORING_PROFILE_PATH and not Path(SCORING_PROFILE_PATH).is_file():
        errors.append(f"SCORING_PROFILE_PATH does not exist: {SCORING_PROFILE_PATH}")

    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  LOG_LEVEL: {LOG_LEVEL}")
    print(f"  LLM_API_KEY: {'***' if LLM_API_KEY else '(not set)'}")
    print(f"  LLM_API_URL: {LLM_API_URL}")
    print(f"  LLM_MODEL: {LLM_MODEL}")
    print(f"  LLM_TEMPERATURE: {LLM_TEMPERATURE}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  RATE_LIMIT: {RATE_LIMIT_REQUESTS} per {RATE_LIMIT_WINDOW_SECONDS}s "
          f"({RATE_LIMIT_MAX_IDENTITIES} identities)")
    print(f"  MAX_IDEA_LENGTH: {MAX_IDEA_LENGTH}")
    print(f"  SCORING_PROFILE_PATH: {SCORING_PROFILE_PATH or '(built-in)'}")
    print(f"  SUPABASE_URL: {SUPABASE_URL or '(not set)'}")
    print(f"  SUPABASE_SERVICE_ROLE_KEY: {'***' if SUPABASE_SERVICE_ROLE_KEY else '(not set)'}")
    print(f"  SUPABASE_SCORES_TABLE: {SUPABASE_SCORES_TABLE}")
    print(f"  PERSIST_WORKERS: {PERSIST_WORKERS}")
