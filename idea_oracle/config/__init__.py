"""
Configuration module.

Handles environment variables, API keys, and engine tuning knobs.
"""

from idea_oracle.config.config import (
    APP_ENV,
    DEBUG,
    LOG_LEVEL,
    LLM_API_KEY,
    LLM_API_URL,
    LLM_MODEL,
    LLM_TEMPERATURE,
    REQUEST_TIMEOUT,
    ORACLE_PERSONA_PATH,
    ORACLE_PROMPT_TEMPLATE_PATH,
    RATE_LIMIT_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
    RATE_LIMIT_MAX_IDENTITIES,
    MAX_IDEA_LENGTH,
    SCORING_PROFILE_PATH,
    SUPABASE_URL,
    SUPABASE_SERVICE_ROLE_KEY,
    SUPABASE_SCORES_TABLE,
    PERSIST_WORKERS,
    is_production,
    is_development,
    validate_config,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "LOG_LEVEL",
    "LLM_API_KEY",
    "LLM_API_URL",
    "LLM_MODEL",
    "LLM_TEMPERATURE",
    "REQUEST_TIMEOUT",
    "ORACLE_PERSONA_PATH",
    "ORACLE_PROMPT_TEMPLATE_PATH",
    "RATE_LIMIT_REQUESTS",
    "RATE_LIMIT_WINDOW_SECONDS",
    "RATE_LIMIT_MAX_IDENTITIES",
    "MAX_IDEA_LENGTH",
    "SCORING_PROFILE_PATH",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_SCORES_TABLE",
    "PERSIST_WORKERS",
    "is_production",
    "is_development",
    "validate_config",
    "print_config_summary",
]
