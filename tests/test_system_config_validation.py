"""
Configuration Validation Tests

Verifies that the application fails early and clearly when required
environment variables are missing, and that defaults are applied correctly.

Test data and expected values are defined in tests/test_config.py.
Update that file to change test parameters without modifying this script.
"""

import importlib
import os
from unittest.mock import patch

import pytest

import idea_oracle.config.config as config_module
from tests.test_config import CONFIG, EXPECTED


PRODUCTION_ENV = {
    "APP_ENV": CONFIG["environments"]["production"],
    "LLM_API_KEY": "test-llm-key",
    "SUPABASE_URL": "https://project.supabase.co",
    "SUPABASE_SERVICE_ROLE_KEY": "service-key",
}


def reload_with(env: dict):
    """Reload the config module under a patched environment and return it."""
    with patch.dict(os.environ, env, clear=False):
        return importlib.reload(config_module)


@pytest.fixture(autouse=True)
def restore_config():
    """Reload config from the real environment after each test."""
    yield
    importlib.reload(config_module)


@pytest.mark.config_validation
class TestMissingRequiredConfig:
    """Tests for missing required configuration in production mode."""

    REQUIRED_VARS = EXPECTED["config"]["required_production_vars"]

    @pytest.mark.parametrize("missing", EXPECTED["config"]["required_production_vars"])
    def test_each_missing_var_reported(self, missing):
        """
        GIVEN: APP_ENV is 'production' and one required variable is empty
        WHEN: validate_config() is called
        THEN: Returns an error naming that variable
        """
        env = dict(PRODUCTION_ENV, **{missing: ""})
        if missing == "LLM_API_KEY":
            env["CEREBRAS_API_KEY"] = ""

        config = reload_with(env)
        errors = config.validate_config()

        assert any(missing in error for error in errors), \
            f"Expected clear error about {missing}, got: {errors}"

    def test_all_missing_reports_every_var(self):
        """
        GIVEN: APP_ENV is 'production' and every required variable is empty
        WHEN: validate_config() is called
        THEN: Returns one error per variable (not just the first)
        """
        env = {"APP_ENV": "production", "CEREBRAS_API_KEY": ""}
        env.update({var: "" for var in self.REQUIRED_VARS})

        errors = reload_with(env).validate_config()

        for var in self.REQUIRED_VARS:
            assert any(var in error for error in errors), f"Missing error for {var}: {errors}"

    def test_complete_production_config_is_valid(self):
        """
        GIVEN: APP_ENV is 'production' and all required variables are set
        WHEN: validate_config() is called
        THEN: Returns no errors
        """
        assert reload_with(PRODUCTION_ENV).validate_config() == []

    def test_development_does_not_require_secrets(self):
        """
        GIVEN: APP_ENV is 'development' with no secrets
        WHEN: validate_config() is called
        THEN: Secrets are not reported
        """
        env = {"APP_ENV": "development", "CEREBRAS_API_KEY": ""}
        env.update({var: "" for var in self.REQUIRED_VARS})

        errors = reload_with(env).validate_config()

        assert not any(var in error for var in self.REQUIRED_VARS for error in errors)


@pytest.mark.config_validation
class TestConfigDefaults:
    """Tests for default values."""

    def test_rate_limit_defaults(self):
        with patch.dict(os.environ, {}, clear=False):
            for key in ("RATE_LIMIT_REQUESTS", "RATE_LIMIT_WINDOW_SECONDS", "RATE_LIMIT_MAX_IDENTITIES"):
                os.environ.pop(key, None)
            config = importlib.reload(config_module)

            assert config.RATE_LIMIT_REQUESTS == EXPECTED["config"]["default_rate_limit_requests"]
            assert config.RATE_LIMIT_WINDOW_SECONDS == EXPECTED["config"]["default_rate_limit_window_seconds"]
            assert config.RATE_LIMIT_MAX_IDENTITIES == EXPECTED["config"]["default_rate_limit_max_identities"]

    def test_llm_defaults(self):
        with patch.dict(os.environ, {}, clear=False):
            for key in ("LLM_API_URL", "LLM_MODEL", "LLM_TEMPERATURE"):
                os.environ.pop(key, None)
            config = importlib.reload(config_module)

            assert config.LLM_API_URL == "https://api.cerebras.ai/v1/chat/completions"
            assert config.LLM_MODEL == "gpt-oss-120b"
            assert config.LLM_TEMPERATURE == 0.95

    def test_cerebras_key_fallback(self):
        """CEREBRAS_API_KEY is used when LLM_API_KEY is absent."""
        with patch.dict(os.environ, {"CEREBRAS_API_KEY": "legacy-key"}, clear=False):
            os.environ.pop("LLM_API_KEY", None)
            config = importlib.reload(config_module)

            assert config.LLM_API_KEY == "legacy-key"

    def test_scores_table_default(self):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("SUPABASE_SCORES_TABLE", None)
            assert importlib.reload(config_module).SUPABASE_SCORES_TABLE == "scores"


@pytest.mark.config_validation
class TestInvalidValues:
    """Tests for out-of-range tuning values."""

    @pytest.mark.parametrize("var, value", [
        ("RATE_LIMIT_REQUESTS", "0"),
        ("RATE_LIMIT_WINDOW_SECONDS", "0"),
        ("RATE_LIMIT_MAX_IDENTITIES", "0"),
        ("MAX_IDEA_LENGTH", "0"),
        ("REQUEST_TIMEOUT", "0"),
        ("PERSIST_WORKERS", "0"),
        ("LLM_TEMPERATURE", "3.5"),
    ])
    def test_out_of_range_reported(self, var, value):
        errors = reload_with({"APP_ENV": "development", var: value}).validate_config()
        assert any(var in error for error in errors), f"Expected error about {var}, got: {errors}"

    def test_missing_profile_file_reported(self, tmp_path):
        missing = tmp_path / "nope.json"
        errors = reload_with({"SCORING_PROFILE_PATH": str(missing)}).validate_config()
        assert any("SCORING_PROFILE_PATH" in error for error in errors)

    def test_summary_masks_secrets(self, capsys):
        config = reload_with(PRODUCTION_ENV)
        config.print_config_summary()

        output = capsys.readouterr().out
        assert "test-llm-key" not in output
        assert "service-key" not in output
        assert "LLM_API_KEY: ***" in output
