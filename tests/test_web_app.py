"""
Tests for the Flask web API.

The app is built around a fully faked engine; no network is touched.
"""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from idea_oracle.errors import UpstreamError
from idea_oracle.models.score_set import METRIC_KEYS
from idea_oracle.pipeline import ScoringEngine
from idea_oracle.scoring.profile import DEFAULT_PROFILE
from idea_oracle.services.llm_augmenter import LLMAugmenter
from tests.fakes import FakeCompletion
from tests.test_config import EXPECTED, MESSAGES
from web.app import create_app


@pytest.fixture
def app(engine):
    app = create_app(engine)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def failing_client(rate_limiter, keyword_scorer, completion):
    engine = ScoringEngine(
        rate_limiter=rate_limiter,
        keyword_scorer=keyword_scorer,
        augmenter=LLMAugmenter(completion, profile=DEFAULT_PROFILE),
        profile=DEFAULT_PROFILE,
    )
    app = create_app(engine)
    app.config["TESTING"] = True
    return app.test_client()


class TestScoreEndpoint:
    """Tests for POST /api/score."""

    def test_success(self, client):
        response = client.post("/api/score", json={"idea": "AI-powered AI agent for AI"})

        assert response.status_code == 200
        data = response.get_json()
        for key in METRIC_KEYS:
            assert 0 <= data[key] <= 100
        assert data["founder_rank"] in EXPECTED["founder_ranks"]
        assert data["goblin_verdict"]
        assert 0 <= data["composite_score"] <= 100
        assert response.headers["X-RateLimit-Remaining"] == "4"

    def test_persists_with_ids(self, client, mock_storage):
        response = client.post(
            "/api/score",
            json={"idea": "Dog walking app", "idea_id": "idea-1", "user_id": "user-1"},
        )

        assert response.status_code == 200
        assert mock_storage.records[0]["idea_id"] == "idea-1"

    def test_preview_not_persisted(self, client, mock_storage):
        client.post("/api/score", json={"idea": "Dog walking app"})
        assert mock_storage.count() == 0

    @pytest.mark.parametrize("body", [{"idea": ""}, {"idea": "   "}, {}, {"idea": 42}])
    def test_bad_idea(self, client, body):
        response = client.post("/api/score", json=body)

        assert response.status_code == 400
        assert response.get_json() == {"error": MESSAGES["input"]}

    def test_non_json_body(self, client):
        response = client.post("/api/score", data="idea=x", content_type="text/plain")
        assert response.status_code == 400

    def test_json_array_body(self, client):
        response = client.post("/api/score", json=["Dog walking app"])
        assert response.status_code == 400

    def test_idea_too_long(self, client):
        response = client.post("/api/score", json={"idea": "x" * (EXPECTED["config"]["default_max_idea_length"] + 1)})
        assert response.status_code == 400

    def test_empty_idea_does_not_spend_allowance(self, client):
        client.post("/api/score", json={"idea": ""})
        response = client.post("/api/score", json={"idea": "Dog walking app"})
        assert response.headers["X-RateLimit-Remaining"] == "4"

    def test_rate_limited_on_sixth_call(self, client):
        for _ in range(5):
            assert client.post("/api/score", json={"idea": "Dog walking app"}).status_code == 200

        response = client.post("/api/score", json={"idea": "Dog walking app"})

        assert response.status_code == 429
        assert response.get_json() == {"error": MESSAGES["rate_limit"]}
        assert response.headers["X-RateLimit-Remaining"] == "0"

    def test_forwarded_for_is_identity(self, client):
        for _ in range(5):
            client.post(
                "/api/score",
                json={"idea": "Dog walking app"},
                headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
            )

        blocked = client.post(
            "/api/score", json={"idea": "Dog walking app"}, headers={"X-Forwarded-For": "203.0.113.7"},
        )
        other = client.post(
            "/api/score", json={"idea": "Dog walking app"}, headers={"X-Forwarded-For": "198.51.100.2"},
        )

        assert blocked.status_code == 429
        assert other.status_code == 200

    def test_upstream_failure(self, rate_limiter, keyword_scorer):
        client = failing_client(rate_limiter, keyword_scorer, FakeCompletion(error=UpstreamError("503")))

        response = client.post("/api/score", json={"idea": "Dog walking app"})

        assert response.status_code == 502
        assert response.get_json() == {"error": MESSAGES["upstream"]}

    def test_unparseable_reply(self, rate_limiter, keyword_scorer):
        client = failing_client(rate_limiter, keyword_scorer, FakeCompletion(reply="not json"))

        response = client.post("/api/score", json={"idea": "Dog walking app"})

        assert response.status_code == 502
        assert response.get_json() == {"error": MESSAGES["upstream"]}

    def test_unexpected_error(self, rate_limiter, keyword_scorer):
        client = failing_client(rate_limiter, keyword_scorer, FakeCompletion(error=RuntimeError("boom")))

        response = client.post("/api/score", json={"idea": "Dog walking app"})

        assert response.status_code == 500
        assert response.get_json() == {"error": "Internal server error"}

    def test_get_not_allowed(self, client):
        assert client.get("/api/score").status_code == 405


class TestStatusEndpoint:
    """Tests for GET /api/status."""

    def test_status(self, client):
        response = client.get("/api/status")

        assert response.status_code == 200
        data = response.get_json()
        assert data["storage"] == "mock"
        assert data["rate_limit"]["max_requests"] == 5
        assert data["rate_limit"]["tracked_identities"] == 0
        assert data["max_idea_length"] == EXPECTED["config"]["default_max_idea_length"]
        assert "llm_available" in data

    def test_status_tracks_identities(self, client):
        client.post("/api/score", json={"idea": "Dog walking app"})
        assert client.get("/api/status").get_json()["rate_limit"]["tracked_identities"] == 1


class TestBackgroundPersistence:
    """Score rows written off the request thread."""

    def test_default_app_persists_in_background(self, engine):
        with patch("web.app.build_engine", return_value=engine) as mock_build:
            create_app()
        mock_build.assert_called_once_with(background_persistence=True)

    def test_row_written_after_response(self, rate_limiter, keyword_scorer, augmenter, mock_storage):
        executor = ThreadPoolExecutor(max_workers=1)
        engine = ScoringEngine(
            rate_limiter=rate_limiter,
            keyword_scorer=keyword_scorer,
            augmenter=augmenter,
            storage=mock_storage,
            profile=DEFAULT_PROFILE,
            persist_executor=executor,
        )
        client = create_app(engine).test_client()

        response = client.post(
            "/api/score",
            json={"idea": "Dog walking app", "idea_id": "idea-1", "user_id": "user-1"},
        )
        executor.shutdown(wait=True)

        assert response.status_code == 200
        assert mock_storage.records[0]["idea_id"] == "idea-1"
        assert mock_storage.records[0]["composite_score"] == response.get_json()["composite_score"]
