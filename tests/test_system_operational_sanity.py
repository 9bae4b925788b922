"""
Operational Sanity Tests

End-to-end runs through the HTTP layer with the chat completions endpoint
and Supabase mocked at the library boundary.
"""

import random
from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from idea_oracle.pipeline import build_engine
from idea_oracle.services.rate_limiter import RateLimiter
from idea_oracle.storage.supabase import SupabaseScoreStorage
from tests.fakes import FakeClock
from tests.test_config import CONFIG, EXPECTED, MESSAGES, augmentation_reply, completion_envelope
from web.app import create_app


def ok_response(content):
    response = Mock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = completion_envelope(content)
    return response


@pytest.fixture
def supabase_client():
    client = MagicMock()
    client.table.return_value.insert.return_value.execute.return_value = Mock(data=[{"id": "row-1"}])
    return client


@pytest.fixture
def client(supabase_client):
    """App wired through build_engine with real client classes."""
    storage = SupabaseScoreStorage(url="https://x.supabase.co", key="k", table_name="scores",
                                   client=supabase_client)
    limiter = RateLimiter(clock=FakeClock(), **CONFIG["rate_limit"])
    with patch("idea_oracle.services.llm_augmenter.LLM_API_KEY", "test-key"):
        engine = build_engine(rate_limiter=limiter, storage=storage, rng=random.Random(CONFIG["seed"]))
    app = create_app(engine)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.mark.operational_sanity
class TestEndToEnd:
    """Full request flow with library boundaries mocked."""

    @patch("idea_oracle.services.llm_augmenter.requests.post")
    def test_scored_and_stored(self, mock_post, client, supabase_client):
        """
        GIVEN: A scoring request with idea_id and user_id
        WHEN: The model replies with fenced JSON
        THEN: The caller gets the ScoreSet and one row is inserted
        """
        mock_post.return_value = ok_response(f"```json\n{augmentation_reply()}\n```")

        response = client.post(
            "/api/score",
            json={"idea": "AI-powered AI agent for AI", "idea_id": "idea-1", "user_id": "user-1"},
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["ai_hype_beast"] >= 93
        assert data["delusion_index"] >= EXPECTED["delusion_floor"]
        mock_post.assert_called_once()

        inserted = supabase_client.table.return_value.insert.call_args.args[0][0]
        assert inserted["idea_id"] == "idea-1"
        assert inserted["composite_score"] == data["composite_score"]

    @patch("idea_oracle.services.llm_augmenter.requests.post")
    def test_storage_outage_invisible_to_caller(self, mock_post, client, supabase_client):
        mock_post.return_value = ok_response(augmentation_reply())
        supabase_client.table.return_value.insert.return_value.execute.side_effect = Exception("503")

        response = client.post(
            "/api/score",
            json={"idea": "Dog walking app", "idea_id": "idea-1", "user_id": "user-1"},
        )

        assert response.status_code == 200

    @patch("idea_oracle.services.llm_augmenter.requests.post")
    def test_llm_outage(self, mock_post, client, supabase_client):
        mock_post.side_effect = requests.ConnectionError("no route to host")

        response = client.post(
            "/api/score",
            json={"idea": "Dog walking app", "idea_id": "idea-1", "user_id": "user-1"},
        )

        assert response.status_code == 502
        assert response.get_json() == {"error": MESSAGES["upstream"]}
        supabase_client.table.assert_not_called()

    @patch("idea_oracle.services.llm_augmenter.requests.post")
    def test_rate_limit_stops_llm_calls(self, mock_post, client):
        mock_post.return_value = ok_response(augmentation_reply())

        statuses = [client.post("/api/score", json={"idea": "Dog walking app"}).status_code
                    for _ in range(7)]

        assert statuses == [200] * 5 + [429] * 2
        assert mock_post.call_count == 5
