"""
Idea Oracle - Web API

Flask boundary around the scoring engine.

Run with: python -m web.app
"""

import sys
import uuid
from pathlib import Path
from typing import Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, jsonify, request

from idea_oracle.config import (
    DEBUG,
    LLM_API_KEY,
    LLM_MODEL,
    MAX_IDEA_LENGTH,
)
from idea_oracle.errors import InputError, OracleError, RateLimitError
from idea_oracle.observability.logging import bind_context, clear_context, get_logger, setup_logging
from idea_oracle.pipeline import ScoringEngine, build_engine
from idea_oracle.models.score_set import ScoreRequest

logger = get_logger(__name__)


def get_client_identity() -> str:
    """
    Caller identity for rate limiting.

    First hop of X-Forwarded-For when behind a proxy, else the socket peer.
    """
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.remote_addr or "unknown"


def create_app(engine: Optional[ScoringEngine] = None) -> Flask:
    """
    Create the Flask app around a scoring engine.

    Args:
        engine: Engine to serve. Defaults to build_engine(), which owns a
            fresh RateLimiter for the lifetime of this app and writes score
            rows in the background.
    """
    app = Flask(__name__)
    app.config["ENGINE"] = engine if engine is not None else build_engine(background_persistence=True)

    @app.errorhandler(OracleError)
    def handle_oracle_error(error: OracleError):
        """Log the operator detail, show the caller only the in-theme message."""
        logger.warning(
            "Scoring request rejected",
            error_type=type(error).__name__,
            status_code=error.status_code,
            detail=error.detail,
        )
        response = jsonify({"error": error.public_message})
        if isinstance(error, RateLimitError):
            response.headers["X-RateLimit-Remaining"] = str(error.remaining)
        return response, error.status_code

    @app.route("/api/score", methods=["POST"])
    def api_score():
        """Score one idea: {idea, idea_id?, user_id?} -> ScoreSet."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise InputError("Request body must be a JSON object")

        idea = data.get("idea")
        if isinstance(idea, str) and len(idea) > MAX_IDEA_LENGTH:
            raise InputError(f"Idea is {len(idea)} characters, limit is {MAX_IDEA_LENGTH}")

        identity = get_client_identity()
        bind_context(request_id=str(uuid.uuid4()), identity=identity)
        try:
            outcome = app.config["ENGINE"].run(ScoreRequest(
                idea=idea,
                identity=identity,
                idea_id=data.get("idea_id"),
                user_id=data.get("user_id"),
            ))
        except OracleError:
            raise
        except Exception:
            logger.exception("Unhandled scoring failure")
            return jsonify({"error": "Internal server error"}), 500
        finally:
            clear_context()

        response = jsonify(outcome.score_set.to_dict())
        response.headers["X-RateLimit-Remaining"] = str(outcome.remaining)
        return response

    @app.route("/api/status")
    def api_status():
        """Configuration visible to operators (no secrets)."""
        engine = app.config["ENGINE"]
        limiter = engine.rate_limiter
        return jsonify({
            "llm_available": bool(LLM_API_KEY),
            "model": LLM_MODEL if LLM_API_KEY else None,
            "storage": engine.storage.name if engine.storage else None,
            "rate_limit": {
                "max_requests": limiter.max_requests,
                "window_seconds": limiter.window_seconds,
                "max_identities": limiter.max_identities,
                "tracked_identities": len(limiter),
            },
            "max_idea_length": MAX_IDEA_LENGTH,
        })

    return app


if __name__ == "__main__":
    setup_logging()
    create_app().run(debug=DEBUG, port=5000, threaded=True)
