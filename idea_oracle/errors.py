"""
Error taxonomy for the scoring engine.

Every error carries two messages:
- the exception text, with operator detail, which is logged
- public_message, a short in-theme line that is safe to show callers

The HTTP layer maps status_code straight onto the response.
"""


class OracleError(Exception):
    """Base class for all engine errors."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class InputError(OracleError):
    """Idea text is missing, empty, or not a string."""

    status_code = 400
    public_message = "The Oracle cannot judge an empty pitch."


class RateLimitError(OracleError):
    """Caller identity has used up its allowance for the current window."""

    status_code = 429
    public_message = "The Oracle needs rest. Try again later."

    def __init__(self, detail: str = "", remaining: int = 0):
        super().__init__(detail)
        self.remaining = remaining


class UpstreamError(OracleError):
    """Text-generation service unreachable or returned a non-success status."""

    status_code = 502
    public_message = "The Oracle's crystal ball is cloudy. Try again."

    def __init__(self, detail: str = "", upstream_status: int = None):
        super().__init__(detail)
        self.upstream_status = upstream_status


class ParseError(OracleError):
    """Text-generation reply is not the structured verdict we asked for."""

    status_code = 502
    public_message = UpstreamError.public_message


class PersistenceError(OracleError):
    """Writing a score row failed. Logged, never surfaced to the caller."""

    status_code = 500
