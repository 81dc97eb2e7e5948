"""
Error taxonomy for the analysis pipeline
Caller-facing errors carry an HTTP status and a coarse public message only
"""
from typing import List, Optional


class AnalyzerError(Exception):
    """
    Base class for errors surfaced to API callers.

    The message is safe to return to the client; upstream details
    belong in the server log.
    """
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInput(AnalyzerError):
    """Required request fields are missing or empty."""
    status_code = 400
    message = "Selected text and question are required"


class RateLimitExceeded(AnalyzerError):
    """The caller has used up its daily quota."""
    status_code = 429
    message = "Rate limit exceeded. Please try again tomorrow."

    def __init__(self, limit: int, message: Optional[str] = None):
        self.limit = limit
        super().__init__(message)


class AnalysisFailed(AnalyzerError):
    """The model could not produce an answer."""
    status_code = 500
    message = "Failed to analyze text. Please try again."


class ModelUnavailable(Exception):
    """A single candidate model failed; the invoker moves on to the next one."""
    error_kind: str = "provider_error"

    def __init__(self, model_id: str, detail: str, error_kind: Optional[str] = None):
        self.model_id = model_id
        self.detail = detail
        if error_kind is not None:
            self.error_kind = error_kind
        super().__init__(f"{model_id}: {detail}")


class UpstreamTransportError(ModelUnavailable):
    """Network or timeout failure talking to the provider."""
    error_kind = "transport"


class AllModelsUnavailable(Exception):
    """
    Every candidate model failed.

    Carries each attempt for diagnostics; never shown to callers.
    """

    def __init__(self, attempts: List):
        self.attempts = attempts
        self.last_attempt = attempts[-1] if attempts else None
        if self.last_attempt is not None:
            detail = (
                f"{self.last_attempt.model_id} "
                f"({self.last_attempt.error_kind}): {self.last_attempt.detail}"
            )
        else:
            detail = "no candidate models configured"
        super().__init__(f"All models unavailable; last failure: {detail}")
