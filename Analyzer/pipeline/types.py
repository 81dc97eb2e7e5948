"""
Value types passed between pipeline stages
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class AnalysisRequest:
    """One inbound analysis call, owned by the handler for its duration."""
    selected_text: Optional[str]
    question: Optional[str]
    page_url: Optional[str] = None
    page_content: Optional[str] = None


@dataclass
class UsageStats:
    """Input sizes echoed back for client-side telemetry (not token counts)."""
    selected_text_length: int
    question_length: int
    page_content_length: int


@dataclass
class AnalysisResult:
    answer: str
    usage: UsageStats
    model_id: Optional[str] = None


@dataclass
class ModelAttempt:
    """
    Result of one candidate model call.

    Exactly one of text (on success) or error_kind (on failure) is set.
    error_kind is one of: transport | quota | model_not_found |
    malformed_response | empty_response | provider_error
    """
    model_id: str
    succeeded: bool
    text: Optional[str] = None
    error_kind: Optional[str] = None
    detail: str = ""
    latency_ms: float = 0.0

    @classmethod
    def success(cls, model_id: str, text: str, latency_ms: float = 0.0) -> "ModelAttempt":
        return cls(model_id=model_id, succeeded=True, text=text, latency_ms=latency_ms)

    @classmethod
    def failure(
        cls,
        model_id: str,
        error_kind: str,
        detail: str,
        latency_ms: float = 0.0
    ) -> "ModelAttempt":
        return cls(
            model_id=model_id,
            succeeded=False,
            error_kind=error_kind,
            detail=detail,
            latency_ms=latency_ms
        )
