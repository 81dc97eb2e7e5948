"""
Core infrastructure for the Text Analyzer backend
"""
from .errors import (
    AnalyzerError,
    InvalidInput,
    RateLimitExceeded,
    AnalysisFailed,
    ModelUnavailable,
    UpstreamTransportError,
    AllModelsUnavailable,
)
from .quota import QuotaLedger, QuotaDecision

__all__ = [
    "AnalyzerError",
    "InvalidInput",
    "RateLimitExceeded",
    "AnalysisFailed",
    "ModelUnavailable",
    "UpstreamTransportError",
    "AllModelsUnavailable",
    "QuotaLedger",
    "QuotaDecision",
]
