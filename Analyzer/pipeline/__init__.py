"""
Request-processing pipeline: context, prompt, model fallback, handler
"""
from .context import build_context, PAGE_CONTENT_LIMIT
from .prompt import build_prompt
from .invoker import ModelInvoker, classify_error
from .handler import RequestHandler
from .types import AnalysisRequest, AnalysisResult, UsageStats, ModelAttempt

__all__ = [
    "build_context",
    "PAGE_CONTENT_LIMIT",
    "build_prompt",
    "ModelInvoker",
    "classify_error",
    "RequestHandler",
    "AnalysisRequest",
    "AnalysisResult",
    "UsageStats",
    "ModelAttempt",
]
