import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock

from Analyzer.api.app import app, get_request_handler
from Analyzer.core import QuotaLedger
from Analyzer.pipeline import ModelInvoker, RequestHandler

MODELS = ["gemini/gemini-1.5-flash", "gemini/gemini-pro", "gemini/gemini-1.5-pro"]


def completion_response(text):
    """Minimal stand-in for a LiteLLM ModelResponse"""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))]
    )


@pytest.fixture
def completion():
    """
    Async completion mock; every call answers "Mock answer" unless a test
    sets side_effect or return_value.
    """
    return AsyncMock(return_value=completion_response("Mock answer"))


@pytest.fixture
def invoker(completion):
    return ModelInvoker(models=MODELS, completion=completion, api_key="test-key")


@pytest.fixture
def ledger():
    return QuotaLedger(limit=3)


@pytest.fixture
def handler(ledger, invoker):
    return RequestHandler(ledger=ledger, invoker=invoker)


@pytest.fixture(autouse=True)
def override_handler(handler):
    """
    Route every API test through a handler with a mocked provider,
    preventing any real LLM calls.
    """
    app.dependency_overrides[get_request_handler] = lambda: handler
    yield
    app.dependency_overrides.clear()
