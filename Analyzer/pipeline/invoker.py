"""
Multi-model fallback invocation
Tries candidate LLMs in priority order through LiteLLM, first success wins
"""
import logging
import time
from typing import Any, Awaitable, Callable, List, Optional, Sequence

import litellm
from opentelemetry import trace

from .types import ModelAttempt
from ..core.errors import AllModelsUnavailable, ModelUnavailable, UpstreamTransportError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

CompletionFn = Callable[..., Awaitable[Any]]

_TRANSPORT_ERRORS = (
    litellm.Timeout,
    litellm.APIConnectionError,
    TimeoutError,
    ConnectionError,
)


def classify_error(error: Exception) -> str:
    """Map a provider exception to an attempt error kind"""
    if isinstance(error, ModelUnavailable):
        return error.error_kind
    if isinstance(error, litellm.RateLimitError):
        return "quota"
    if isinstance(error, litellm.NotFoundError):
        return "model_not_found"
    return "provider_error"


class ModelInvoker:
    """
    Ordered list of candidate models for one provider.

    Pattern:
    1. Call each candidate once with the full prompt, in list order
    2. Return the first non-empty reply; later candidates are never called
    3. Log each failure and move on (no backoff, no retries per candidate)
    4. Raise AllModelsUnavailable with every attempt when the list runs out
    """

    def __init__(
        self,
        models: Sequence[str],
        completion: Optional[CompletionFn] = None,
        timeout: Optional[float] = None,
        api_key: Optional[str] = None,
        temperature: Optional[float] = None
    ):
        """
        Initialize the invoker.

        Args:
            models: Candidate model ids in priority order (LiteLLM naming,
                e.g. "gemini/gemini-1.5-flash")
            completion: Async completion callable, defaults to litellm.acompletion
            timeout: Provider request timeout in seconds
            api_key: Provider API key; LiteLLM falls back to its env lookup
            temperature: Sampling temperature
        """
        self.models: List[str] = list(models)
        self._completion = completion or litellm.acompletion
        self.timeout = timeout
        self.api_key = api_key or None
        self.temperature = temperature

    async def invoke(self, prompt: str) -> str:
        """
        Generate a completion for prompt.

        Returns:
            Text of the first candidate that succeeds

        Raises:
            AllModelsUnavailable: every candidate failed
        """
        attempt = await self.generate(prompt)
        return attempt.text

    async def generate(self, prompt: str) -> ModelAttempt:
        """Same as invoke, but returns the successful ModelAttempt"""
        failures: List[ModelAttempt] = []
        for model_id in self.models:
            attempt = await self.attempt(model_id, prompt)
            if attempt.succeeded:
                return attempt
            failures.append(attempt)

        error = AllModelsUnavailable(failures)
        logger.error(str(error))
        raise error

    async def attempt(self, model_id: str, prompt: str) -> ModelAttempt:
        """
        Call a single candidate.

        Never raises for provider failures; the outcome is returned as a
        ModelAttempt instead.
        """
        start_time = time.time()
        with tracer.start_as_current_span("model_attempt") as span:
            span.set_attribute("llm.model", model_id)
            logger.info(f"Trying model: {model_id}")
            try:
                text = await self._generate(model_id, prompt)
            except Exception as e:
                kind = classify_error(e)
                latency_ms = (time.time() - start_time) * 1000
                span.set_attribute("llm.error_kind", kind)
                logger.warning(f"Model {model_id} failed ({kind}): {e}")
                return ModelAttempt.failure(model_id, kind, str(e), latency_ms)

            latency_ms = (time.time() - start_time) * 1000
            span.set_attribute("llm.latency_ms", latency_ms)
            logger.info(f"Successfully used model: {model_id} ({latency_ms:.0f} ms)")
            return ModelAttempt.success(model_id, text, latency_ms)

    async def _generate(self, model_id: str, prompt: str) -> str:
        kwargs = {
            "model": model_id,
            "messages": [{"role": "user", "content": prompt}],
        }
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.api_key is not None:
            kwargs["api_key"] = self.api_key
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature

        try:
            response = await self._completion(**kwargs)
        except _TRANSPORT_ERRORS as e:
            raise UpstreamTransportError(model_id, str(e)) from e

        try:
            text = response.choices[0].message.content
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            raise ModelUnavailable(model_id, f"malformed response: {e}", "malformed_response") from e
        if not isinstance(text, str):
            raise ModelUnavailable(model_id, "response content is not text", "malformed_response")
        if not text.strip():
            raise ModelUnavailable(model_id, "empty response", "empty_response")
        return text
