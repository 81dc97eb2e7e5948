"""
Request handler for text analysis
Orchestrates admission, prompt assembly and model invocation per request
"""
import logging
from datetime import datetime
from typing import Optional

from opentelemetry import trace

from .context import PAGE_CONTENT_LIMIT, build_context
from .invoker import ModelInvoker
from .prompt import build_prompt
from .types import AnalysisRequest, AnalysisResult, UsageStats
from ..core.errors import (
    AllModelsUnavailable,
    AnalysisFailed,
    InvalidInput,
    RateLimitExceeded,
)
from ..core.quota import QuotaLedger

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class RequestHandler:
    """
    Runs one analysis request through the pipeline.

    Pattern:
    1. Validate required fields
    2. Charge the caller's daily quota
    3. Build context, then prompt
    4. Invoke the candidate models
    5. Shape the answer with input-size usage stats

    Quota charged in step 2 is kept even if step 4 fails.
    """

    def __init__(
        self,
        ledger: QuotaLedger,
        invoker: ModelInvoker,
        page_content_limit: int = PAGE_CONTENT_LIMIT
    ):
        self.ledger = ledger
        self.invoker = invoker
        self.page_content_limit = page_content_limit

    async def handle(
        self,
        request: AnalysisRequest,
        caller_id: str,
        now: Optional[datetime] = None
    ) -> AnalysisResult:
        """
        Answer the request's question about its selected text.

        Args:
            request: Inbound analysis request
            caller_id: Quota bucket for the caller
            now: Service time, defaults to the current local time

        Returns:
            AnalysisResult with the model answer and usage stats

        Raises:
            InvalidInput: selected text or question missing
            RateLimitExceeded: caller is over its daily quota
            AnalysisFailed: no candidate model produced an answer
        """
        now = now or datetime.now()

        with tracer.start_as_current_span("handle_analysis") as span:
            if not request.selected_text or not request.question:
                raise InvalidInput()

            decision = self.ledger.admit(caller_id, now)
            span.set_attribute("quota.count", decision.count)
            if not decision.allowed:
                raise RateLimitExceeded(decision.limit)

            context = build_context(
                request.selected_text,
                request.page_url,
                request.page_content,
                limit=self.page_content_limit
            )
            prompt = build_prompt(request.question, context)

            try:
                attempt = await self.invoker.generate(prompt)
            except AllModelsUnavailable as e:
                logger.error(f"Analysis failed for {caller_id}: {e}")
                raise AnalysisFailed() from e

            span.set_attribute("llm.model", attempt.model_id)

        return AnalysisResult(
            answer=attempt.text,
            usage=UsageStats(
                selected_text_length=len(request.selected_text),
                question_length=len(request.question),
                page_content_length=len(request.page_content or "")
            ),
            model_id=attempt.model_id
        )

    def current_usage(self, caller_id: str, now: Optional[datetime] = None) -> int:
        """Read-only daily usage for caller_id"""
        return self.ledger.current_usage(caller_id, now or datetime.now())
