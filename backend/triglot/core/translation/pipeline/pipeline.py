"""Main translation pipeline orchestrator.

This module provides the TranslationPipeline class that coordinates
all pipeline components for end-to-end translation.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from triglot.utils.text import safe_truncate

from ..errors import ValidationError
from ..models.request import QueryRequest, TranslationRequest
from ..models.result import TranslationResult
from .invoker import GenerationInvoker, RetryState
from .llm_gateway import TextGenerator
from .output_processor import ResponseAligner
from .prompt_engine import PromptEngine

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for translation pipeline."""

    max_attempts: int = 3
    attempt_timeout_seconds: float = 30.0
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 5.0
    query_max_attempts: int = 1
    query_timeout_seconds: float = 120.0
    temperature: Optional[float] = None  # Override generator default
    max_tokens: Optional[int] = None  # Override generator default


class TranslationPipeline:
    """Main orchestrator for the translation pipeline.

    Coordinates the flow:
    Request -> PromptEngine -> PromptPlan -> GenerationInvoker -> ResponseAligner -> Result

    Holds no per-request state, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        generator: TextGenerator,
        config: Optional[PipelineConfig] = None,
        invoker: Optional[GenerationInvoker] = None,
    ):
        """Initialize translation pipeline.

        Args:
            generator: Generator used for every exchange
            config: Pipeline configuration
            invoker: Optional pre-built invoker (e.g. with a custom sleep)
        """
        self.config = config or PipelineConfig()
        self.invoker = invoker or GenerationInvoker(
            generator,
            max_attempts=self.config.max_attempts,
            timeout_seconds=self.config.attempt_timeout_seconds,
            backoff_base_seconds=self.config.backoff_base_seconds,
            backoff_max_seconds=self.config.backoff_max_seconds,
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )
        self.aligner = ResponseAligner()

    async def translate(
        self,
        request: TranslationRequest,
        state: Optional[RetryState] = None,
    ) -> TranslationResult:
        """Execute the full translation pipeline.

        Flow:
        1. Validate the request (no generator call on failure)
        2. Build prompts with PromptEngine
        3. Invoke the generator with retries
        4. Align the raw output into per-register sentences

        Args:
            request: Translation request
            state: Optional RetryState to observe the invocation

        Returns:
            Aligned TranslationResult

        Raises:
            ValidationError: If a required field is missing
            GenerationFailure: If every generator attempt failed
        """
        self.validate(request)

        logger.info(
            "Translation request: textLength=%d, preview=%r, input=%s, outputs=%s, model=%s",
            len(request.source_text),
            safe_truncate(request.source_text, 100),
            request.input_register.value,
            [register.value for register in request.output_registers],
            request.model_hint.value,
        )

        plan = PromptEngine.compose(request)
        logger.debug("Prompt built: ~%d input tokens", plan.estimate_tokens())
        raw_text = await self.invoker.invoke(
            plan,
            request.model_hint,
            max_attempts=self.config.max_attempts,
            timeout_seconds=self.config.attempt_timeout_seconds,
            state=state,
        )
        logger.info("Final translation result received, length: %d", len(raw_text))

        result = self.aligner.align(
            raw_text, request.input_register, request.output_registers
        )
        self._report_alignment(result)
        return result

    async def query(
        self,
        request: QueryRequest,
        state: Optional[RetryState] = None,
    ) -> str:
        """Answer a follow-up question about a highlighted excerpt.

        The history is rendered into the prompt; nothing is stored.

        Args:
            request: Question, excerpt, document and prior turns
            state: Optional RetryState to observe the invocation

        Returns:
            Generator answer, verbatim

        Raises:
            ValidationError: If a required field is missing
            GenerationFailure: If every generator attempt failed
        """
        missing = [
            name
            for name, value in (
                ("originalText", request.original_text),
                ("highlightedSentence", request.highlighted_excerpt),
                ("userQuestion", request.question),
            )
            if not value
        ]
        if missing:
            raise ValidationError(
                "originalText, highlightedSentence, and userQuestion are required",
                field=missing[0],
            )

        logger.info(
            "Query request: question=%r, historyTurns=%d, model=%s",
            safe_truncate(request.question, 100),
            len(request.history),
            request.model_hint.value,
        )

        plan = PromptEngine.compose_query(request)
        return await self.invoker.invoke(
            plan,
            request.model_hint,
            max_attempts=self.config.query_max_attempts,
            timeout_seconds=self.config.query_timeout_seconds,
            state=state,
        )

    @staticmethod
    def validate(request: TranslationRequest) -> None:
        """Check required fields before any generator call.

        Raises:
            ValidationError: On the first missing field
        """
        if not request.source_text:
            raise ValidationError("Text is required", field="text")
        if request.input_register is None:
            raise ValidationError("Input language is required", field="inputLanguage")
        if not request.output_registers:
            raise ValidationError(
                "At least one output language is required", field="outputLanguages"
            )

    @staticmethod
    def _report_alignment(result: TranslationResult) -> None:
        for register in result.missing_registers():
            logger.warning("Warning: Translation for %s not found in response", register.value)

        if not result.original.segments:
            logger.warning("No tagged sentences found in the original block")

        for register, (expected, found) in result.segment_count_mismatches().items():
            logger.warning(
                "Segment count mismatch for %s: original has %d, translation has %d",
                register.value,
                expected,
                found,
            )
