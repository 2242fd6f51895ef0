"""Generation invoker with timeout and retry discipline.

Each attempt opens a fresh exchange with the generator and races it against a
per-attempt timer. Failed attempts are retried with exponential backoff
(``min(base * 2^(n-1), max)``) until the attempt budget is spent.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..errors import (
    AttemptTimeout,
    EmptyResult,
    GenerationFailure,
    RateLimited,
    is_rate_limit_error,
)
from ..models.events import ExchangeOptions
from ..models.prompt import PromptPlan
from ..models.request import ModelHint
from .llm_gateway import TextGenerator

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class InvocationPhase(str, Enum):
    """Lifecycle of one invocation."""

    PENDING = "pending"
    ATTEMPTING = "attempting"
    SUCCESS = "success"
    EXHAUSTED = "exhausted"


@dataclass
class RetryState:
    """Attempt counter and diagnostics for one invocation.

    Transitions: PENDING -> ATTEMPTING(1) -> SUCCESS | ATTEMPTING(n+1) | EXHAUSTED.
    SUCCESS and EXHAUSTED are terminal.
    """

    max_attempts: int
    attempt: int = 0
    phase: InvocationPhase = InvocationPhase.PENDING
    last_error: Optional[BaseException] = None
    attempt_durations: List[float] = field(default_factory=list)
    backoff_waits: List[float] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.phase in (InvocationPhase.SUCCESS, InvocationPhase.EXHAUSTED)

    def begin_attempt(self) -> None:
        if self.is_terminal:
            raise RuntimeError(f"Cannot start an attempt from {self.phase.value}")
        if self.attempt >= self.max_attempts:
            raise RuntimeError("Attempt budget already spent")
        self.attempt += 1
        self.phase = InvocationPhase.ATTEMPTING

    def record_success(self, duration: float) -> None:
        self._require_attempting()
        self.attempt_durations.append(duration)
        self.phase = InvocationPhase.SUCCESS

    def record_failure(self, error: BaseException, duration: float) -> None:
        self._require_attempting()
        self.attempt_durations.append(duration)
        self.last_error = error
        if self.attempt >= self.max_attempts:
            self.phase = InvocationPhase.EXHAUSTED

    def record_backoff(self, seconds: float) -> None:
        self._require_attempting()
        self.backoff_waits.append(seconds)

    def _require_attempting(self) -> None:
        if self.phase is not InvocationPhase.ATTEMPTING:
            raise RuntimeError(f"No attempt in progress (phase={self.phase.value})")


class GenerationInvoker:
    """Sends prompt plans to a generator and returns the final text."""

    def __init__(
        self,
        generator: TextGenerator,
        max_attempts: int = 3,
        timeout_seconds: float = 30.0,
        backoff_base_seconds: float = 1.0,
        backoff_max_seconds: float = 5.0,
        sleep: SleepFunc = asyncio.sleep,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        """Initialize the invoker.

        Args:
            generator: Generator to exchange prompts with
            max_attempts: Default attempt budget per invocation
            timeout_seconds: Default per-attempt timeout
            backoff_base_seconds: Wait before the second attempt
            backoff_max_seconds: Upper bound for any single wait
            sleep: Coroutine used for backoff waits
            temperature: Optional sampling temperature override
            max_tokens: Optional completion budget override
        """
        self.generator = generator
        self.max_attempts = max_attempts
        self.timeout_seconds = timeout_seconds
        self.backoff_base_seconds = backoff_base_seconds
        self.backoff_max_seconds = backoff_max_seconds
        self._sleep = sleep
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def invoke(
        self,
        plan: PromptPlan,
        model_hint: ModelHint = ModelHint.DEFAULT,
        *,
        max_attempts: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        state: Optional[RetryState] = None,
    ) -> str:
        """Invoke the generator with retries.

        Args:
            plan: Prompt plan; unchanged across attempts
            model_hint: Generation variant
            max_attempts: Override the attempt budget
            timeout_seconds: Override the per-attempt timeout
            state: Optional RetryState to observe attempts and waits

        Returns:
            Final generator text

        Raises:
            GenerationFailure: If every attempt failed; RateLimited when the
                last cause looks like upstream rate limiting
        """
        attempts = max_attempts or self.max_attempts
        timeout = timeout_seconds or self.timeout_seconds
        if state is None:
            state = RetryState(max_attempts=attempts)
        else:
            state.max_attempts = attempts

        options = ExchangeOptions(
            system_prompt=plan.system_preamble,
            model_hint=model_hint,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        def before_sleep(retry_state: RetryCallState) -> None:
            wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
            state.record_backoff(wait)
            logger.info(f"Waiting {int(wait * 1000)}ms before retry...")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(
                multiplier=self.backoff_base_seconds, max=self.backoff_max_seconds
            ),
            retry=retry_if_exception_type(Exception),
            before_sleep=before_sleep,
            sleep=self._sleep,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    return await self._run_attempt(plan, options, timeout, state)
        except Exception as e:
            logger.error(f"Translation failed after {state.attempt} attempt(s): {e}")
            if is_rate_limit_error(e):
                raise RateLimited(e, state) from e
            raise GenerationFailure(e, state) from e

        raise GenerationFailure(EmptyResult(), state)

    async def _run_attempt(
        self,
        plan: PromptPlan,
        options: ExchangeOptions,
        timeout: float,
        state: RetryState,
    ) -> str:
        state.begin_attempt()
        logger.info(f"Translation attempt {state.attempt}/{state.max_attempts}")
        start_time = time.monotonic()

        try:
            text = await asyncio.wait_for(
                self._consume(plan.instruction_text, options), timeout=timeout
            )
            if not text:
                raise EmptyResult()
        except asyncio.TimeoutError:
            error = AttemptTimeout(timeout)
            state.record_failure(error, time.monotonic() - start_time)
            logger.error(f"Translation attempt {state.attempt} failed: {error}")
            raise error from None
        except Exception as e:
            state.record_failure(e, time.monotonic() - start_time)
            logger.error(f"Translation attempt {state.attempt} failed: {e}")
            raise

        duration = time.monotonic() - start_time
        state.record_success(duration)
        logger.info(
            f"Translation succeeded on attempt {state.attempt} "
            f"({int(duration * 1000)}ms, {len(text)} chars)"
        )
        return text

    async def _consume(self, prompt: str, options: ExchangeOptions) -> str:
        """Read events until a final result arrives.

        The first non-empty ``result`` event wins. Otherwise the first
        assistant-authored text is used; an empty string means neither arrived.
        """
        fallback = ""
        message_count = 0

        events = self.generator.exchange(prompt, options)
        try:
            async for event in events:
                message_count += 1
                logger.debug(f"Message {message_count} - Type: {event.type}")

                if event.type == "result" and event.result:
                    return event.result
                if not fallback:
                    fallback = event.assistant_text() or ""
        finally:
            # Plain async iterators have nothing to close
            aclose = getattr(events, "aclose", None)
            if aclose is not None:
                await aclose()

        return fallback
