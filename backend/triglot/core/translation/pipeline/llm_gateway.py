"""Generator gateway for unified provider access.

This module provides the abstract generator interface the invoker talks to,
along with a streaming implementation using LiteLLM.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, AsyncIterator, Optional

from litellm import acompletion

from ..models.events import ContentBlock, ExchangeOptions, GenerationEvent
from ..models.prompt import PromptPlan
from ..models.request import ModelHint

if TYPE_CHECKING:
    from triglot.config import Settings

logger = logging.getLogger(__name__)


class TextGenerator(ABC):
    """Abstract generator exchanging a prompt for a stream of events.

    Implementations must not keep per-request state: one instance is shared
    by every concurrent request.
    """

    @property
    @abstractmethod
    def provider(self) -> str:
        """Get provider name."""
        pass

    @abstractmethod
    def exchange(
        self, prompt: str, options: ExchangeOptions
    ) -> AsyncIterator[GenerationEvent]:
        """Start a streamed exchange.

        Args:
            prompt: Instruction text
            options: System prompt, model hint and generation parameters

        Yields:
            GenerationEvent objects as they arrive
        """
        pass


class LiteLLMGenerator(TextGenerator):
    """Streaming generator for all providers using LiteLLM."""

    def __init__(
        self,
        api_key: Optional[str],
        default_model: str,
        fast_model: str,
        base_url: Optional[str] = None,
        provider_name: str = "anthropic",
        temperature: float = 0.3,
        max_tokens: int = 4096,
    ):
        """Initialize LiteLLM generator.

        Args:
            api_key: API key for authentication
            default_model: Model used for ModelHint.DEFAULT
            fast_model: Model used for ModelHint.FAST
            base_url: Optional custom base URL for compatible APIs
            provider_name: Provider name used as the LiteLLM prefix
            temperature: Default sampling temperature
            max_tokens: Default completion budget
        """
        self._api_key = api_key
        self._base_url = base_url
        self._provider = provider_name
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._models = {
            ModelHint.DEFAULT: self._litellm_model(default_model),
            ModelHint.FAST: self._litellm_model(fast_model),
        }

        logger.info(
            f"[Generator] Initialized: provider={provider_name}, "
            f"default={self._models[ModelHint.DEFAULT]}, "
            f"fast={self._models[ModelHint.FAST]}, base_url={base_url}"
        )

    @property
    def provider(self) -> str:
        return self._provider

    def model_for(self, hint: ModelHint) -> str:
        """LiteLLM model name for a model hint."""
        return self._models[hint]

    def _litellm_model(self, model: str) -> str:
        # LiteLLM expects "<provider>/<model>" unless the prefix is already there
        if model.startswith(f"{self._provider}/"):
            return model
        if self._provider == "openai":
            return model
        if self._provider == "anthropic" and model.startswith("claude"):
            return model
        return f"{self._provider}/{model}"

    async def exchange(
        self, prompt: str, options: ExchangeOptions
    ) -> AsyncIterator[GenerationEvent]:
        """Stream a completion as generation events.

        Yields a ``system`` event first, a ``partial`` event per delta, then one
        ``assistant`` event with the accumulated text and a final ``result``.
        """
        start_time = time.time()
        model = self.model_for(options.model_hint)

        messages = PromptPlan(
            instruction_text=prompt, system_preamble=options.system_prompt or ""
        ).to_messages()

        kwargs = {
            "model": model,
            "messages": messages,
            "temperature": (
                options.temperature if options.temperature is not None else self._temperature
            ),
            "max_tokens": options.max_tokens or self._max_tokens,
            "stream": True,
        }
        if self._api_key:
            kwargs["api_key"] = self._api_key
        if self._base_url:
            kwargs["api_base"] = self._base_url

        logger.info(f"[Generator] Calling LiteLLM: model={model}, provider={self._provider}")
        yield GenerationEvent(type="system", content=model)

        accumulated_content = ""
        response = await acompletion(**kwargs)

        async for chunk in response:
            if chunk.choices and chunk.choices[0].delta.content:
                delta = chunk.choices[0].delta.content
                accumulated_content += delta
                yield GenerationEvent(type="partial", content=delta)

        logger.info(
            f"[Generator] Stream finished: chars={len(accumulated_content)}, "
            f"latency={int((time.time() - start_time) * 1000)}ms"
        )

        yield GenerationEvent(
            type="assistant",
            content=[ContentBlock(type="text", text=accumulated_content)],
        )
        yield GenerationEvent(type="result", result=accumulated_content)


class GatewayFactory:
    """Factory for creating generators from configuration."""

    @classmethod
    def create(cls, settings: "Settings") -> TextGenerator:
        """Create the configured generator.

        Args:
            settings: Application settings

        Returns:
            Configured TextGenerator instance
        """
        return LiteLLMGenerator(
            api_key=settings.resolved_api_key,
            default_model=settings.default_model,
            fast_model=settings.fast_model,
            base_url=settings.llm_base_url,
            provider_name=settings.llm_provider.lower(),
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )
