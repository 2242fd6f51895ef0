"""Translation pipeline components.

This module provides the core pipeline components for translation:
- PromptEngine: Builds the translation and follow-up prompts
- TextGenerator / LiteLLMGenerator: Streamed exchanges with an LLM provider
- GenerationInvoker: Timeout, retry and backoff around one exchange
- ResponseAligner: Parses raw output into per-register sentences
- TranslationPipeline: Orchestrates the complete flow
"""

from .prompt_engine import PromptEngine
from .llm_gateway import TextGenerator, LiteLLMGenerator, GatewayFactory
from .invoker import GenerationInvoker, InvocationPhase, RetryState
from .output_processor import ResponseAligner
from .pipeline import TranslationPipeline, PipelineConfig

__all__ = [
    "PromptEngine",
    "TextGenerator",
    "LiteLLMGenerator",
    "GatewayFactory",
    "GenerationInvoker",
    "InvocationPhase",
    "RetryState",
    "ResponseAligner",
    "TranslationPipeline",
    "PipelineConfig",
]
