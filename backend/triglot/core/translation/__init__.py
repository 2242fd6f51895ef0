"""Translation package.

This package provides the register translation pipeline.

Architecture:
- languages.py: Register enumeration and prompt metadata
- errors.py: Error taxonomy and failure classification
- models/: Data models (TranslationRequest, PromptPlan, TranslationResult, etc.)
- pipeline/: Pipeline components (PromptEngine, GenerationInvoker, etc.)
"""

from .languages import Register, RegisterInfo, get_register_info, list_registers
from .errors import (
    ErrorCategory,
    TranslatorError,
    ValidationError,
    AttemptError,
    AttemptTimeout,
    EmptyResult,
    GenerationFailure,
    RateLimited,
    classify_failure,
)

# Re-export models for convenience
from .models import (
    # Request models
    ModelHint,
    TranslationRequest,
    ConversationTurn,
    QueryRequest,
    # Prompt models
    PromptPlan,
    # Generator exchange models
    ContentBlock,
    GenerationEvent,
    ExchangeOptions,
    # Result models
    SentenceSegment,
    RegisterText,
    TranslationResult,
)

# Re-export pipeline components
from .pipeline import (
    PromptEngine,
    TextGenerator,
    LiteLLMGenerator,
    GatewayFactory,
    GenerationInvoker,
    InvocationPhase,
    RetryState,
    ResponseAligner,
    TranslationPipeline,
    PipelineConfig,
)

__all__ = [
    # Registry
    "Register",
    "RegisterInfo",
    "get_register_info",
    "list_registers",
    # Errors
    "ErrorCategory",
    "TranslatorError",
    "ValidationError",
    "AttemptError",
    "AttemptTimeout",
    "EmptyResult",
    "GenerationFailure",
    "RateLimited",
    "classify_failure",
    # Models
    "ModelHint",
    "TranslationRequest",
    "ConversationTurn",
    "QueryRequest",
    "PromptPlan",
    "ContentBlock",
    "GenerationEvent",
    "ExchangeOptions",
    "SentenceSegment",
    "RegisterText",
    "TranslationResult",
    # Pipeline
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
