"""Translation pipeline data models.

This module provides structured data models for the translation pipeline,
ensuring type safety and clear contracts between components.
"""

from .request import (
    ModelHint,
    TranslationRequest,
    ConversationTurn,
    QueryRequest,
)
from .prompt import PromptPlan
from .events import ContentBlock, GenerationEvent, ExchangeOptions
from .result import SentenceSegment, RegisterText, TranslationResult

__all__ = [
    # Request models
    "ModelHint",
    "TranslationRequest",
    "ConversationTurn",
    "QueryRequest",
    # Prompt models
    "PromptPlan",
    # Generator exchange models
    "ContentBlock",
    "GenerationEvent",
    "ExchangeOptions",
    # Result models
    "SentenceSegment",
    "RegisterText",
    "TranslationResult",
]
