"""Inbound request models.

These are request-scoped value objects: built once per call, never mutated
and discarded once the response has been sent.
"""

from enum import Enum
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..languages import Register


class ModelHint(str, Enum):
    """Which generation variant to use."""

    DEFAULT = "default"
    FAST = "fast"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ModelHint":
        """Parse a wire value, accepting the legacy model names.

        Raises:
            ValueError: If the value is not a known hint or alias
        """
        if value is None or value == "":
            return cls.DEFAULT
        if isinstance(value, ModelHint):
            return value
        normalized = str(value).strip().lower()
        if normalized in MODEL_ALIASES:
            return MODEL_ALIASES[normalized]
        return cls(normalized)


MODEL_ALIASES = {
    "opus": ModelHint.DEFAULT,
    "sonnet": ModelHint.FAST,
}


class TranslationRequest(BaseModel):
    """A request to translate text from one register into others.

    Field presence is checked by the pipeline before any generator call, so
    empty values are representable here.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    source_text: str = Field(default="", description="Text to translate")
    input_register: Optional[Register] = Field(
        default=None, description="Register of the source text"
    )
    output_registers: Tuple[Register, ...] = Field(
        default=(), description="Requested output registers, in display order"
    )
    model_hint: ModelHint = Field(default=ModelHint.DEFAULT)

    @field_validator("output_registers", mode="after")
    @classmethod
    def _dedupe(cls, value: Tuple[Register, ...]) -> Tuple[Register, ...]:
        # Ordered set: keep the first occurrence of each register
        return tuple(dict.fromkeys(value))

    @field_validator("model_hint", mode="before")
    @classmethod
    def _parse_hint(cls, value):
        return ModelHint.parse(value)


class ConversationTurn(BaseModel):
    """One prior turn of a follow-up conversation, supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class QueryRequest(BaseModel):
    """A follow-up question about a highlighted part of a translated document."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    original_text: str = ""
    highlighted_excerpt: str = ""
    question: str = ""
    history: Tuple[ConversationTurn, ...] = ()
    model_hint: ModelHint = ModelHint.DEFAULT

    @field_validator("model_hint", mode="before")
    @classmethod
    def _parse_hint(cls, value):
        return ModelHint.parse(value)
