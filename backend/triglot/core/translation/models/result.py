"""Translation result models.

This module defines the aligned output of the translation pipeline: one
block of tagged sentences per register.
"""

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..languages import Register


class SentenceSegment(BaseModel):
    """One ``<sN>...</sN>`` span; ``index`` is the tag number N."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., gt=0)
    text: str


class RegisterText(BaseModel):
    """A register's raw tagged block and the sentences parsed out of it."""

    model_config = ConfigDict(frozen=True)

    language: Register
    raw_block: str = ""
    segments: Tuple[SentenceSegment, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.raw_block

    @property
    def indices(self) -> List[int]:
        return [segment.index for segment in self.segments]


class TranslationResult(BaseModel):
    """Final aligned output.

    Registers that could not be located in the generator output are kept with
    an empty block; callers decide how to flag them.
    """

    model_config = ConfigDict(frozen=True)

    original: RegisterText
    translations: Dict[Register, RegisterText] = Field(default_factory=dict)

    def missing_registers(self) -> List[Register]:
        """Requested registers with no parseable block."""
        return [
            register
            for register, text in self.translations.items()
            if text.is_empty
        ]

    def segment_count_mismatches(self) -> Dict[Register, Tuple[int, int]]:
        """Registers whose segment count differs from the original's.

        Returns:
            Mapping of register to (original count, register count)
        """
        expected = len(self.original.segments)
        return {
            register: (expected, len(text.segments))
            for register, text in self.translations.items()
            if not text.is_empty and len(text.segments) != expected
        }

    def to_response(self) -> Dict[str, Any]:
        """Render the HTTP response body."""
        return {
            "original": {
                "language": self.original.language.value,
                "text": self.original.raw_block,
            },
            "translations": {
                register.value: text.raw_block
                for register, text in self.translations.items()
            },
        }
