"""Language register metadata.

The service translates between three registers of text. Each register has a
wire code (used by the HTTP API), an all-caps header label (used to delimit its
block in generator output) and a few strings that are injected into prompts.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class Register(str, Enum):
    """Supported text registers, valued by their wire code."""

    CLASSICAL = "ancient"
    MODERN = "modern"
    PLAIN = "english"


@dataclass(frozen=True)
class RegisterInfo:
    """Static display and prompt metadata for one register."""

    register: Register
    label: str  # all-caps block header, e.g. "ANCIENT"
    name: str  # human readable name used in prompt text
    header_note: str  # appended to the header in the format example
    grammar_note: str  # orthography / grammar requirement for the prompt
    example_first: str
    example_second: str

    @property
    def header(self) -> str:
        return f"{self.label}{self.header_note}"


_REGISTRY: Dict[Register, RegisterInfo] = {
    Register.CLASSICAL: RegisterInfo(
        register=Register.CLASSICAL,
        label="ANCIENT",
        name="Classical/Ancient Chinese",
        header_note=" (文言文)",
        grammar_note=(
            "For Ancient/Classical Chinese, use traditional characters and "
            "classical grammar (文言文)"
        ),
        example_first=(
            "first sentence in Classical/Ancient Chinese with particles like 之乎者也"
        ),
        example_second="second sentence in Classical Chinese",
    ),
    Register.MODERN: RegisterInfo(
        register=Register.MODERN,
        label="MODERN",
        name="Modern Simplified Chinese",
        header_note="",
        grammar_note="For Modern Chinese, use simplified characters",
        example_first="first sentence in Modern Chinese",
        example_second="second sentence in Modern Chinese",
    ),
    Register.PLAIN: RegisterInfo(
        register=Register.PLAIN,
        label="ENGLISH",
        name="English",
        header_note="",
        grammar_note="For English, no special marking is required",
        example_first="first sentence in English",
        example_second="second sentence in English",
    ),
}


def get_register_info(register: Register) -> RegisterInfo:
    """Return the metadata for a register."""
    return _REGISTRY[Register(register)]


def list_registers() -> List[RegisterInfo]:
    """All registers in declaration order."""
    return [_REGISTRY[register] for register in Register]
