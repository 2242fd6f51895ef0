"""Response aligner for translation output.

This module parses the generator's multi-section text into one tagged block
per register and extracts the numbered sentences from each block.
"""

import logging
import re
from typing import Dict, List, Optional, Sequence

from ..languages import Register, get_register_info
from ..models.result import RegisterText, SentenceSegment, TranslationResult

logger = logging.getLogger(__name__)


class ResponseAligner:
    """Turns raw generator output into a TranslationResult.

    Responsibilities:
    1. Locate each register's labeled block (strict header match)
    2. Recover blocks missed by the strict pass with a looser pattern
    3. Extract ``<sN>...</sN>`` sentences from each block

    Parsing never raises. Missing blocks are left empty and segment counts are
    reported as found, without any normalization across registers.
    """

    # Start of the next all-caps labeled header, e.g. "\nMODERN:" or
    # "\n\nANCIENT (文言文):"
    NEXT_HEADER = r"\n[ \t]*[A-Z][A-Z_]+(?:[ \t]*\([^)\n]*\))?[ \t]*:"

    SENTENCE_PATTERN = re.compile(r"<s(\d+)>(.*?)</s\1>", re.DOTALL)

    def align(
        self,
        raw_text: str,
        input_register: Register,
        output_registers: Sequence[Register],
    ) -> TranslationResult:
        """Parse generator output into aligned register texts.

        Args:
            raw_text: Final text returned by the generator
            input_register: Register of the source text
            output_registers: Requested output registers, in order

        Returns:
            TranslationResult with one RegisterText per requested register
        """
        if not isinstance(raw_text, str) or not raw_text:
            logger.error(f"Invalid response format: {raw_text!r}")
            raw_text = ""

        original_block = self.find_block(raw_text, input_register) or ""

        blocks: Dict[Register, str] = {}
        for register in output_registers:
            block = self.find_block(raw_text, register)
            if block:
                blocks[register] = block

        # Looser pass, only for registers the strict pass missed
        for register in output_registers:
            if register in blocks:
                continue
            logger.warning(
                f"Translation for {register.value} not found in response, "
                "trying flexible pattern"
            )
            blocks[register] = self.find_block_loose(raw_text, register) or ""

        return TranslationResult(
            original=self.build_register_text(input_register, original_block),
            translations={
                register: self.build_register_text(register, blocks[register])
                for register in output_registers
            },
        )

    def find_block(self, raw_text: str, register: Register) -> Optional[str]:
        """Strict match: the register's header up to the next header or end of text."""
        match = self._strict_pattern(register).search(raw_text)
        if not match:
            return None
        return match.group(1).strip() or None

    def find_block_loose(self, raw_text: str, register: Register) -> Optional[str]:
        """Loose match: the label, an optional colon, then the rest of the text."""
        match = self._loose_pattern(register).search(raw_text)
        if not match:
            return None
        return match.group(1).strip() or None

    def extract_segments(self, block: str) -> List[SentenceSegment]:
        """All ``<sN>...</sN>`` spans in order of appearance."""
        return [
            SentenceSegment(index=int(match.group(1)), text=match.group(2))
            for match in self.SENTENCE_PATTERN.finditer(block)
            if int(match.group(1)) > 0
        ]

    def build_register_text(self, register: Register, block: str) -> RegisterText:
        return RegisterText(
            language=register,
            raw_block=block,
            segments=tuple(self.extract_segments(block)),
        )

    def _strict_pattern(self, register: Register) -> re.Pattern:
        info = get_register_info(register)
        return re.compile(
            rf"(?:^|\n)[ \t]*{re.escape(info.label)}(?:[ \t]*\([^)\n]*\))?[ \t]*:"
            rf"(.*?)(?={self.NEXT_HEADER}|\Z)",
            re.DOTALL,
        )

    def _loose_pattern(self, register: Register) -> re.Pattern:
        info = get_register_info(register)
        return re.compile(
            rf"(?<![A-Za-z]){re.escape(info.label)}(?![A-Za-z]):?(.*)",
            re.DOTALL | re.IGNORECASE,
        )
