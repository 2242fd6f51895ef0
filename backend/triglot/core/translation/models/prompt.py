"""Prompt plan models.

This module defines the fully resolved instruction that is handed to the
generator, independent of any provider's message format.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class PromptPlan(BaseModel):
    """Complete instruction ready for the generator.

    This is the output of the PromptEngine and input to the invoker. It is
    derived deterministically from the request it was built for.
    """

    model_config = ConfigDict(frozen=True)

    instruction_text: str = Field(..., description="User-facing instruction")
    system_preamble: str = Field(default="", description="System prompt")

    def to_messages(self) -> List[Dict[str, str]]:
        """Convert to OpenAI-style chat messages.

        Returns:
            List of message dicts with 'role' and 'content' keys
        """
        messages = []
        if self.system_preamble:
            messages.append({"role": "system", "content": self.system_preamble})
        messages.append({"role": "user", "content": self.instruction_text})
        return messages

    def estimate_tokens(self) -> int:
        """Estimate total input tokens.

        Uses a rough average of 3 characters per token for mixed
        Chinese/English text.
        """
        return (len(self.system_preamble) + len(self.instruction_text)) // 3
