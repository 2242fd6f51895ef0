"""Generator exchange models.

This module defines the provider-agnostic events yielded by a generator
exchange, and the options a caller passes to start one.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .request import ModelHint

EventType = Literal["system", "partial", "assistant", "result"]


class ContentBlock(BaseModel):
    """One block of assistant content."""

    type: str = Field(default="text", description="Block type, e.g. 'text'")
    text: Optional[str] = None


class GenerationEvent(BaseModel):
    """A single event in a streamed generator exchange.

    - ``result``: the final result; ``result`` holds the full text
    - ``assistant``: an assistant-authored message; ``content`` holds text
    - ``partial``: an incremental delta, informational only
    - ``system``: session bookkeeping, informational only
    """

    type: EventType
    result: Optional[str] = None
    content: Union[str, List[ContentBlock], None] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def assistant_text(self) -> Optional[str]:
        """First non-empty text carried by an assistant event."""
        if self.type != "assistant" or self.content is None:
            return None
        if isinstance(self.content, str):
            return self.content or None
        for block in self.content:
            if block.type == "text" and block.text:
                return block.text
        return None


class ExchangeOptions(BaseModel):
    """Options for one generator exchange."""

    model_config = ConfigDict(protected_namespaces=())

    system_prompt: str = ""
    model_hint: ModelHint = ModelHint.DEFAULT
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
