"""Translation API routes."""

import logging
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from triglot.api.dependencies import OptionalAuth, Pipeline
from triglot.api.errors import error_response, failure_response, MESSAGES
from triglot.core.translation.errors import (
    ErrorCategory,
    GenerationFailure,
    ValidationError,
)
from triglot.core.translation.languages import Register
from triglot.core.translation.models import (
    ConversationTurn,
    QueryRequest,
    TranslationRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class SegmentAndTranslateRequest(BaseModel):
    """Request to segment and translate text."""

    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    input_language: Optional[Register] = Field(default=None, alias="inputLanguage")
    output_languages: Optional[List[Register]] = Field(default=None, alias="outputLanguages")
    model: Optional[str] = None  # "default" | "fast" (legacy: "opus" | "sonnet")

    def to_request(self) -> TranslationRequest:
        """Convert to the pipeline request.

        Raises:
            ValueError: If the model hint is not recognised
        """
        return TranslationRequest(
            source_text=self.text or "",
            input_register=self.input_language,
            output_registers=tuple(self.output_languages or ()),
            model_hint=self.model,
        )


class ConversationMessage(BaseModel):
    """A prior turn supplied by the client."""

    role: str
    content: str


class QueryClaudeRequest(BaseModel):
    """Request to ask a question about highlighted text."""

    model_config = ConfigDict(populate_by_name=True)

    original_text: Optional[str] = Field(default=None, alias="originalText")
    highlighted_sentence: Optional[str] = Field(default=None, alias="highlightedSentence")
    user_question: Optional[str] = Field(default=None, alias="userQuestion")
    conversation_history: Optional[List[ConversationMessage]] = Field(
        default=None, alias="conversationHistory"
    )
    model: Optional[str] = None

    def to_request(self) -> QueryRequest:
        """Convert to the pipeline request.

        Raises:
            ValueError: If the model hint is not recognised
        """
        history = tuple(
            ConversationTurn(
                role="user" if message.role == "user" else "assistant",
                content=message.content,
            )
            for message in self.conversation_history or ()
        )
        return QueryRequest(
            original_text=self.original_text or "",
            highlighted_excerpt=self.highlighted_sentence or "",
            question=self.user_question or "",
            history=history,
            model_hint=self.model,
        )


class QueryClaudeResponse(BaseModel):
    """Answer to a follow-up question."""

    response: str


@router.post("/segment-and-translate")
async def segment_and_translate(
    body: SegmentAndTranslateRequest,
    pipeline: Pipeline,
    _auth: OptionalAuth,
):
    """Segment text into tagged sentences and translate it.

    Returns the original and every requested translation as tagged blocks.
    A register the model did not produce is returned with empty text.
    """
    try:
        request = body.to_request()
    except ValueError as e:
        return error_response(400, ErrorCategory.VALIDATION, f"Invalid model: {e}")

    try:
        result = await pipeline.translate(request)
    except ValidationError as e:
        return error_response(400, ErrorCategory.VALIDATION, str(e))
    except GenerationFailure as e:
        logger.error(
            "Translation error: %s (input=%s, outputs=%s, model=%s, textLength=%d)",
            e,
            body.input_language,
            body.output_languages,
            body.model,
            len(body.text or ""),
        )
        return failure_response(e)
    except Exception as e:
        logger.exception("Unexpected translation error")
        return error_response(
            500,
            ErrorCategory.GENERATION_FAILED,
            f"{MESSAGES[ErrorCategory.GENERATION_FAILED]} {e}",
        )

    return result.to_response()


@router.post("/query-claude", response_model=QueryClaudeResponse)
@router.post("/query", response_model=QueryClaudeResponse)
async def query_claude(
    body: QueryClaudeRequest,
    pipeline: Pipeline,
    _auth: OptionalAuth,
):
    """Answer a question about a highlighted sentence in its document."""
    try:
        request = body.to_request()
    except ValueError as e:
        return error_response(400, ErrorCategory.VALIDATION, f"Invalid model: {e}")

    try:
        answer = await pipeline.query(request)
    except ValidationError as e:
        return error_response(400, ErrorCategory.VALIDATION, str(e))
    except Exception as e:
        logger.error("Query error: %s", e)
        return error_response(500, ErrorCategory.QUERY_FAILED, str(e))

    return QueryClaudeResponse(response=answer)
