"""Prompt engine for register translation.

This module provides the PromptEngine class that turns a translation request
into the instruction and system preamble sent to the generator, and builds the
simpler prompt used for follow-up questions.
"""

from typing import Dict, Sequence

from ..languages import Register, get_register_info
from ..models.prompt import PromptPlan
from ..models.request import ConversationTurn, QueryRequest, TranslationRequest


class PromptEngine:
    """Builds prompts for translation and follow-up questions.

    Every method is a pure function of its input: the same request always
    yields a byte-identical PromptPlan.
    """

    # System preamble per input register
    SYSTEM_PREAMBLES: Dict[Register, str] = {
        Register.CLASSICAL: (
            "You are an expert in Classical Chinese (文言文) literature and translation. "
            "Provide accurate translations that preserve cultural and historical context. "
            "When translating TO Ancient Chinese, use authentic classical grammar with "
            "particles like 之, 乎, 者, 也, 矣, 焉, 哉, 而, 於, 為, etc."
        ),
        Register.MODERN: (
            "You are an expert translator specializing in Modern Chinese. "
            "Provide natural, fluent translations. When translating TO Ancient Chinese "
            "(文言文), use authentic classical grammar and vocabulary with appropriate "
            "particles such as 之, 乎, 者, 也."
        ),
        Register.PLAIN: (
            "You are an expert translator from English. Provide accurate, culturally "
            "appropriate translations. When translating TO Ancient Chinese (文言文), use "
            "authentic classical grammar with particles like 之, 乎, 者, 也, etc."
        ),
    }

    QUERY_SYSTEM_PREAMBLE = (
        "You are an expert in linguistics, Classical Chinese literature, and translation. "
        "Provide insightful explanations that help users understand the text deeply "
        "across languages and cultures."
    )

    @classmethod
    def compose(cls, request: TranslationRequest) -> PromptPlan:
        """Build the prompt plan for a translation request.

        The instruction contains, in order: the role statement, the numbered
        formatting rules, a format example for the input register followed by
        every output register, and finally the source text verbatim.

        Args:
            request: Validated translation request

        Returns:
            PromptPlan ready for the invoker
        """
        source = get_register_info(request.input_register)

        sections = [
            f"You are an expert translator. Translate the following {source.name} text.",
            cls._build_rules(request),
            "Your output must be EXACTLY in this format:",
            cls._build_format_example(request),
            f"Text to translate:\n{request.source_text}",
        ]

        return PromptPlan(
            instruction_text="\n\n".join(sections),
            system_preamble=cls.SYSTEM_PREAMBLES[request.input_register],
        )

    @classmethod
    def compose_query(cls, request: QueryRequest) -> PromptPlan:
        """Build the single-block prompt for a follow-up question.

        Args:
            request: Follow-up question with its excerpt and prior turns

        Returns:
            PromptPlan with the question prompt and the Q&A system preamble
        """
        conversation = cls._render_history(request.history)

        instruction = (
            f"<original_text>\n{request.original_text}\n</original_text>\n\n"
            "Focus on this sentence/text: "
            f"<highlighted_sentence>{request.highlighted_excerpt}</highlighted_sentence>\n"
            f"{conversation}\n"
            f"Answer this question: <user_question>{request.question}</user_question>\n\n"
            "Please provide a detailed answer about the highlighted text in the context "
            "of the full document. Consider linguistic, cultural, and historical aspects "
            "as relevant. Use markdown formatting for better readability."
        )

        return PromptPlan(
            instruction_text=instruction,
            system_preamble=cls.QUERY_SYSTEM_PREAMBLE,
        )

    @classmethod
    def _build_rules(cls, request: TranslationRequest) -> str:
        """Numbered formatting rules, including one orthography rule per register."""
        rules = [
            "Split the text into logical sentences or phrases (use punctuation as guide)",
            "Mark each sentence with XML tags: <s1>, <s2>, <s3>, etc., starting at 1",
            "Maintain the SAME sentence numbers across all versions",
            "Translate with full context awareness - consider the whole text's meaning",
        ]

        involved = [request.input_register, *request.output_registers]
        for register in Register:
            if register in involved and register is not Register.PLAIN:
                rules.append(get_register_info(register).grammar_note)

        rules.append("Preserve the meaning and style appropriate to each target language")

        numbered = "\n".join(f"{i}. {rule}" for i, rule in enumerate(rules, start=1))
        return f"IMPORTANT RULES:\n{numbered}"

    @classmethod
    def _build_format_example(cls, request: TranslationRequest) -> str:
        source = get_register_info(request.input_register)
        blocks = [
            f"{source.header}:\n"
            f"<s1>first sentence in original {source.name}</s1>"
            "<s2>second sentence</s2>..."
        ]
        for register in request.output_registers:
            info = get_register_info(register)
            blocks.append(
                f"{info.header}:\n"
                f"<s1>{info.example_first}</s1><s2>{info.example_second}</s2>..."
            )
        return "\n\n".join(blocks)

    @staticmethod
    def _render_history(history: Sequence[ConversationTurn]) -> str:
        """Render prior turns as alternating role-labeled paragraphs."""
        if not history:
            return ""

        lines = ["\nPrevious conversation:\n"]
        for turn in history:
            role = "User" if turn.role == "user" else "Assistant"
            lines.append(f"{role}: {turn.content}\n\n")
        lines.append("Current question:\n")
        return "".join(lines)
