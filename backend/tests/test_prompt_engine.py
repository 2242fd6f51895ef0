import re

from triglot.core.translation.languages import Register
from triglot.core.translation.models import ConversationTurn, QueryRequest, TranslationRequest
from triglot.core.translation.pipeline import PromptEngine


def make_request(**overrides) -> TranslationRequest:
    values = dict(
        source_text="学而时习之，不亦说乎？",
        input_register=Register.CLASSICAL,
        output_registers=(Register.MODERN, Register.PLAIN),
    )
    values.update(overrides)
    return TranslationRequest(**values)


def test_compose_is_deterministic():
    first = PromptEngine.compose(make_request())
    second = PromptEngine.compose(make_request())
    assert first == second
    assert first.instruction_text == second.instruction_text
    assert first.system_preamble == second.system_preamble


def test_source_text_preserved_verbatim_with_line_breaks():
    text = "To be, or not to be,\nthat is the question:\r\n  Whether 'tis nobler\n\n"
    plan = PromptEngine.compose(make_request(source_text=text, input_register=Register.PLAIN))
    assert plan.instruction_text.endswith(text)
    assert text in plan.instruction_text


def test_instruction_section_order():
    plan = PromptEngine.compose(make_request())
    text = plan.instruction_text
    role = text.index("expert translator")
    rules = text.index("IMPORTANT RULES:")
    example = text.index("Your output must be EXACTLY in this format:")
    source = text.index("Text to translate:")
    assert role < rules < example < source


def test_rule_count_between_five_and_seven():
    for inputs, outputs in [
        (Register.PLAIN, (Register.MODERN,)),
        (Register.CLASSICAL, (Register.MODERN, Register.PLAIN)),
        (Register.PLAIN, (Register.PLAIN,)),
    ]:
        plan = PromptEngine.compose(make_request(input_register=inputs, output_registers=outputs))
        rules = re.findall(r"^\d+\. ", plan.instruction_text, flags=re.MULTILINE)
        assert 5 <= len(rules) <= 7


def test_format_example_follows_output_order():
    plan = PromptEngine.compose(
        make_request(
            input_register=Register.PLAIN,
            output_registers=(Register.CLASSICAL, Register.MODERN),
        )
    )
    text = plan.instruction_text
    english = text.index("ENGLISH:\n<s1>")
    ancient = text.index("ANCIENT (文言文):\n<s1>")
    modern = text.index("MODERN:\n<s1>")
    assert english < ancient < modern

    reversed_plan = PromptEngine.compose(
        make_request(
            input_register=Register.PLAIN,
            output_registers=(Register.MODERN, Register.CLASSICAL),
        )
    )
    text = reversed_plan.instruction_text
    assert text.index("MODERN:\n<s1>") < text.index("ANCIENT (文言文):\n<s1>")


def test_system_preamble_per_input_register_mentions_particles():
    preambles = {
        register: PromptEngine.compose(
            make_request(input_register=register, output_registers=(Register.CLASSICAL,))
        ).system_preamble
        for register in Register
    }
    assert len(set(preambles.values())) == 3
    for preamble in preambles.values():
        assert "文言文" in preamble
        assert "之" in preamble


def test_query_prompt_embeds_excerpt_history_and_question():
    request = QueryRequest(
        original_text="学而时习之，不亦说乎？",
        highlighted_excerpt="学而时习之",
        question="What does 习 mean here?",
        history=(
            ConversationTurn(role="user", content="Who wrote this?"),
            ConversationTurn(role="assistant", content="Confucius' disciples."),
        ),
    )
    plan = PromptEngine.compose_query(request)
    text = plan.instruction_text

    assert "<original_text>\n学而时习之，不亦说乎？\n</original_text>" in text
    assert "<highlighted_sentence>学而时习之</highlighted_sentence>" in text
    assert "User: Who wrote this?\n\nAssistant: Confucius' disciples.\n\n" in text
    assert text.index("Previous conversation:") < text.index("Current question:")
    assert text.index("Current question:") < text.index("<user_question>")
    assert plan.system_preamble == PromptEngine.QUERY_SYSTEM_PREAMBLE


def test_query_prompt_without_history_has_no_conversation_block():
    request = QueryRequest(original_text="a", highlighted_excerpt="b", question="c")
    plan = PromptEngine.compose_query(request)
    assert "Previous conversation" not in plan.instruction_text


def test_to_messages_puts_system_first():
    messages = PromptEngine.compose(make_request()).to_messages()
    assert [message["role"] for message in messages] == ["system", "user"]


def test_estimate_tokens_grows_with_text():
    short = PromptEngine.compose(make_request(source_text="学而时习之"))
    long = PromptEngine.compose(make_request(source_text="学而时习之" * 200))
    assert 0 < short.estimate_tokens() < long.estimate_tokens()
