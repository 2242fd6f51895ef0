from conftest import ANALECTS_OUTPUT
from triglot.core.translation.languages import Register
from triglot.core.translation.pipeline import ResponseAligner

aligner = ResponseAligner()


def test_well_formed_blocks():
    result = aligner.align(
        ANALECTS_OUTPUT, Register.CLASSICAL, [Register.MODERN, Register.PLAIN]
    )

    assert result.original.raw_block == "<s1>学而时习之</s1>"
    assert result.original.indices == [1]
    assert result.original.language is Register.CLASSICAL
    assert result.translations[Register.MODERN].language is Register.MODERN
    assert result.translations[Register.MODERN].raw_block == "<s1>学习并时常复习它</s1>"
    assert result.translations[Register.PLAIN].segments[0].text == "Learn and practice it often"
    assert result.missing_registers() == []
    assert result.segment_count_mismatches() == {}


def test_classical_header_with_note_and_blank_lines():
    raw = (
        "ENGLISH:\n<s1>Spring has come.</s1><s2>Flowers bloom.</s2>\n\n"
        "ANCIENT (文言文):\n<s1>春至矣。</s1><s2>花開焉。</s2>\n\n"
        "MODERN:\n<s1>春天来了。</s1><s2>花开了。</s2>\n"
    )
    result = aligner.align(raw, Register.PLAIN, [Register.CLASSICAL, Register.MODERN])

    assert result.original.indices == [1, 2]
    assert result.translations[Register.CLASSICAL].raw_block == "<s1>春至矣。</s1><s2>花開焉。</s2>"
    assert result.translations[Register.MODERN].indices == [1, 2]


def test_segment_indices_follow_tags_with_gaps():
    raw = "MODERN:\n<s1>一</s1><s3>三</s3><s7>七</s7>\nENGLISH:\n<s1>one</s1>"
    result = aligner.align(raw, Register.MODERN, [Register.PLAIN])

    assert result.original.indices == [1, 3, 7]
    assert [segment.text for segment in result.original.segments] == ["一", "三", "七"]
    assert result.segment_count_mismatches() == {Register.PLAIN: (3, 1)}


def test_sentences_keep_internal_line_breaks():
    raw = (
        "ENGLISH:\n<s1>To be, or not to be,\nthat is the question:</s1>"
        "<s2>Whether 'tis nobler\nin the mind</s2>\n"
        "MODERN:\n<s1>生存还是毁灭，\n这是个问题：</s1><s2>是否更高贵</s2>"
    )
    result = aligner.align(raw, Register.PLAIN, [Register.MODERN])

    first = result.original.segments[0]
    assert first.text == "To be, or not to be,\nthat is the question:"
    assert result.translations[Register.MODERN].segments[0].text == "生存还是毁灭，\n这是个问题："


def test_mismatched_tags_are_not_matched():
    raw = "MODERN:\n<s1>一</s2><s2>二</s2>\nENGLISH:\n<S1>upper</S1>"
    result = aligner.align(raw, Register.MODERN, [Register.PLAIN])

    assert result.original.indices == [2]
    assert result.translations[Register.PLAIN].segments == ()
    assert result.translations[Register.PLAIN].raw_block == "<S1>upper</S1>"


def test_fallback_recovers_missing_register_without_touching_others():
    strict_only = "ANCIENT:\n<s1>古</s1>\nMODERN:\n<s1>今</s1>"
    raw = "English version <s1>Old</s1>\n" + strict_only

    baseline = aligner.align(strict_only, Register.CLASSICAL, [Register.MODERN])
    result = aligner.align(raw, Register.CLASSICAL, [Register.MODERN, Register.PLAIN])

    english = result.translations[Register.PLAIN]
    assert english.segments[0].text == "Old"
    assert result.translations[Register.MODERN] == baseline.translations[Register.MODERN]
    assert result.original == baseline.original


def test_fallback_with_colon_label():
    raw = "MODERN:\n<s1>你好</s1>\n\nHere is the translation. English: <s1>Hello</s1>"
    result = aligner.align(raw, Register.MODERN, [Register.PLAIN])

    assert result.translations[Register.PLAIN].raw_block == "<s1>Hello</s1>"
    # The original block ends at end of text, so it swallows the loose line
    assert result.original.indices[0] == 1


def test_fallback_finds_label_directly_after_chinese_text():
    raw = "MODERN:\n<s1>你好</s1>\n以下是译文English:<s1>Hello</s1>"
    result = aligner.align(raw, Register.MODERN, [Register.PLAIN])

    assert result.translations[Register.PLAIN].raw_block == "<s1>Hello</s1>"
    assert result.translations[Register.PLAIN].indices == [1]


def test_fallback_ignores_label_inside_a_longer_word():
    raw = "MODERN:\n<s1>你好</s1>\nThe Englishman: <s1>Hello</s1>"
    result = aligner.align(raw, Register.MODERN, [Register.PLAIN])

    assert result.missing_registers() == [Register.PLAIN]


def test_missing_register_is_left_empty():
    raw = "MODERN:\n<s1>你好</s1>"
    result = aligner.align(raw, Register.MODERN, [Register.CLASSICAL])

    assert result.translations[Register.CLASSICAL].raw_block == ""
    assert result.translations[Register.CLASSICAL].segments == ()
    assert result.missing_registers() == [Register.CLASSICAL]


def test_missing_original_block_is_empty():
    raw = "ENGLISH:\n<s1>Hello</s1>"
    result = aligner.align(raw, Register.MODERN, [Register.PLAIN])

    assert result.original.raw_block == ""
    assert result.translations[Register.PLAIN].raw_block == "<s1>Hello</s1>"


def test_block_without_tags_yields_no_segments():
    raw = "MODERN:\n你好。\nENGLISH:\nHello."
    result = aligner.align(raw, Register.MODERN, [Register.PLAIN])

    assert result.original.raw_block == "你好。"
    assert result.original.segments == ()
    assert result.translations[Register.PLAIN].raw_block == "Hello."


def test_empty_text_never_raises():
    result = aligner.align("", Register.MODERN, [Register.PLAIN, Register.CLASSICAL])

    assert result.original.raw_block == ""
    assert result.missing_registers() == [Register.PLAIN, Register.CLASSICAL]


def test_to_response_shape():
    result = aligner.align(
        ANALECTS_OUTPUT, Register.CLASSICAL, [Register.MODERN, Register.PLAIN]
    )
    assert result.to_response() == {
        "original": {"language": "ancient", "text": "<s1>学而时习之</s1>"},
        "translations": {
            "modern": "<s1>学习并时常复习它</s1>",
            "english": "<s1>Learn and practice it often</s1>",
        },
    }
