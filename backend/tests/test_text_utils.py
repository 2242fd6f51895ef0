from triglot.utils.text import count_tagged_sentences, safe_truncate


def test_safe_truncate_short_text_unchanged():
    assert safe_truncate("学而时习之", 100) == "学而时习之"


def test_safe_truncate_breaks_on_punctuation():
    text = "学而时习之，不亦说乎？有朋自远方来，不亦乐乎？"
    preview = safe_truncate(text, 12)
    assert preview.endswith("...")
    assert preview[:-3] == "学而时习之，不亦说乎？"


def test_count_tagged_sentences():
    assert count_tagged_sentences("<s1>a</s1><s2>b\nc</s2><s3>d</s4>") == 2
    assert count_tagged_sentences("") == 0
