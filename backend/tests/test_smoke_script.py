from scripts.smoke_all_combinations import SAMPLES, combinations


def test_every_input_paired_with_each_output_subset():
    pairs = list(combinations())

    assert len(pairs) == 9
    assert ("ancient", ["modern", "english"]) in pairs
    for source, targets in pairs:
        assert source in SAMPLES
        assert targets and source not in targets
