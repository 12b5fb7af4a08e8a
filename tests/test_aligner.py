import random

import pytest

from assessment_core.alignment import align_sequences
from assessment_core.models import AlignmentOp


def _assert_partition(ref, hyp, blocks):
    ref_pos = hyp_pos = 0
    for b in blocks:
        assert b.ref_start == ref_pos
        assert b.hyp_start == hyp_pos
        assert b.ref_end >= b.ref_start and b.hyp_end >= b.hyp_start
        if b.op is AlignmentOp.EQUAL:
            assert list(ref[b.ref_start:b.ref_end]) == list(hyp[b.hyp_start:b.hyp_end])
        elif b.op is AlignmentOp.INSERT:
            assert b.ref_start == b.ref_end and b.hyp_end > b.hyp_start
        elif b.op is AlignmentOp.DELETE:
            assert b.hyp_start == b.hyp_end and b.ref_end > b.ref_start
        else:
            assert b.ref_end > b.ref_start and b.hyp_end > b.hyp_start
        ref_pos, hyp_pos = b.ref_end, b.hyp_end
    assert ref_pos == len(ref)
    assert hyp_pos == len(hyp)


def test_identical_sequences_are_one_equal_block():
    seq = ["the", "quick", "brown", "fox"]
    blocks = align_sequences(seq, seq)
    assert len(blocks) == 1
    assert blocks[0].op is AlignmentOp.EQUAL
    assert (blocks[0].ref_start, blocks[0].ref_end, blocks[0].hyp_start, blocks[0].hyp_end) == (0, 4, 0, 4)


def test_missing_word_is_delete():
    blocks = align_sequences(["the", "quick", "brown", "fox"], ["the", "brown", "fox"])
    assert [b.op for b in blocks] == [AlignmentOp.EQUAL, AlignmentOp.DELETE, AlignmentOp.EQUAL]
    assert (blocks[1].ref_start, blocks[1].ref_end) == (1, 2)


def test_extra_word_is_insert():
    blocks = align_sequences(["the", "quick", "brown", "fox"], ["the", "quick", "very", "brown", "fox"])
    assert [b.op for b in blocks] == [AlignmentOp.EQUAL, AlignmentOp.INSERT, AlignmentOp.EQUAL]
    assert (blocks[1].hyp_start, blocks[1].hyp_end) == (2, 3)


def test_wrong_word_is_replace():
    blocks = align_sequences(["the", "quick", "fox"], ["the", "quack", "fox"])
    assert [b.op for b in blocks] == [AlignmentOp.EQUAL, AlignmentOp.REPLACE, AlignmentOp.EQUAL]


def test_empty_inputs():
    assert align_sequences([], []) == []
    only_hyp = align_sequences([], ["a", "b"])
    assert [b.op for b in only_hyp] == [AlignmentOp.INSERT]
    only_ref = align_sequences(["a", "b"], [])
    assert [b.op for b in only_ref] == [AlignmentOp.DELETE]


def test_frequent_words_still_match_in_long_transcripts():
    ref = ["the", "cat"] * 150
    blocks = align_sequences(ref, list(ref))
    assert [b.op for b in blocks] == [AlignmentOp.EQUAL]


@pytest.mark.parametrize("seed", range(5))
def test_blocks_partition_both_sequences(seed):
    rng = random.Random(seed)
    vocab = ["a", "b", "c", "d", "e"]
    for _ in range(100):
        ref = [rng.choice(vocab) for _ in range(rng.randint(0, 12))]
        hyp = [rng.choice(vocab) for _ in range(rng.randint(0, 12))]
        _assert_partition(ref, hyp, align_sequences(ref, hyp))
