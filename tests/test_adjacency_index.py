from dataclasses import FrozenInstanceError

import pytest

from shiritori_search.core import DEAD, EmptyInput, build_index, head_unit, tail_unit


def test_buckets_cover_every_word_once(sample_index):
    from_heads = [word for bucket in sample_index.by_head.values() for word in bucket]
    from_tails = [word for bucket in sample_index.by_tail.values() for word in bucket]

    assert sorted(from_heads) == sorted(sample_index.words)
    assert sorted(from_tails) == sorted(sample_index.words)
    for unit, bucket in sample_index.by_head.items():
        assert all(head_unit(word) == unit for word in bucket)
    for unit, bucket in sample_index.by_tail.items():
        assert all(tail_unit(word) == unit for word in bucket)


def test_buckets_follow_collation_order():
    index = build_index(["カナダ", "ガーナ", "カタール"], name="countries")

    assert index.name == "countries"
    assert index.words == ("カタール", "カナダ", "ガーナ")
    assert index.by_head["カ"] == ("カタール", "カナダ")
    assert index.words_starting_with("ガ") == ("ガーナ",)
    assert index.words_ending_with("ナ") == ("ガーナ",)


def test_duplicates_collapse_and_build_is_deterministic():
    first = build_index(["ねこ", "こい", "ねこ"])
    second = build_index(["こい", "ねこ"])

    assert first.words == ("こい", "ねこ")
    assert first == second
    assert len(first) == 2


def test_dead_words_are_grouped_under_dead():
    index = build_index(["にほん", "ねこ"])

    assert index.words_ending_with(DEAD) == ("にほん",)
    assert index.words_starting_with(DEAD) == ()


def test_membership_and_iteration(sample_index):
    assert "ねこ" in sample_index
    assert "ねずみ" not in sample_index
    assert "" not in sample_index
    assert None not in sample_index
    assert list(sample_index) == list(sample_index.words)
    assert set(sample_index.head_units()) == {"い", "こ", "ぬ", "ね"}


def test_index_is_read_only(sample_index):
    with pytest.raises(FrozenInstanceError):
        sample_index.words = ()
    with pytest.raises(TypeError):
        sample_index.by_head["ね"] = ()


def test_empty_word_is_rejected():
    with pytest.raises(EmptyInput):
        build_index(["ねこ", ""])
