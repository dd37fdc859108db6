import pytest

from shiritori_search.app.data.word_lists import WordListRepository
from shiritori_search.core import (
    Boundary,
    CountMode,
    SearchConstraints,
    build_index,
    count_by_boundary,
    search_exact,
    sort_chains,
)
from shiritori_search.core.normalizer import links


def test_fixed_start_chain(sample_index):
    constraints = SearchConstraints(start_unit="ね", length=3)
    assert search_exact(sample_index, constraints) == [["ねこ", "こい", "いぬ"]]


def test_excluded_text_removes_every_chain(sample_index):
    constraints = SearchConstraints(start_unit="ね", length=3, excluded=["ぬ"])
    assert search_exact(sample_index, constraints) == []


def test_repeated_searches_return_the_same_result(sample_index):
    constraints = SearchConstraints(length=2)
    assert search_exact(sample_index, constraints) == search_exact(sample_index, constraints)


def test_single_word_chains_are_sorted(sample_index):
    assert search_exact(sample_index, SearchConstraints(length=1)) == [
        ["いぬ"],
        ["こい"],
        ["ぬま"],
        ["ねこ"],
    ]


def test_chain_cannot_be_longer_than_the_collection(sample_index):
    assert search_exact(sample_index, SearchConstraints(length=4)) == [
        ["ねこ", "こい", "いぬ", "ぬま"]
    ]
    assert search_exact(sample_index, SearchConstraints(length=5)) == []


def test_end_unit(sample_index):
    constraints = SearchConstraints(end_unit="ぬ", length=2)
    assert search_exact(sample_index, constraints) == [["こい", "いぬ"]]


def test_boundary_flags(sample_index):
    closed = dict(no_preceding=True, no_succeeding=True)

    assert search_exact(sample_index, SearchConstraints(length=4, **closed)) == [
        ["ねこ", "こい", "いぬ", "ぬま"]
    ]
    assert search_exact(sample_index, SearchConstraints(length=3, **closed)) == []


def test_dead_word_ends_the_chain():
    index = build_index(["ねこ", "こりん", "んば"])

    assert search_exact(index, SearchConstraints(end_unit="ん", length=2)) == [["ねこ", "こりん"]]
    assert search_exact(index, SearchConstraints(length=3)) == []


def test_required_exactly(sample_index):
    constraints = SearchConstraints(
        length=2,
        required=["こ", "こ"],
        count_mode=CountMode.EXACTLY,
    )
    assert search_exact(sample_index, constraints) == [["ねこ", "こい"]]


def test_counts_by_boundary(sample_index):
    constraints = SearchConstraints(length=2)

    assert count_by_boundary(sample_index, constraints) == {"い": 1, "ぬ": 1, "ま": 1}
    assert count_by_boundary(sample_index, constraints, Boundary.START) == {
        "い": 1,
        "こ": 1,
        "ね": 1,
    }
    assert list(count_by_boundary(sample_index, constraints, "start")) == ["い", "こ", "ね"]


@pytest.mark.parametrize("length", [None, 0, -1, True])
def test_length_is_required(sample_index, length):
    with pytest.raises(ValueError):
        search_exact(sample_index, SearchConstraints(length=length))


def test_bundled_word_lists_yield_valid_chains():
    context = WordListRepository().build_context()
    index = context.index_for("countries")
    constraints = SearchConstraints(start_unit="ア", length=3)

    chains = search_exact(index, constraints)

    assert chains
    assert chains == sort_chains(chains)
    assert len({tuple(chain) for chain in chains}) == len(chains)
    for chain in chains:
        assert len(chain) == 3
        assert len(set(chain)) == 3
        assert all(word in index for word in chain)
        assert all(links(a, b) for a, b in zip(chain, chain[1:]))
        assert chain[0].startswith("ア")
    assert sum(count_by_boundary(index, constraints).values()) == len(chains)
