import time

from shiritori_search.app.data.word_lists import WordListRepository
from shiritori_search.core import (
    CostModel,
    SearchConstraints,
    build_index,
    search_exact,
    search_shortest,
)


def test_shortest_chain_between_units(sample_index):
    constraints = SearchConstraints(start_unit="ね", end_unit="ぬ")
    assert search_shortest(sample_index, constraints) == [["ねこ", "こい", "いぬ"]]


def test_single_word_is_checked_first(sample_index):
    constraints = SearchConstraints(start_unit="こ", end_unit="い")
    assert search_shortest(sample_index, constraints) == [["こい"]]


def test_unreachable_end_returns_nothing(sample_index):
    constraints = SearchConstraints(start_unit="ね", end_unit="ね")
    assert search_shortest(sample_index, constraints) == []


def test_every_tied_chain_is_reported():
    index = build_index(["あか", "あき", "かた", "きた", "たう"])
    constraints = SearchConstraints(start_unit="あ", end_unit="た")

    assert search_shortest(index, constraints) == [["あか", "かた"], ["あき", "きた"]]


def test_cost_models_disagree_on_long_words():
    index = build_index(["あかかかか", "かく", "あい", "いう", "うく"])
    constraints = SearchConstraints(start_unit="あ", end_unit="く")

    assert search_shortest(index, constraints) == [["あかかかか", "かく"]]
    assert search_shortest(index, constraints, CostModel.CHARACTERS) == [
        ["あい", "いう", "うく"]
    ]
    assert search_shortest(index, constraints, "characters") == [["あい", "いう", "うく"]]


def test_substring_conditions_apply_to_the_whole_chain():
    index = build_index(["あかかかか", "かく", "あい", "いう", "うく"])

    required = SearchConstraints(start_unit="あ", end_unit="く", required=["い"])
    excluded = SearchConstraints(start_unit="あ", end_unit="く", excluded=["か"])

    assert search_shortest(index, required) == [["あい", "いう", "うく"]]
    assert search_shortest(index, excluded) == [["あい", "いう", "うく"]]


def test_dead_word_stops_expansion():
    index = build_index(["あん", "んく"])
    assert search_shortest(index, SearchConstraints(start_unit="あ", end_unit="く")) == []


def test_shortest_agrees_with_exhaustive_search(sample_index):
    shortest = search_shortest(sample_index, SearchConstraints(start_unit="ね", end_unit="ま"))
    exact = search_exact(
        sample_index, SearchConstraints(start_unit="ね", end_unit="ま", length=4)
    )

    assert shortest == exact == [["ねこ", "こい", "いぬ", "ぬま"]]
    for length in range(1, 4):
        assert search_exact(
            sample_index, SearchConstraints(start_unit="ね", end_unit="ま", length=length)
        ) == []


def test_required_text_keeps_longer_detours():
    index = build_index(["あい", "いう", "あか", "かい", "うえ"])
    constraints = SearchConstraints(start_unit="あ", end_unit="え", required=["か"])

    expected = [["あか", "かい", "いう", "うえ"]]
    assert search_shortest(index, constraints) == expected
    assert search_shortest(index, constraints, CostModel.CHARACTERS) == expected


def test_unsatisfiable_required_text_finishes_on_real_word_lists():
    index = WordListRepository().build_context().index_for("countries")
    constraints = SearchConstraints(start_unit="ア", end_unit="ア", required=("ヴヴヴ",))

    started = time.perf_counter()
    assert search_shortest(index, constraints) == []
    assert search_shortest(index, constraints, CostModel.CHARACTERS) == []
    assert time.perf_counter() - started < 10
