import pytest

from shiritori_search.app.data.word_lists import (
    WordListRepository,
    merge_unique,
    read_word_file,
)


@pytest.fixture
def words_dir(tmp_path):
    (tmp_path / "animals.txt").write_text("\ufeffねこ\n\n こい \nいぬ\n", encoding="utf-8")
    (tmp_path / "places.txt").write_text("いぬ\nぬま\n", encoding="utf-8")
    return tmp_path


def test_read_word_file_strips_blank_lines_and_bom(words_dir):
    assert read_word_file(words_dir / "animals.txt") == ["ねこ", "こい", "いぬ"]


def test_merge_unique_keeps_first_occurrence():
    assert merge_unique([["a", "b"], ["b", "c", "a"]]) == ["a", "b", "c"]


def test_repository_builds_unions(words_dir):
    repository = WordListRepository(
        words_dir,
        sources={"animals": "animals.txt", "places": "places.txt"},
        unions={"everything": ("animals", "places")},
    )

    collections = repository.load_collections()
    assert collections["everything"] == ["ねこ", "こい", "いぬ", "ぬま"]

    context = repository.build_context()
    assert context.names() == ("animals", "places", "everything")
    assert len(context.index_for("everything")) == 4


def test_missing_file_is_reported(words_dir):
    repository = WordListRepository(words_dir, sources={"missing": "missing.txt"}, unions={})

    with pytest.raises(OSError):
        repository.load_collections()


def test_union_with_unknown_member(words_dir):
    repository = WordListRepository(
        words_dir,
        sources={"animals": "animals.txt"},
        unions={"everything": ("animals", "plants")},
    )

    with pytest.raises(ValueError):
        repository.load_collections()


def test_bundled_word_lists():
    repository = WordListRepository()
    collections = repository.load_collections()

    assert set(collections) == {"countries", "capitals", "countries_capitals"}
    combined = set(collections["countries"]) | set(collections["capitals"])
    assert len(collections["countries_capitals"]) == len(combined)
    assert all(word for words in collections.values() for word in words)
