import gradio as gr
import pytest

from shiritori_search.app.app import ShiritoriApp
from shiritori_search.app.services.search_service import SHORTEST
from shiritori_search.app.services.result_formatter import ChainResultFormatter
from shiritori_search.app.ui.gradio import (
    _guarded,
    as_count,
    create_interface,
    parse_length_sets,
    split_terms,
)


@pytest.fixture
def words_dir(tmp_path):
    (tmp_path / "countries.txt").write_text("アメリカ\nカタール\nルーマニア\n", encoding="utf-8")
    (tmp_path / "capitals.txt").write_text("アテネ\nネピドー\n", encoding="utf-8")
    return tmp_path


def test_split_terms():
    assert split_terms("ア, ン　ン、イ") == ["ア", "ン", "ン", "イ"]
    assert split_terms("") == []
    assert split_terms(None) == []


def test_parse_length_sets():
    assert parse_length_sets("2 3 | 4") == [[2, 3], [4]]
    assert parse_length_sets("3|") == [[3]]
    with pytest.raises(ValueError):
        parse_length_sets("")
    with pytest.raises(ValueError):
        parse_length_sets("2 x")


def test_app_loads_word_lists(words_dir):
    app = ShiritoriApp(words_dir)

    assert app.search_service.collection_names() == (
        "countries",
        "capitals",
        "countries_capitals",
    )
    response = app.search_service.shiritori("countries", "ア", "ア", 3)
    assert response == {"results": [["アメリカ", "カタール", "ルーマニア"]]}

    response = app.search_service.shiritori("countries_capitals", "ア", "ド", SHORTEST)
    assert response == {"results": [["アテネ", "ネピドー"]]}


def test_concurrency_settings_from_environment(words_dir, monkeypatch):
    monkeypatch.setenv("SHIRITORI_MAX_CONCURRENT_SEARCHES", "2")
    monkeypatch.setenv("SHIRITORI_SEARCH_TIMEOUT", "0.5")

    app = ShiritoriApp(words_dir)
    assert app.search_service._search_semaphore is not None
    assert app.search_service._search_timeout == 0.5

    monkeypatch.setenv("SHIRITORI_MAX_CONCURRENT_SEARCHES", "many")
    with pytest.raises(ValueError):
        ShiritoriApp(words_dir)


def test_words_dir_from_environment(words_dir, monkeypatch):
    monkeypatch.setenv("SHIRITORI_WORDS_DIR", str(words_dir))

    app = ShiritoriApp()
    assert app.repository.words_dir == words_dir
    assert len(app.context.index_for("countries_capitals")) == 5


def test_interface_is_built(words_dir):
    app = ShiritoriApp(words_dir)
    interface = app.create_gradio_interface()

    assert isinstance(interface, gr.Blocks)
    assert isinstance(create_interface(app.search_service), gr.Blocks)


def test_cleared_number_field_is_reported(words_dir):
    app = ShiritoriApp(words_dir)

    assert as_count(3.0, "Words in chain") == 3
    with pytest.raises(ValueError):
        as_count(None, "Words in chain")
    with pytest.raises(ValueError):
        as_count("three", "Words in chain")

    rendered, _ = _guarded(
        lambda: str(as_count(None, "Words in chain")),
        app.search_service,
        ChainResultFormatter(),
    )
    assert rendered == "⚠️ Words in chain is required"
