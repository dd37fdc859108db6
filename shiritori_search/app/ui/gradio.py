"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, Tuple

import gradio as gr

from shiritori_search.core import SearchConstraints, ShiritoriSearchError

from ..services.result_formatter import ChainResultFormatter
from ..services.search_service import SHORTEST, ShiritoriSearchService

_TERM_SEPARATORS = re.compile(r"[\s,、，]+")


def split_terms(value: Optional[str]) -> List[str]:
    """Split a free-text field into terms; separators are spaces and commas."""

    if not value:
        return []
    return [term for term in _TERM_SEPARATORS.split(value.strip()) if term]


def parse_length_sets(value: Optional[str]) -> List[List[int]]:
    """Parse ``"2 3 | 4"`` into ``[[2, 3], [4]]`` (``|`` separates positions)."""

    positions: List[List[int]] = []
    for chunk in (value or "").split("|"):
        terms = split_terms(chunk)
        if not terms:
            continue
        try:
            positions.append([int(term) for term in terms])
        except ValueError:
            raise ValueError(f"word lengths must be integers: {chunk.strip()!r}") from None
    if not positions:
        raise ValueError("enter at least one word length")
    return positions


def as_count(value: object, label: str) -> int:
    """Read a whole number from a Gradio Number field, which may be cleared."""

    if value is None or value == "":
        raise ValueError(f"{label} is required")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a whole number") from None


def _guarded(
    run: Callable[[], str],
    service: ShiritoriSearchService,
    formatter: ChainResultFormatter,
) -> Tuple[str, str]:
    try:
        rendered = run()
    except (ShiritoriSearchError, ValueError, TimeoutError) as exc:
        return f"⚠️ {exc}", formatter.format_telemetry(service.get_latest_telemetry())
    return rendered, formatter.format_telemetry(service.get_latest_telemetry())


def create_interface(
    search_service: ShiritoriSearchService,
    formatter: Optional[ChainResultFormatter] = None,
) -> gr.Blocks:
    """Construct the Gradio Blocks UI with one tab per search mode."""

    formatter = formatter or ChainResultFormatter()
    collections = list(search_service.collection_names())
    default_collection = collections[0] if collections else None

    def substring_options(required: str, exactly: bool, excluded: str, no_pre: bool, no_suc: bool):
        return {
            "required": split_terms(required),
            "count_mode": "exactly" if exactly else "at_least",
            "excluded": split_terms(excluded),
            "no_preceding": no_pre,
            "no_succeeding": no_suc,
        }

    def run_shiritori(
        collection: str,
        first_char: str,
        last_char: str,
        shortest: bool,
        word_count: float,
        by_characters: bool,
        required: str,
        exactly: bool,
        excluded: str,
        no_pre: bool,
        no_suc: bool,
    ):
        def run() -> str:
            response = search_service.shiritori(
                collection,
                first_char or None,
                last_char or None,
                SHORTEST if shortest else as_count(word_count, "Words in chain"),
                cost_model="characters" if by_characters else "words",
                **substring_options(required, exactly, excluded, no_pre, no_suc),
            )
            boundary = "end" if not (last_char or "").strip() else "start"
            return formatter.format_response(response, boundary=boundary)

        return _guarded(run, search_service, formatter)

    def run_lengths(
        collection: str,
        lengths: str,
        permute: bool,
        required: str,
        exactly: bool,
        excluded: str,
        no_pre: bool,
        no_suc: bool,
    ):
        def run() -> str:
            response = search_service.word_count_shiritori(
                collection,
                parse_length_sets(lengths),
                permute,
                **substring_options(required, exactly, excluded, no_pre, no_suc),
            )
            return formatter.format_response(response)

        return _guarded(run, search_service, formatter)

    def run_wildcard_chain(collection: str, start: str, end: str, length: float):
        def run() -> str:
            chains = search_service.wildcard_anchored(
                collection, start, end or None, as_count(length, "Words in chain")
            )
            return formatter.format_chains(chains)

        return _guarded(run, search_service, formatter)

    def run_loop(collection: str, pattern: str, excluded: str):
        def run() -> str:
            chains = search_service.loop(
                collection,
                pattern,
                None if not excluded else _excluded_only(excluded),
            )
            return formatter.format_chains(chains, title="Loops")

        return _guarded(run, search_service, formatter)

    def run_lookup(collection: str, text: str, as_wildcard: bool):
        def run() -> str:
            if as_wildcard:
                words = search_service.wildcard_lookup(collection, text)
            else:
                words = search_service.substring_lookup(collection, text)
            return formatter.format_words(words)

        return _guarded(run, search_service, formatter)

    def collection_picker() -> gr.Dropdown:
        return gr.Dropdown(choices=collections, value=default_collection, label="Word list")

    def substring_inputs() -> Sequence[gr.components.Component]:
        with gr.Accordion("Substring and boundary conditions", open=False):
            required = gr.Textbox(label="Must contain", placeholder="e.g. ア, ン ン")
            exactly = gr.Checkbox(label="Exactly that many times", value=False)
            excluded = gr.Textbox(label="Must not contain")
            with gr.Row():
                no_pre = gr.Checkbox(label="Nothing can come before", value=False)
                no_suc = gr.Checkbox(label="Nothing can come after", value=False)
        return [required, exactly, excluded, no_pre, no_suc]

    with gr.Blocks(title="Shiritori chain search") as interface:
        gr.Markdown("## しりとり検索\nSearch word chains where each word starts with the previous word's last kana.")
        activity_md = gr.Markdown()

        with gr.Tabs():
            with gr.Tab("Shiritori"):
                collection = collection_picker()
                with gr.Row():
                    first_char = gr.Textbox(label="First character", max_lines=1)
                    last_char = gr.Textbox(label="Last character", max_lines=1)
                with gr.Row():
                    shortest = gr.Checkbox(label="Shortest chain", value=False)
                    word_count = gr.Number(label="Words in chain", value=3, precision=0, minimum=1)
                    by_characters = gr.Checkbox(label="Shortest by characters", value=False)
                extra = substring_inputs()
                button = gr.Button("Search", variant="primary")
                results = gr.Markdown()
                button.click(
                    run_shiritori,
                    [collection, first_char, last_char, shortest, word_count, by_characters, *extra],
                    [results, activity_md],
                )

            with gr.Tab("Word lengths"):
                collection = collection_picker()
                lengths = gr.Textbox(
                    label="Lengths per word",
                    placeholder="2 3 | 4 | 3  (use | between words, spaces between options)",
                )
                permute = gr.Checkbox(label="Any word order", value=False)
                extra = substring_inputs()
                button = gr.Button("Search", variant="primary")
                results = gr.Markdown()
                button.click(
                    run_lengths,
                    [collection, lengths, permute, *extra],
                    [results, activity_md],
                )

            with gr.Tab("Wildcard chain"):
                collection = collection_picker()
                with gr.Row():
                    start_pattern = gr.Textbox(label="First word pattern", placeholder="○○ア")
                    end_pattern = gr.Textbox(label="Last word pattern (optional)")
                    length = gr.Number(label="Words in chain", value=2, precision=0, minimum=1)
                button = gr.Button("Search", variant="primary")
                results = gr.Markdown()
                button.click(
                    run_wildcard_chain,
                    [collection, start_pattern, end_pattern, length],
                    [results, activity_md],
                )

            with gr.Tab("Loop"):
                collection = collection_picker()
                pattern = gr.Textbox(label="Loop pattern", placeholder="○○○○○○○○")
                excluded = gr.Textbox(label="Must not contain")
                button = gr.Button("Search", variant="primary")
                results = gr.Markdown()
                button.click(run_loop, [collection, pattern, excluded], [results, activity_md])

            with gr.Tab("Lookup"):
                collection = collection_picker()
                text = gr.Textbox(label="Text or pattern")
                as_wildcard = gr.Checkbox(label="Treat ○ as a wildcard (whole word)", value=True)
                button = gr.Button("Search", variant="primary")
                results = gr.Markdown()
                button.click(run_lookup, [collection, text, as_wildcard], [results, activity_md])

    return interface


def _excluded_only(excluded: str) -> SearchConstraints:
    return SearchConstraints(excluded=tuple(split_terms(excluded)))


__all__ = ["as_count", "create_interface", "parse_length_sets", "split_terms"]
