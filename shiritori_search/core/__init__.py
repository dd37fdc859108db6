"""Chain-search engine for shiritori word chains."""

from .adjacency import AdjacencyIndex, build_index
from .collation import collation_key, sort_chains, sort_words
from .constraints import (
    Boundary,
    CostModel,
    CountMode,
    SearchConstraints,
    count_occurrences,
    excluded_satisfied,
    no_preceding_satisfied,
    no_succeeding_satisfied,
    required_satisfied,
)
from .context import SearchContext
from .errors import EmptyInput, InvalidPattern, ShiritoriSearchError, UnknownCollection
from .exhaustive import count_by_boundary, search_exact
from .loop import search_loop
from .multi_length import search_multi_length
from .normalizer import DEAD, head_unit, tail_unit, terminal_unit
from .pattern import WildcardMatcher, compile_pattern
from .shortest import search_shortest
from .wildcard import search_wildcard_anchored

__all__ = [
    "AdjacencyIndex",
    "Boundary",
    "CostModel",
    "CountMode",
    "DEAD",
    "EmptyInput",
    "InvalidPattern",
    "SearchConstraints",
    "SearchContext",
    "ShiritoriSearchError",
    "UnknownCollection",
    "WildcardMatcher",
    "build_index",
    "collation_key",
    "compile_pattern",
    "count_by_boundary",
    "count_occurrences",
    "excluded_satisfied",
    "head_unit",
    "no_preceding_satisfied",
    "no_succeeding_satisfied",
    "required_satisfied",
    "search_exact",
    "search_loop",
    "search_multi_length",
    "search_shortest",
    "search_wildcard_anchored",
    "sort_chains",
    "sort_words",
    "tail_unit",
    "terminal_unit",
]
