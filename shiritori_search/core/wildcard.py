"""Fixed-length chains anchored by wildcard patterns instead of link units."""

from __future__ import annotations

from typing import AbstractSet, List, Optional

from .adjacency import AdjacencyIndex
from .backtrack import Chain, walk_chains
from .collation import sort_chains
from .constraints import (
    DEFAULT_CONSTRAINTS,
    SearchConstraints,
    no_preceding_satisfied,
    no_succeeding_satisfied,
    substring_constraints_satisfied,
)
from .pattern import WildcardMatcher, compile_pattern


def _as_matcher(pattern: str | WildcardMatcher) -> WildcardMatcher:
    if isinstance(pattern, WildcardMatcher):
        return pattern
    return compile_pattern(pattern)


def search_wildcard_anchored(
    index: AdjacencyIndex,
    start_pattern: str | WildcardMatcher,
    end_pattern: Optional[str | WildcardMatcher],
    length: int,
    constraints: Optional[SearchConstraints] = None,
) -> List[List[str]]:
    """Chains of ``length`` words whose first word matches ``start_pattern``.

    When ``end_pattern`` is given the last word must match it too. The
    ``start_unit``/``end_unit`` fields of ``constraints`` are not used here;
    substring and boundary options apply as in :func:`search_exact`.
    """

    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise ValueError(f"chain length must be a positive integer, got {length!r}")

    constraints = constraints or DEFAULT_CONSTRAINTS
    start_matcher = _as_matcher(start_pattern)
    end_matcher = _as_matcher(end_pattern) if end_pattern else None

    starts = [word for word in index.words if start_matcher.test(word)]
    if constraints.no_preceding:
        starts = [word for word in starts if no_preceding_satisfied((word,), index)]

    def accept(chain: Chain, used: AbstractSet[str]) -> bool:
        if end_matcher is not None and not end_matcher.test(chain[-1]):
            return False
        if not substring_constraints_satisfied(chain, constraints):
            return False
        if constraints.no_succeeding and not no_succeeding_satisfied(chain, index, used):
            return False
        return True

    chains = walk_chains(index, starts, length, accept=accept, excluded=constraints.excluded)
    return sort_chains(set(chains))


__all__ = ["search_wildcard_anchored"]
