"""Exhaustive enumeration of fixed-length chains."""

from __future__ import annotations

from typing import AbstractSet, Dict, List, Sequence, Tuple

from .adjacency import AdjacencyIndex
from .backtrack import Chain, walk_chains
from .collation import collation_key, sort_chains
from .constraints import (
    Boundary,
    SearchConstraints,
    chain_accepted,
    no_preceding_satisfied,
)
from .normalizer import head_unit, terminal_unit


def _require_length(constraints: SearchConstraints) -> int:
    length = constraints.length
    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise ValueError(f"chain length must be a positive integer, got {length!r}")
    return length


def starting_words(index: AdjacencyIndex, constraints: SearchConstraints) -> Tuple[str, ...]:
    """Words a chain may open with under ``constraints``."""

    if constraints.start_unit is not None:
        candidates = index.words_starting_with(constraints.start_unit)
    else:
        candidates = index.words
    if constraints.no_preceding:
        candidates = tuple(
            word for word in candidates if no_preceding_satisfied((word,), index)
        )
    return candidates


def iter_exact(index: AdjacencyIndex, constraints: SearchConstraints):
    """Lazily yield accepted chains in discovery order."""

    length = _require_length(constraints)

    def accept(chain: Chain, used: AbstractSet[str]) -> bool:
        return chain_accepted(chain, constraints, index, used)

    return walk_chains(
        index,
        starting_words(index, constraints),
        length,
        accept=accept,
        excluded=constraints.excluded,
    )


def search_exact(index: AdjacencyIndex, constraints: SearchConstraints) -> List[List[str]]:
    """Return every chain of ``constraints.length`` words, collation-sorted."""

    return sort_chains(set(iter_exact(index, constraints)))


def boundary_unit(chain: Sequence[str], which: Boundary) -> str:
    if Boundary(which) is Boundary.START:
        return head_unit(chain[0])
    return terminal_unit(chain[-1])


def count_by_boundary(
    index: AdjacencyIndex,
    constraints: SearchConstraints,
    which: Boundary | str = Boundary.END,
) -> Dict[str, int]:
    """Count accepted chains grouped by their first or last link unit."""

    which = Boundary(which)
    counts: Dict[str, int] = {}
    for chain in iter_exact(index, constraints):
        key = boundary_unit(chain, which)
        counts[key] = counts.get(key, 0) + 1
    return {key: counts[key] for key in sorted(counts, key=collation_key)}


__all__ = [
    "boundary_unit",
    "count_by_boundary",
    "iter_exact",
    "search_exact",
    "starting_words",
]
