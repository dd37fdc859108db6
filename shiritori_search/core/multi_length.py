"""Chains whose words have prescribed character lengths."""

from __future__ import annotations

import itertools
from typing import AbstractSet, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

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

LengthSet = FrozenSet[int]


def _normalize_length_sets(length_sets: Sequence[Iterable[int] | int]) -> List[LengthSet]:
    if not length_sets:
        raise ValueError("at least one word position is required")
    normalized: List[LengthSet] = []
    for position, entry in enumerate(length_sets):
        values = frozenset([entry] if isinstance(entry, int) else entry)
        if not values:
            raise ValueError(f"position {position} has no acceptable lengths")
        for value in values:
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"word lengths must be positive integers, got {value!r}")
        normalized.append(values)
    return normalized


def _distinct_orderings(sets: Sequence[LengthSet]) -> Iterator[Tuple[LengthSet, ...]]:
    """Yield each distinct ordering of ``sets``; equal sets are interchangeable."""

    remaining = {}
    for entry in sets:
        remaining[entry] = remaining.get(entry, 0) + 1
    keys = sorted(remaining, key=sorted)
    ordering: List[LengthSet] = []

    def place() -> Iterator[Tuple[LengthSet, ...]]:
        if len(ordering) == len(sets):
            yield tuple(ordering)
            return
        for key in keys:
            if not remaining[key]:
                continue
            remaining[key] -= 1
            ordering.append(key)
            yield from place()
            ordering.pop()
            remaining[key] += 1

    yield from place()


def length_sequences(
    length_sets: Sequence[Iterable[int] | int],
    allow_permutation: bool = False,
) -> List[Tuple[int, ...]]:
    """Concrete per-position lengths to search, without repeats."""

    sets = _normalize_length_sets(length_sets)
    orderings = _distinct_orderings(sets) if allow_permutation else iter([tuple(sets)])
    seen: Set[Tuple[int, ...]] = set()
    sequences: List[Tuple[int, ...]] = []
    for ordering in orderings:
        for sequence in itertools.product(*(sorted(entry) for entry in ordering)):
            if sequence not in seen:
                seen.add(sequence)
                sequences.append(sequence)
    return sequences


def search_multi_length(
    index: AdjacencyIndex,
    length_sets: Sequence[Iterable[int] | int],
    allow_permutation: bool = False,
    constraints: Optional[SearchConstraints] = None,
) -> List[List[str]]:
    """Chains whose ``i``-th word has one of the lengths of ``length_sets[i]``.

    With ``allow_permutation`` the positions may also be reordered. Link-unit
    anchors in ``constraints`` are ignored; substring and boundary options
    apply to every length sequence.
    """

    constraints = constraints or DEFAULT_CONSTRAINTS
    sequences = length_sequences(length_sets, allow_permutation)

    def accept(chain: Chain, used: AbstractSet[str]) -> bool:
        if not substring_constraints_satisfied(chain, constraints):
            return False
        if constraints.no_succeeding and not no_succeeding_satisfied(chain, index, used):
            return False
        return True

    # Lengths count the word as stored, so ー and ッ are characters too:
    # スーダン has length 4.
    found: Set[Chain] = set()
    for sequence in sequences:
        starts = [word for word in index.words if len(word) == sequence[0]]
        if constraints.no_preceding:
            starts = [word for word in starts if no_preceding_satisfied((word,), index)]

        def allow(position: int, word: str, sequence: Tuple[int, ...] = sequence) -> bool:
            return len(word) == sequence[position]

        found.update(
            walk_chains(
                index,
                starts,
                len(sequence),
                accept=accept,
                allow=allow,
                excluded=constraints.excluded,
            )
        )
    return sort_chains(found)


__all__ = ["length_sequences", "search_multi_length"]
