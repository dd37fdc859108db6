"""Cyclic chains whose text matches a wildcard pattern under some rotation."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Set, Tuple

from .adjacency import AdjacencyIndex
from .collation import sort_chains
from .constraints import SearchConstraints, extension_excluded, substring_constraints_satisfied
from .normalizer import DEAD, head_unit, tail_unit
from .pattern import WildcardMatcher, compile_pattern

Chain = Tuple[str, ...]


def matches_some_rotation(text: str, matcher: WildcardMatcher) -> bool:
    return any(matcher.test(text[shift:] + text[:shift]) for shift in range(len(text)))


def closes_loop(chain: Chain) -> bool:
    unit = tail_unit(chain[-1])
    return unit is not DEAD and unit == head_unit(chain[0])


def _iter_loops(
    index: AdjacencyIndex,
    matcher: WildcardMatcher,
    constraints: Optional[SearchConstraints],
) -> Iterator[Chain]:
    target = matcher.length
    excluded = constraints.excluded if constraints else ()
    members = [word for word in index.words if len(word) < target]
    member_set = set(members)

    path: List[str] = []
    used: Set[str] = set()

    def extend(text: str) -> Iterator[Chain]:
        if len(text) == target:
            chain = tuple(path)
            if not closes_loop(chain) or not matches_some_rotation(text, matcher):
                return
            if constraints is None or substring_constraints_satisfied(chain, constraints):
                yield chain
            return

        for word in index.words_starting_with(tail_unit(path[-1])):
            if word in used or word not in member_set:
                continue
            if len(text) + len(word) > target:
                continue
            if excluded and extension_excluded(text, word, excluded):
                continue
            path.append(word)
            used.add(word)
            yield from extend(text + word)
            used.discard(path.pop())

    for word in members:
        if excluded and extension_excluded("", word, excluded):
            continue
        path.append(word)
        used.add(word)
        yield from extend(word)
        used.discard(path.pop())


def search_loop(
    index: AdjacencyIndex,
    pattern: str | WildcardMatcher,
    constraints: Optional[SearchConstraints] = None,
) -> List[List[str]]:
    """Return loops whose concatenated text fits ``pattern`` when rotated.

    Loops built from the same words count once, whatever their starting
    point or order; the first ordering found is the one reported.
    """

    matcher = pattern if isinstance(pattern, WildcardMatcher) else compile_pattern(pattern)
    loops: Dict[Chain, Chain] = {}
    for chain in _iter_loops(index, matcher, constraints):
        loops.setdefault(tuple(sorted(chain)), chain)
    return sort_chains(loops.values())


__all__ = ["closes_loop", "matches_some_rotation", "search_loop"]
