"""Shortest-chain search by word count or by total character count."""

from __future__ import annotations

import heapq
import itertools
from collections import Counter
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Set, Tuple

from .adjacency import AdjacencyIndex
from .collation import sort_chains
from .constraints import (
    CostModel,
    CountMode,
    SearchConstraints,
    chain_accepted,
    count_occurrences,
    extension_excluded,
)
from .exhaustive import starting_words
from .normalizer import DEAD, tail_unit

Chain = Tuple[str, ...]
StateKey = Callable[[Chain, str], Hashable]


def _accepted(chain: Chain, constraints: SearchConstraints, index: AdjacencyIndex) -> bool:
    return chain_accepted(chain, constraints, index, set(chain))


def _successors(
    chain: Chain,
    text: str,
    index: AdjacencyIndex,
    constraints: SearchConstraints,
):
    unit = tail_unit(chain[-1])
    if unit is DEAD:
        return
    for word in index.words_starting_with(unit):
        if word in chain:
            continue
        if constraints.excluded and extension_excluded(text, word, constraints.excluded):
            continue
        yield word


def search_state(index: AdjacencyIndex, constraints: SearchConstraints) -> StateKey:
    """Return the function that maps a partial chain to its search state.

    Two partial chains in the same state are accepted by the same
    continuations, so only the cheapest arrival at a state is worth
    expanding. The state is the last word plus whatever the options can
    still observe: occurrences of each required needle (capped at the
    point where more stops mattering), the trailing text a needle could
    straddle, and for ``no_succeeding`` which successors of the last word
    are already used.
    """

    if constraints.path_independent:
        return lambda chain, text: chain[-1]

    wanted = Counter(constraints.required)
    extra = 1 if constraints.count_mode is CountMode.EXACTLY else 0
    caps = tuple((needle, multiplicity + extra) for needle, multiplicity in wanted.items())
    longest = max((len(needle) for needle in (*wanted, *constraints.excluded)), default=1)
    overlap = longest - 1

    def key(chain: Chain, text: str) -> Hashable:
        last = chain[-1]
        counts = tuple(min(count_occurrences(text, needle), cap) for needle, cap in caps)
        trailing = text[-overlap:] if overlap else ""
        used: Optional[frozenset] = None
        if constraints.no_succeeding:
            successors = index.words_starting_with(tail_unit(last))
            used = frozenset(word for word in successors if word in chain)
        return last, counts, trailing, used

    return key


def _shortest_by_words(
    index: AdjacencyIndex,
    constraints: SearchConstraints,
    starts: Sequence[str],
) -> Set[Chain]:
    state = search_state(index, constraints)
    best_depth: Dict[Hashable, int] = {state((word,), word): 1 for word in starts}
    frontier: List[Tuple[Chain, str]] = [((word,), word) for word in starts]

    while frontier:
        accepted = {chain for chain, _ in frontier if _accepted(chain, constraints, index)}
        if accepted:
            return accepted

        depth = len(frontier[0][0]) + 1
        next_frontier: List[Tuple[Chain, str]] = []
        for chain, text in frontier:
            for word in _successors(chain, text, index, constraints):
                extended, extended_text = chain + (word,), text + word
                key = state(extended, extended_text)
                # equal depths are kept so every tied chain is reported
                if best_depth.get(key, depth) < depth:
                    continue
                best_depth[key] = depth
                next_frontier.append((extended, extended_text))
        frontier = next_frontier

    return set()


def _shortest_by_characters(
    index: AdjacencyIndex,
    constraints: SearchConstraints,
    starts: Sequence[str],
) -> Set[Chain]:
    state = search_state(index, constraints)
    best_cost: Dict[Hashable, int] = {}
    order = itertools.count()
    heap: List[Tuple[int, int, Chain, str]] = []
    for word in starts:
        best_cost[state((word,), word)] = len(word)
        heapq.heappush(heap, (len(word), next(order), (word,), word))

    found: Set[Chain] = set()
    found_cost: Optional[int] = None
    while heap:
        cost, _, chain, text = heapq.heappop(heap)
        if found_cost is not None and cost > found_cost:
            break
        if best_cost.get(state(chain, text), cost) < cost:
            continue
        if _accepted(chain, constraints, index):
            found.add(chain)
            found_cost = cost
            continue
        if found_cost is not None:
            continue
        for word in _successors(chain, text, index, constraints):
            next_cost = cost + len(word)
            extended, extended_text = chain + (word,), text + word
            key = state(extended, extended_text)
            if best_cost.get(key, next_cost) < next_cost:
                continue
            best_cost[key] = next_cost
            heapq.heappush(heap, (next_cost, next(order), extended, extended_text))

    return found


def search_shortest(
    index: AdjacencyIndex,
    constraints: SearchConstraints,
    cost_model: CostModel | str = CostModel.WORDS,
) -> List[List[str]]:
    """Return every accepted chain of minimum cost, collation-sorted.

    Single-word chains are checked before anything is expanded. A partial
    chain is dropped when another one reached the same search state (see
    :func:`search_state`) more cheaply, which bounds the work by the number
    of states rather than the number of paths.
    """

    cost_model = CostModel(cost_model)
    starts = starting_words(index, constraints)
    if constraints.excluded:
        starts = tuple(
            word for word in starts if not extension_excluded("", word, constraints.excluded)
        )
    if not starts:
        return []

    singles = {(word,) for word in starts if _accepted((word,), constraints, index)}
    if singles:
        return sort_chains(singles)

    if cost_model is CostModel.CHARACTERS:
        found = _shortest_by_characters(index, constraints, starts)
    else:
        found = _shortest_by_words(index, constraints, starts)
    return sort_chains(found)


__all__ = ["search_shortest", "search_state"]
