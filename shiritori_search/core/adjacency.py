"""Word adjacency index: a collection grouped by head link unit."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .collation import sort_words
from .normalizer import head_unit, tail_unit


@dataclass(frozen=True)
class AdjacencyIndex:
    """Read-only view of one collection, bucketed for chain expansion.

    ``words`` holds the collection in collation order and every bucket keeps
    that order, so searches that walk buckets front to back discover chains
    in a stable order.
    """

    name: str
    words: Tuple[str, ...]
    by_head: Mapping[str, Tuple[str, ...]]
    by_tail: Mapping[Optional[str], Tuple[str, ...]]

    def words_starting_with(self, unit: Optional[str]) -> Tuple[str, ...]:
        if unit is None:
            return ()
        return self.by_head.get(unit, ())

    def words_ending_with(self, unit: Optional[str]) -> Tuple[str, ...]:
        """Words whose tail unit is ``unit`` (``DEAD`` groups nasal endings)."""

        return self.by_tail.get(unit, ())

    def head_units(self) -> Tuple[str, ...]:
        return tuple(self.by_head)

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str) or not word:
            return False
        return word in self.words_starting_with(head_unit(word))


def _freeze(groups: Dict) -> Mapping:
    return MappingProxyType({key: tuple(values) for key, values in groups.items()})


def build_index(words: Iterable[str], name: str = "") -> AdjacencyIndex:
    """Build the adjacency index for ``words``.

    Duplicates collapse to a single entry. Empty words raise
    :class:`~shiritori_search.core.errors.EmptyInput`.
    """

    ordered = tuple(sort_words(set(words)))
    by_head: Dict[str, List[str]] = {}
    by_tail: Dict[Optional[str], List[str]] = {}
    for word in ordered:
        by_head.setdefault(head_unit(word), []).append(word)
        by_tail.setdefault(tail_unit(word), []).append(word)

    return AdjacencyIndex(
        name=name,
        words=ordered,
        by_head=_freeze(by_head),
        by_tail=_freeze(by_tail),
    )


__all__ = ["AdjacencyIndex", "build_index"]
