"""Immutable bundle of adjacency indices shared by all searches."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from .adjacency import AdjacencyIndex, build_index
from .errors import UnknownCollection


@dataclass(frozen=True)
class SearchContext:
    """Indices keyed by collection name, built once before any search runs."""

    indices: Mapping[str, AdjacencyIndex]

    @classmethod
    def from_collections(cls, collections: Mapping[str, Iterable[str]]) -> "SearchContext":
        return cls(
            indices=MappingProxyType(
                {name: build_index(words, name=name) for name, words in collections.items()}
            )
        )

    def index_for(self, name: str) -> AdjacencyIndex:
        try:
            return self.indices[name]
        except KeyError:
            raise UnknownCollection(name) from None

    def names(self) -> Tuple[str, ...]:
        return tuple(self.indices)

    def __contains__(self, name: object) -> bool:
        return name in self.indices


__all__ = ["SearchContext"]
