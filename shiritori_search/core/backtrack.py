"""Depth-first chain walker shared by the fixed-length searches."""

from __future__ import annotations

from typing import AbstractSet, Callable, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .adjacency import AdjacencyIndex
from .constraints import extension_excluded
from .normalizer import tail_unit

Chain = Tuple[str, ...]
AcceptFn = Callable[[Chain, AbstractSet[str]], bool]
AllowFn = Callable[[int, str], bool]


def walk_chains(
    index: AdjacencyIndex,
    starting_words: Iterable[str],
    length: int,
    *,
    accept: AcceptFn,
    allow: Optional[AllowFn] = None,
    excluded: Sequence[str] = (),
) -> Iterator[Chain]:
    """Yield every chain of exactly ``length`` words that ``accept`` approves.

    ``allow(position, word)`` filters candidates for positions after the
    first (the caller filters ``starting_words`` itself). Branches whose text
    already contains an ``excluded`` substring are cut immediately. The path
    is mutated in place; yielded chains are copies.
    """

    if length < 1:
        return

    path: List[str] = []
    texts: List[str] = [""]
    used: Set[str] = set()

    def push(word: str) -> None:
        path.append(word)
        texts.append(texts[-1] + word)
        used.add(word)

    def pop() -> None:
        used.discard(path.pop())
        texts.pop()

    def extend() -> Iterator[Chain]:
        depth = len(path)
        if depth == length:
            chain = tuple(path)
            if accept(chain, used):
                yield chain
            return

        for word in index.words_starting_with(tail_unit(path[-1])):
            if word in used:
                continue
            if allow is not None and not allow(depth, word):
                continue
            if excluded and extension_excluded(texts[-1], word, excluded):
                continue
            push(word)
            yield from extend()
            pop()

    for word in starting_words:
        if excluded and extension_excluded("", word, excluded):
            continue
        push(word)
        yield from extend()
        pop()


__all__ = ["AcceptFn", "AllowFn", "Chain", "walk_chains"]
