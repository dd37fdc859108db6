"""Japanese-aware sort keys for words and chains.

Words are ordered primarily by their kana reading with script, voicing and
small-kana differences folded away, so ``カ``, ``か`` and ``ガ`` sort
together; the unfolded hiragana form and finally the literal text break ties
so the order is total and deterministic.
"""

from __future__ import annotations

import unicodedata
from functools import lru_cache
from typing import Iterable, List, Sequence, Tuple

import jaconv

from .normalizer import SMALL_KANA

_VOICING_MARKS = {"゙", "゚"}

CollationKey = Tuple[str, str, str]


@lru_cache(maxsize=65536)
def collation_key(text: str) -> CollationKey:
    hiragana = jaconv.kata2hira(unicodedata.normalize("NFKC", text))
    decomposed = unicodedata.normalize("NFD", hiragana)
    base = "".join(ch for ch in decomposed if ch not in _VOICING_MARKS)
    primary = "".join(SMALL_KANA.get(ch, ch) for ch in base)
    return primary, hiragana, text


def sort_words(words: Iterable[str]) -> List[str]:
    return sorted(words, key=collation_key)


def chain_sort_key(chain: Sequence[str]) -> Tuple[CollationKey, Tuple[str, ...]]:
    return collation_key("".join(chain)), tuple(chain)


def sort_chains(chains: Iterable[Sequence[str]]) -> List[List[str]]:
    """Return ``chains`` as lists ordered by their concatenated text."""

    return [list(chain) for chain in sorted(chains, key=chain_sort_key)]


__all__ = ["CollationKey", "chain_sort_key", "collation_key", "sort_chains", "sort_words"]
