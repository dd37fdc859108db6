"""Search options and the predicates that decide whether a chain is accepted."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, AbstractSet, Iterable, Optional, Sequence, Tuple

from .normalizer import DEAD, head_unit, tail_unit, terminal_unit

if TYPE_CHECKING:
    from .adjacency import AdjacencyIndex


class CountMode(str, Enum):
    AT_LEAST = "at_least"
    EXACTLY = "exactly"


class CostModel(str, Enum):
    """How :func:`search_shortest` measures a chain."""

    WORDS = "words"
    CHARACTERS = "characters"


class Boundary(str, Enum):
    """Which end of a chain :func:`count_by_boundary` groups by."""

    START = "start"
    END = "end"


def _as_text_tuple(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    return tuple(str(value) for value in values if value)


@dataclass(frozen=True)
class SearchConstraints:
    """Options shared by every search call.

    ``required`` may repeat an entry to demand it several times. The two
    boundary flags reject chains that some other word of the collection could
    extend at the front (``no_preceding``) or at the back (``no_succeeding``).
    """

    start_unit: Optional[str] = None
    end_unit: Optional[str] = None
    length: Optional[int] = None
    required: Tuple[str, ...] = ()
    count_mode: CountMode = CountMode.AT_LEAST
    excluded: Tuple[str, ...] = ()
    no_preceding: bool = False
    no_succeeding: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_unit", self.start_unit or None)
        object.__setattr__(self, "end_unit", self.end_unit or None)
        object.__setattr__(self, "required", _as_text_tuple(self.required))
        object.__setattr__(self, "excluded", _as_text_tuple(self.excluded))
        object.__setattr__(self, "count_mode", CountMode(self.count_mode))

    @property
    def path_independent(self) -> bool:
        """Whether acceptance depends only on a chain's first and last words."""

        return not (self.required or self.excluded or self.no_succeeding)


DEFAULT_CONSTRAINTS = SearchConstraints()


def count_occurrences(text: str, needle: str) -> int:
    """Count occurrences of ``needle`` in ``text``, overlaps included."""

    if not needle:
        return 0
    count = 0
    position = text.find(needle)
    while position != -1:
        count += 1
        position = text.find(needle, position + 1)
    return count


def required_satisfied(
    chain: Sequence[str],
    required: Iterable[str],
    mode: CountMode = CountMode.AT_LEAST,
) -> bool:
    wanted = Counter(_as_text_tuple(required))
    if not wanted:
        return True
    text = "".join(chain)
    for needle, multiplicity in wanted.items():
        found = count_occurrences(text, needle)
        if mode is CountMode.EXACTLY:
            if found != multiplicity:
                return False
        elif found < multiplicity:
            return False
    return True


def excluded_satisfied(chain: Sequence[str], excluded: Iterable[str]) -> bool:
    text = "".join(chain)
    return not any(needle in text for needle in _as_text_tuple(excluded))


def extension_excluded(text: str, word: str, excluded: Sequence[str]) -> bool:
    """Whether appending ``word`` to ``text`` creates an excluded substring.

    Only the joint region is inspected; ``text`` is assumed to be clean.
    """

    for needle in excluded:
        overlap = text[-(len(needle) - 1):] if len(needle) > 1 else ""
        if needle in overlap + word:
            return True
    return False


def no_preceding_satisfied(chain: Sequence[str], index: "AdjacencyIndex") -> bool:
    first = chain[0]
    return all(word == first for word in index.words_ending_with(head_unit(first)))


def no_succeeding_satisfied(
    chain: Sequence[str],
    index: "AdjacencyIndex",
    used: Optional[AbstractSet[str]] = None,
) -> bool:
    unit = tail_unit(chain[-1])
    if unit is DEAD:
        return True
    used_words = used if used is not None else set(chain)
    return all(word in used_words for word in index.words_starting_with(unit))


def end_unit_satisfied(chain: Sequence[str], end_unit: Optional[str]) -> bool:
    return end_unit is None or terminal_unit(chain[-1]) == end_unit


def substring_constraints_satisfied(
    chain: Sequence[str],
    constraints: SearchConstraints,
) -> bool:
    return required_satisfied(
        chain, constraints.required, constraints.count_mode
    ) and excluded_satisfied(chain, constraints.excluded)


def chain_accepted(
    chain: Sequence[str],
    constraints: SearchConstraints,
    index: "AdjacencyIndex",
    used: Optional[AbstractSet[str]] = None,
) -> bool:
    """Full acceptance test at the end of a fixed-unit search."""

    if not end_unit_satisfied(chain, constraints.end_unit):
        return False
    if not substring_constraints_satisfied(chain, constraints):
        return False
    if constraints.no_preceding and not no_preceding_satisfied(chain, index):
        return False
    if constraints.no_succeeding and not no_succeeding_satisfied(chain, index, used):
        return False
    return True


__all__ = [
    "Boundary",
    "CostModel",
    "CountMode",
    "DEFAULT_CONSTRAINTS",
    "SearchConstraints",
    "chain_accepted",
    "count_occurrences",
    "end_unit_satisfied",
    "excluded_satisfied",
    "extension_excluded",
    "no_preceding_satisfied",
    "no_succeeding_satisfied",
    "required_satisfied",
    "substring_constraints_satisfied",
]
