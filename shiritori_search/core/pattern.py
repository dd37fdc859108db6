"""Wildcard patterns where a placeholder stands for exactly one character."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List

from .errors import InvalidPattern

# ``○`` is what the search form offers; ``?`` and ``？`` are accepted as well.
PLACEHOLDERS: FrozenSet[str] = frozenset({"○", "?", "？"})


@dataclass(frozen=True)
class WildcardMatcher:
    pattern: str
    regex: "re.Pattern[str]"

    @property
    def length(self) -> int:
        return len(self.pattern)

    def test(self, candidate: str) -> bool:
        return self.regex.fullmatch(candidate) is not None

    __call__ = test

    def filter(self, candidates: Iterable[str]) -> List[str]:
        return [candidate for candidate in candidates if self.test(candidate)]


def compile_pattern(pattern: str) -> WildcardMatcher:
    """Compile ``pattern`` into an anchored matcher.

    Every character other than a placeholder is escaped, so regex syntax in
    the pattern is matched literally.
    """

    if not isinstance(pattern, str) or not pattern:
        raise InvalidPattern(pattern, "pattern must be a non-empty string")

    source = "".join("." if ch in PLACEHOLDERS else re.escape(ch) for ch in pattern)
    try:
        regex = re.compile(source, re.DOTALL)
    except re.error as exc:
        raise InvalidPattern(pattern, str(exc)) from exc
    return WildcardMatcher(pattern=pattern, regex=regex)


__all__ = ["PLACEHOLDERS", "WildcardMatcher", "compile_pattern"]
