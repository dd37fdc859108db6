"""Link units used to decide whether one word may follow another."""

from __future__ import annotations

import unicodedata
from functools import lru_cache
from typing import Dict, Optional

from .errors import EmptyInput

ELONGATION_MARK = "ー"

# Sentinel tail unit for words ending on the nasal terminal.
DEAD = None

NASAL_UNITS = frozenset({"ン", "ん"})

SMALL_KANA: Dict[str, str] = {
    "ァ": "ア", "ィ": "イ", "ゥ": "ウ", "ェ": "エ", "ォ": "オ",
    "ャ": "ヤ", "ュ": "ユ", "ョ": "ヨ", "ヮ": "ワ", "ッ": "ツ",
    "ヵ": "カ", "ヶ": "ケ",
    "ぁ": "あ", "ぃ": "い", "ぅ": "う", "ぇ": "え", "ぉ": "お",
    "ゃ": "や", "ゅ": "ゆ", "ょ": "よ", "ゎ": "わ", "っ": "つ",
    "ゕ": "か", "ゖ": "け",
}


@lru_cache(maxsize=None)
def normalize_word(word: str) -> str:
    """Return the NFKC form of ``word``; empty words are rejected."""

    if not word:
        raise EmptyInput()
    normalized = unicodedata.normalize("NFKC", word)
    if not normalized:
        raise EmptyInput()
    return normalized


def head_unit(word: str) -> str:
    return normalize_word(word)[0]


@lru_cache(maxsize=None)
def terminal_unit(word: str) -> str:
    """Return the final link unit of ``word`` before nasal handling.

    Trailing elongation marks take the unit of the character they lengthen
    and small kana are read as their full-size parent, so ``コーヒー`` ends on
    ``ヒ`` and ``ジャンプッ`` on ``ツ``.
    """

    normalized = normalize_word(word)
    stripped = normalized.rstrip(ELONGATION_MARK)
    last = stripped[-1] if stripped else normalized[-1]
    return SMALL_KANA.get(last, last)


def tail_unit(word: str) -> Optional[str]:
    """Return the unit the next word must start with, or ``DEAD``."""

    unit = terminal_unit(word)
    if unit in NASAL_UNITS:
        return DEAD
    return unit


def is_dead(word: str) -> bool:
    return tail_unit(word) is DEAD


def links(previous: str, following: str) -> bool:
    """Whether ``following`` may come directly after ``previous``."""

    unit = tail_unit(previous)
    return unit is not DEAD and head_unit(following) == unit


__all__ = [
    "DEAD",
    "ELONGATION_MARK",
    "NASAL_UNITS",
    "SMALL_KANA",
    "head_unit",
    "is_dead",
    "links",
    "normalize_word",
    "tail_unit",
    "terminal_unit",
]
