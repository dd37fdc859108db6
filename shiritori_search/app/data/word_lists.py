"""Loading named word collections from text files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from shiritori_search.core import SearchContext
from shiritori_search.utils.observability import get_logger

DEFAULT_WORDS_DIR = Path(__file__).resolve().parents[2] / "data"

DEFAULT_SOURCES: Mapping[str, str] = {
    "countries": "countries.txt",
    "capitals": "capitals.txt",
}

DEFAULT_UNIONS: Mapping[str, Tuple[str, ...]] = {
    "countries_capitals": ("countries", "capitals"),
}


def read_word_file(path: Path | str) -> List[str]:
    """Return the non-blank, stripped lines of ``path``."""

    with Path(path).open("r", encoding="utf-8-sig") as handle:
        return [line.strip() for line in handle if line.strip()]


def merge_unique(collections: Iterable[Sequence[str]]) -> List[str]:
    """Concatenate ``collections`` keeping the first occurrence of each word."""

    seen = set()
    merged: List[str] = []
    for words in collections:
        for word in words:
            if word not in seen:
                seen.add(word)
                merged.append(word)
    return merged


class WordListRepository:
    """Reads the configured word lists and builds the search context."""

    def __init__(
        self,
        words_dir: Optional[Path | str] = None,
        *,
        sources: Optional[Mapping[str, str]] = None,
        unions: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        self.words_dir = Path(words_dir) if words_dir is not None else DEFAULT_WORDS_DIR
        self.sources: Dict[str, str] = dict(DEFAULT_SOURCES if sources is None else sources)
        self.unions: Dict[str, Tuple[str, ...]] = {
            name: tuple(members)
            for name, members in (DEFAULT_UNIONS if unions is None else unions).items()
        }
        self._logger = get_logger(__name__).bind(
            component="word_list_repository",
            words_dir=str(self.words_dir),
        )

    def load_collections(self) -> Dict[str, List[str]]:
        """Read every source file and assemble the union collections."""

        collections: Dict[str, List[str]] = {}
        for name, filename in self.sources.items():
            path = self.words_dir / filename
            try:
                words = read_word_file(path)
            except OSError as exc:
                self._logger.error(
                    "Word list could not be read",
                    context={"collection": name, "path": str(path), "error": str(exc)},
                )
                raise
            collections[name] = words
            self._logger.info(
                "Word list loaded",
                context={"collection": name, "word_count": len(words)},
            )

        for name, members in self.unions.items():
            missing = [member for member in members if member not in collections]
            if missing:
                raise ValueError(f"union {name!r} refers to unknown collections {missing}")
            collections[name] = merge_unique(collections[member] for member in members)
            self._logger.info(
                "Union collection assembled",
                context={
                    "collection": name,
                    "members": list(members),
                    "word_count": len(collections[name]),
                },
            )
        return collections

    def build_context(self) -> SearchContext:
        collections = self.load_collections()
        context = SearchContext.from_collections(collections)
        self._logger.info(
            "Adjacency indices built",
            context={name: len(context.index_for(name)) for name in context.names()},
        )
        return context


__all__ = [
    "DEFAULT_SOURCES",
    "DEFAULT_UNIONS",
    "DEFAULT_WORDS_DIR",
    "WordListRepository",
    "merge_unique",
    "read_word_file",
]
