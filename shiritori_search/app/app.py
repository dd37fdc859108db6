"""Application wiring for the shiritori chain search."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from shiritori_search.core import SearchContext
from shiritori_search.utils.logging_config import configure_logging
from shiritori_search.utils.observability import get_logger
from shiritori_search.utils.telemetry import StructuredTelemetry, TelemetryLogger

from shiritori_search.app.data.word_lists import WordListRepository
from shiritori_search.app.services.result_formatter import ChainResultFormatter
from shiritori_search.app.services.search_service import ShiritoriSearchService
from shiritori_search.app.ui.gradio import create_interface


def _env_flag(name: str) -> bool:
    value = os.environ.get(name, "")
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _env_number(name: str, cast: type) -> Optional[Any]:
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    try:
        return cast(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


class ShiritoriApp:
    """High-level facade: loads the word lists once and exposes the service."""

    def __init__(
        self,
        words_dir: Optional[Path | str] = None,
        *,
        repository: Optional[WordListRepository] = None,
        context: Optional[SearchContext] = None,
        search_service: Optional[ShiritoriSearchService] = None,
        formatter: Optional[ChainResultFormatter] = None,
        max_concurrent_searches: Optional[int] = None,
        search_timeout: Optional[float] = None,
    ) -> None:
        self._logger = get_logger(__name__).bind(component="app_facade")

        words_dir = words_dir or os.environ.get("SHIRITORI_WORDS_DIR") or None
        self.repository = repository or WordListRepository(words_dir)
        self._logger.info(
            "Initialising application facade",
            context={"words_dir": str(self.repository.words_dir)},
        )

        self.context = context or self.repository.build_context()

        if max_concurrent_searches is None:
            max_concurrent_searches = _env_number("SHIRITORI_MAX_CONCURRENT_SEARCHES", int)
        if search_timeout is None:
            search_timeout = _env_number("SHIRITORI_SEARCH_TIMEOUT", float)

        self.search_service = search_service or ShiritoriSearchService(
            self.context,
            telemetry=StructuredTelemetry(listeners=[TelemetryLogger()]),
            max_concurrent_searches=max_concurrent_searches,
            search_timeout=search_timeout,
        )
        self.formatter = formatter or ChainResultFormatter()

        self._logger.info(
            "Application dependencies wired",
            context={"collections": list(self.context.names())},
        )

    def create_gradio_interface(self):
        return create_interface(self.search_service, self.formatter)


def main() -> None:
    configure_logging()
    app = ShiritoriApp()
    interface = app.create_gradio_interface()
    interface.launch(
        server_name="0.0.0.0",
        server_port=_env_number("SHIRITORI_PORT", int) or 7860,
        share=_env_flag("SHIRITORI_SHARE"),
    )


__all__ = ["ShiritoriApp", "main"]
