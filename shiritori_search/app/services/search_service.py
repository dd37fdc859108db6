"""Search service routing requests to the chain-search core."""

from __future__ import annotations

import copy
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Generator, Iterable, List, Optional, Sequence, Tuple, Union

from shiritori_search.core import (
    Boundary,
    CostModel,
    CountMode,
    SearchConstraints,
    SearchContext,
    compile_pattern,
    count_by_boundary,
    search_exact,
    search_loop,
    search_multi_length,
    search_shortest,
    search_wildcard_anchored,
    sort_words,
)

from ...utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)
from ...utils.telemetry import StructuredTelemetry

SHORTEST = "shortest"

WordCount = Union[int, str]


def _validate_unit(value: Optional[str], label: str) -> Optional[str]:
    if value is None:
        return None
    cleaned = str(value).strip()
    if not cleaned:
        return None
    if len(cleaned) != 1:
        raise ValueError(f"{label} must be a single character or left empty")
    return cleaned


def _validate_word_count(value: Any) -> WordCount:
    if value == SHORTEST:
        return SHORTEST
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError("word count must be a positive integer or 'shortest'")
    return value


def _result_size(result: Any) -> int:
    if isinstance(result, dict):
        return sum(result.values())
    return len(result)


class ShiritoriSearchService:
    """Validates search requests and runs them against a :class:`SearchContext`."""

    def __init__(
        self,
        context: SearchContext,
        *,
        telemetry: Optional[StructuredTelemetry] = None,
        max_concurrent_searches: Optional[int] = None,
        search_timeout: Optional[float] = None,
    ) -> None:
        self.context = context
        self.telemetry = telemetry or StructuredTelemetry()
        self._latest_trace: Dict[str, Any] = {}
        self._logger = get_logger(__name__).bind(component="shiritori_search_service")

        self._metric_requests = create_counter(
            "shiritori_search_requests_total",
            "Chain search requests received.",
            label_names=("operation",),
        )
        self._metric_failures = create_counter(
            "shiritori_search_request_failures_total",
            "Chain search requests that raised an exception.",
            label_names=("operation",),
        )
        self._metric_duration = create_histogram(
            "shiritori_search_request_seconds",
            "Latency of chain search requests.",
            label_names=("operation",),
        )
        self._metric_results = create_histogram(
            "shiritori_search_result_count",
            "Number of chains or words returned per request.",
            label_names=("operation",),
        )

        self._search_timeout: Optional[float] = None
        if search_timeout is not None and float(search_timeout) >= 0:
            self._search_timeout = float(search_timeout)

        self._search_semaphore: Optional[threading.BoundedSemaphore] = None
        if max_concurrent_searches is not None and int(max_concurrent_searches) > 0:
            self._search_semaphore = threading.BoundedSemaphore(int(max_concurrent_searches))

        self._logger.info(
            "Search service initialised",
            context={
                "collections": list(context.names()),
                "max_concurrent_searches": max_concurrent_searches,
                "search_timeout": self._search_timeout,
            },
        )

    # Introspection ---------------------------------------------------------
    def collection_names(self) -> Tuple[str, ...]:
        return self.context.names()

    def get_latest_telemetry(self) -> Dict[str, Any]:
        """Return the telemetry snapshot of the most recent request."""

        if not self._latest_trace:
            return self.telemetry.latest_snapshot()
        return copy.deepcopy(self._latest_trace)

    # Execution -------------------------------------------------------------
    @contextmanager
    def _search_slot(self) -> Generator[None, None, None]:
        """Bound concurrent searches when a semaphore has been configured."""

        semaphore = self._search_semaphore
        if semaphore is None:
            yield
            return

        wait = self.telemetry.timer("search.gate.wait")
        with wait:
            if self._search_timeout is None:
                acquired = semaphore.acquire()
            else:
                acquired = semaphore.acquire(timeout=self._search_timeout)

        if not acquired:
            self.telemetry.increment("search.gate.timeout")
            raise TimeoutError("Search capacity exhausted; please retry later")

        self.telemetry.increment("search.gate.acquired")
        try:
            yield
        finally:
            semaphore.release()

    def _run(
        self,
        operation: str,
        collection: str,
        search: Callable[..., Any],
        details: Optional[Dict[str, Any]] = None,
    ) -> Any:
        context = {"operation": operation, "collection": collection}
        if details:
            context.update({key: value for key, value in details.items() if value is not None})

        self._metric_requests.labels(operation=operation).inc()
        self.telemetry.start_trace(f"search.{operation}")
        for key, value in context.items():
            self.telemetry.annotate(f"request.{key}", value)
        self._logger.info("Search started", context=context)

        with start_span(f"search.{operation}", {"collection": collection}) as span:
            try:
                index = self.context.index_for(collection)
                with self._search_slot(), self._metric_duration.labels(
                    operation=operation
                ).time(), self.telemetry.timer(f"search.{operation}") as timing:
                    result = search(index)
                    timing["results"] = _result_size(result)
            except Exception as exc:
                self._metric_failures.labels(operation=operation).inc()
                self.telemetry.increment("search.failed")
                record_exception(span, exc)
                self._logger.error(
                    "Search failed",
                    context={**context, "error": str(exc), "error_type": type(exc).__name__},
                )
                self._latest_trace = self.telemetry.snapshot()
                raise

            size = _result_size(result)
            self._metric_results.labels(operation=operation).observe(size)
            self.telemetry.increment("search.completed")
            self.telemetry.annotate("result.total", size)
            add_span_attributes(span, {"result.total": size})

        self._latest_trace = self.telemetry.snapshot()
        self._logger.info("Search finished", context={**context, "results": size})
        return result

    # Typed operations ------------------------------------------------------
    def exact(self, collection: str, constraints: SearchConstraints) -> List[List[str]]:
        return self._run(
            "exact",
            collection,
            lambda index: search_exact(index, constraints),
            {"length": constraints.length},
        )

    def shortest(
        self,
        collection: str,
        constraints: SearchConstraints,
        cost_model: CostModel | str = CostModel.WORDS,
    ) -> List[List[str]]:
        cost_model = CostModel(cost_model)
        return self._run(
            "shortest",
            collection,
            lambda index: search_shortest(index, constraints, cost_model),
            {"cost_model": cost_model.value},
        )

    def count(
        self,
        collection: str,
        constraints: SearchConstraints,
        which: Boundary | str = Boundary.END,
    ) -> Dict[str, int]:
        which = Boundary(which)
        return self._run(
            "count",
            collection,
            lambda index: count_by_boundary(index, constraints, which),
            {"length": constraints.length, "boundary": which.value},
        )

    def wildcard_anchored(
        self,
        collection: str,
        start_pattern: str,
        end_pattern: Optional[str],
        length: int,
        constraints: Optional[SearchConstraints] = None,
    ) -> List[List[str]]:
        return self._run(
            "wildcard_anchored",
            collection,
            lambda index: search_wildcard_anchored(
                index, start_pattern, end_pattern, length, constraints
            ),
            {"start_pattern": start_pattern, "end_pattern": end_pattern, "length": length},
        )

    def multi_length(
        self,
        collection: str,
        length_sets: Sequence[Iterable[int] | int],
        allow_permutation: bool = False,
        constraints: Optional[SearchConstraints] = None,
    ) -> List[List[str]]:
        return self._run(
            "multi_length",
            collection,
            lambda index: search_multi_length(index, length_sets, allow_permutation, constraints),
            {"positions": len(length_sets), "allow_permutation": allow_permutation},
        )

    def loop(
        self,
        collection: str,
        pattern: str,
        constraints: Optional[SearchConstraints] = None,
    ) -> List[List[str]]:
        return self._run(
            "loop",
            collection,
            lambda index: search_loop(index, pattern, constraints),
            {"pattern": pattern},
        )

    def wildcard_lookup(self, collection: str, pattern: str) -> List[str]:
        """Words of ``collection`` matching ``pattern`` as a whole."""

        matcher = compile_pattern(pattern)
        return self._run(
            "wildcard_lookup",
            collection,
            lambda index: matcher.filter(index.words),
            {"pattern": pattern},
        )

    def substring_lookup(self, collection: str, text: str) -> List[str]:
        if not text:
            raise ValueError("search text must not be empty")
        return self._run(
            "substring_lookup",
            collection,
            lambda index: sort_words(word for word in index.words if text in word),
            {"text": text},
        )

    # Request-shaped operations ---------------------------------------------
    def shiritori(
        self,
        list_name: str,
        first_char: Optional[str],
        last_char: Optional[str],
        word_count: WordCount,
        *,
        required: Sequence[str] = (),
        count_mode: CountMode | str = CountMode.AT_LEAST,
        excluded: Sequence[str] = (),
        no_preceding: bool = False,
        no_succeeding: bool = False,
        cost_model: CostModel | str = CostModel.WORDS,
    ) -> Dict[str, Any]:
        """Answer a start/end/length request the way the search form expects.

        With both end units given the matching chains are listed under
        ``results``. Otherwise only counts are returned, grouped by the open
        end: by last unit when ``last_char`` is missing, else by first unit.
        """

        start_unit = _validate_unit(first_char, "first character")
        end_unit = _validate_unit(last_char, "last character")
        word_count = _validate_word_count(word_count)

        constraints = SearchConstraints(
            start_unit=start_unit,
            end_unit=end_unit,
            length=None if word_count == SHORTEST else word_count,
            required=tuple(required),
            count_mode=CountMode(count_mode),
            excluded=tuple(excluded),
            no_preceding=no_preceding,
            no_succeeding=no_succeeding,
        )

        if start_unit is None or end_unit is None:
            if word_count == SHORTEST:
                return {"total_count": 0, "char_counts": {}}
            which = Boundary.END if end_unit is None else Boundary.START
            counts = self.count(list_name, constraints, which)
            return {"total_count": sum(counts.values()), "char_counts": counts}

        if word_count == SHORTEST:
            return {"results": self.shortest(list_name, constraints, cost_model)}
        return {"results": self.exact(list_name, constraints)}

    def word_count_shiritori(
        self,
        list_name: str,
        word_counts: Sequence[Iterable[int] | int],
        allow_permutation: bool = False,
        *,
        required: Sequence[str] = (),
        count_mode: CountMode | str = CountMode.AT_LEAST,
        excluded: Sequence[str] = (),
        no_preceding: bool = False,
        no_succeeding: bool = False,
    ) -> Dict[str, Any]:
        if not word_counts:
            raise ValueError("at least one word length is required")
        constraints = SearchConstraints(
            required=tuple(required),
            count_mode=CountMode(count_mode),
            excluded=tuple(excluded),
            no_preceding=no_preceding,
            no_succeeding=no_succeeding,
        )
        return {
            "results": self.multi_length(list_name, word_counts, allow_permutation, constraints)
        }


__all__ = ["SHORTEST", "ShiritoriSearchService"]
