"""Markdown rendering of search results for the UI."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

CHAIN_SEPARATOR = " → "


class ChainResultFormatter:
    """Render chain lists, boundary counts and flat word lists as markdown."""

    def __init__(self, *, max_rows: int = 500) -> None:
        self.max_rows = max(1, int(max_rows))

    def _truncation_note(self, total: int) -> List[str]:
        if total <= self.max_rows:
            return []
        return ["", f"_Showing the first {self.max_rows} of {total} results._"]

    def format_chains(self, chains: Sequence[Sequence[str]], *, title: str = "Chains") -> str:
        if not chains:
            return "❌ No chains satisfy these conditions."

        lines = [f"### {title} ({len(chains)})", ""]
        for number, chain in enumerate(chains[: self.max_rows], start=1):
            lines.append(f"{number}. {CHAIN_SEPARATOR.join(chain)}")
        lines.extend(self._truncation_note(len(chains)))
        return "\n".join(lines)

    def format_counts(self, counts: Mapping[str, int], *, boundary: str = "end") -> str:
        total = sum(counts.values())
        if not total:
            return "❌ No chains satisfy these conditions."

        label = "First unit" if boundary == "start" else "Last unit"
        lines = [
            f"### {total} chains",
            "",
            f"| {label} | Chains |",
            "| --- | ---: |",
        ]
        lines.extend(f"| {unit} | {count} |" for unit, count in counts.items())
        return "\n".join(lines)

    def format_words(self, words: Sequence[str], *, title: str = "Matches") -> str:
        if not words:
            return "❌ No words match."
        lines = [f"### {title} ({len(words)})", ""]
        lines.append("、".join(words[: self.max_rows]))
        lines.extend(self._truncation_note(len(words)))
        return "\n".join(lines)

    def format_response(self, response: Dict[str, Any], *, boundary: Optional[str] = None) -> str:
        """Render a ``shiritori``/``word_count_shiritori`` service response."""

        if "results" in response:
            return self.format_chains(response["results"])
        return self.format_counts(response.get("char_counts", {}), boundary=boundary or "end")

    def format_telemetry(self, snapshot: Dict[str, Any]) -> str:
        if not snapshot:
            return ""

        events = snapshot.get("events") or []
        counters = snapshot.get("counters") or {}
        if not events and not counters:
            return ""

        output: List[str] = ["#### Search activity"]
        if events:
            output.append("")
            for event in events[-8:]:
                name = str(event.get("name", "event"))
                duration = event.get("duration")
                metadata = event.get("metadata") or {}
                suffix = ", ".join(f"{key}={value}" for key, value in metadata.items())
                suffix = f" ({suffix})" if suffix else ""
                if isinstance(duration, (float, int)):
                    output.append(f"- `{name}` took {float(duration):.3f}s{suffix}")
                else:
                    output.append(f"- `{name}`{suffix}")
        if counters:
            output.append("")
            output.append(", ".join(f"`{key}`: {value:g}" for key, value in counters.items()))
        return "\n".join(output)


__all__ = ["CHAIN_SEPARATOR", "ChainResultFormatter"]
