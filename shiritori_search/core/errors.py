"""Exceptions raised by the chain-search core."""

from __future__ import annotations


class ShiritoriSearchError(Exception):
    """Base class for errors raised by :mod:`shiritori_search`."""


class InvalidPattern(ShiritoriSearchError, ValueError):
    """A wildcard pattern could not be compiled."""

    def __init__(self, pattern: object, reason: str = "") -> None:
        self.pattern = pattern
        self.reason = reason
        message = f"invalid wildcard pattern {pattern!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnknownCollection(ShiritoriSearchError, LookupError):
    """No adjacency index has been built for the requested collection."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown word collection {name!r}")


class EmptyInput(ShiritoriSearchError, ValueError):
    """A zero-length word reached the phonetic normalizer."""

    def __init__(self) -> None:
        super().__init__("cannot derive link units from an empty word")


__all__ = ["ShiritoriSearchError", "InvalidPattern", "UnknownCollection", "EmptyInput"]
