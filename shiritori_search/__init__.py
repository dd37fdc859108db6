"""Shiritori word-chain search."""

__version__ = "0.1.0"
