"""Application layer: word lists, search service and user interface."""
