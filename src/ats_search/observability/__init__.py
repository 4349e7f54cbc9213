"""Observability – structured logging for the search engine."""
