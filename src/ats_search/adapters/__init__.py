"""Adapters – storage collaborators that evaluate predicate trees."""
