"""Kernel – errors, predicate tree and time primitives shared by every layer."""
