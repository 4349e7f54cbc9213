"""Application layer – search use case, pagination and feature flags."""
