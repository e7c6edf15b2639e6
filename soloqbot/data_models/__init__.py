"""Immutable data transfer objects."""
