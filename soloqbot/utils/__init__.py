"""Shared helpers: logging, rendering, ranking, Redis and errors."""
