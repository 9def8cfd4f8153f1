"""Shared helpers: HTTP, logging, cancellation and error types."""
