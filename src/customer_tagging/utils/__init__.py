"""Shared helpers: logging, errors, validation, clock and numeric utilities."""
