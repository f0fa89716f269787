"""Lightweight validation helpers used at the roster boundary."""

from collections import Counter
from typing import Any, Iterable, List


def ensure_present(value: Any, field: str) -> None:
    """Raise ValueError if value is falsy."""
    if value in (None, "", []):
        raise ValueError(f"{field} is required")


def ensure_unique(values: Iterable[str], field: str) -> None:
    """Raise ValueError listing any value that appears more than once."""
    duplicates: List[str] = sorted(v for v, n in Counter(values).items() if n > 1)
    if duplicates:
        raise ValueError(f"duplicate {field}: {', '.join(duplicates)}")
