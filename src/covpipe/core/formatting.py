"""Summary formatting utilities for consistent terminal output.

Design principles:
- Every summary fits on one line
- Grammatically correct (1 package vs 2 packages)
"""

from __future__ import annotations


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Args:
        count: The number of items
        singular: Singular form (e.g., "package")
        plural: Plural form (default: singular + "s")

    Returns:
        Formatted string like "1 package" or "3 packages"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def format_percent(value: float) -> str:
    """Format a percentage with one decimal place: ``80.0%``."""
    return f"{value:.1f}%"

