"""Three-way comparison helpers shared by tags and images."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T")


def cmp(a: Any, b: Any) -> int:
    """Return ``-1``, ``0`` or ``1`` like the classic ``cmp`` builtin."""
    return (a > b) - (a < b)


def compare_present(a: T, b: T | None, compare: Callable[[T, T], int]) -> int:
    """Compare *a* against *b*, where a missing *b* always ranks lower.

    Args:
        a: The value being compared.
        b: The other value, possibly ``None``.
        compare: Three-way comparison used when *b* is present.

    Returns:
        ``1`` if *b* is ``None``, otherwise ``compare(a, b)``.
    """
    if b is None:
        return 1
    return compare(a, b)
