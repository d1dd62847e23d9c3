"""Shared utilities for modplan."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


def dedupe_preserving_order(names: Iterable[str]) -> tuple[str, ...]:
    """Collapse repeated names, keeping the first occurrence of each.

    Examples:
        >>> dedupe_preserving_order(["Core", "Engine", "Core"])
        ('Core', 'Engine')
        >>> dedupe_preserving_order([])
        ()
    """
    seen: set[str] = set()
    unique: list[str] = []
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        unique.append(name)
    return tuple(unique)


def format_path(names: Sequence[str]) -> str:
    """Render a module path for diagnostics.

    Examples:
        >>> format_path(["A", "B", "A"])
        'A -> B -> A'
    """
    return " -> ".join(names)
