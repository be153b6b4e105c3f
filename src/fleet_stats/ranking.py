"""Deterministic ordering for frequency tables."""

from collections.abc import Mapping


def rank_counts(counts: Mapping[str, int]) -> list[tuple[str, int]]:
    """Return ``(key, count)`` pairs, highest count first, ties by ascending key.

    >>> rank_counts({"fra": 3, "ams": 3, "lon": 5})
    [('lon', 5), ('ams', 3), ('fra', 3)]
    """
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def nested_totals(nested: Mapping[str, Mapping[str, int]]) -> dict[str, int]:
    """Per-key sums of a nested table."""
    return {key: sum(sub.values()) for key, sub in nested.items()}


def rank_nested(nested: Mapping[str, Mapping[str, int]]) -> list[tuple[str, int, list[tuple[str, int]]]]:
    """Rank the outer keys of a nested table by their summed counts.

    Each row is ``(key, total, ranked_sub_counts)``; inner pairs use the same
    ordering as :func:`rank_counts`.
    """
    return [(key, total, rank_counts(nested[key])) for key, total in rank_counts(nested_totals(nested))]
