from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Any


def is_sorted(xs: Sequence[Any]) -> bool:
    return all(xs[i] <= xs[i + 1] for i in range(len(xs) - 1))


def is_permutation(a: Sequence[Any], b: Sequence[Any]) -> bool:
    if len(a) != len(b):
        return False
    try:
        return Counter(a) == Counter(b)
    except TypeError:
        # Unhashable but comparable elements (lists, dicts of lists...).
        return sorted(a) == sorted(b)


def is_sorted_permutation(original: Sequence[Any], result: Sequence[Any]) -> bool:
    return is_sorted(result) and is_permutation(original, result)
