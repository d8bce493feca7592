"""Bubble sort over finite sequences of comparable elements.

``bubble_sort`` works in place on a list; ``sort`` copies its input first and
is the contract-checked entry point most callers want.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from seqsort._contracts import against, ensures, requires, spec
from seqsort._errors import InvalidArgument
from seqsort._properties import is_sorted_permutation

PassHook = Callable[[int, list[Any]], None]


def bubble_sort(xs: list[Any], *, on_pass: PassHook | None = None) -> list[Any]:
    """Sort ``xs`` in place into non-decreasing order and return it.

    Each outer pass moves the largest remaining element to the end of the
    unsorted prefix, so after ``k`` passes the last ``k`` slots are final.
    Stops as soon as a pass makes no swaps.

    Args:
        xs: the list to sort. It is mutated.
        on_pass: called with ``(pass_index, xs)`` after every completed pass.

    Raises:
        InvalidArgument: ``xs`` is ``None`` or not a list.
    """
    if xs is None:
        raise InvalidArgument("bubble_sort() requires a list, got None")
    if not isinstance(xs, list):
        raise InvalidArgument(f"bubble_sort() sorts lists in place, got {type(xs).__name__}")

    n = len(xs)
    for i in range(n):
        swapped = False
        for j in range(n - 1 - i):
            if xs[j] > xs[j + 1]:
                xs[j], xs[j + 1] = xs[j + 1], xs[j]
                swapped = True
        if on_pass is not None:
            on_pass(i, xs)
        if not swapped:
            break
    return xs


@spec
def sort_spec(sequence: list[int]) -> list[int]:
    return sorted(sequence)


@against(sort_spec, max_examples=300)
@ensures(lambda sequence, result: is_sorted_permutation(sequence, result))
@requires(lambda sequence: sequence is not None, exc=InvalidArgument, message="sequence must not be None")
def sort(sequence: list[int]) -> list[int]:
    """Return a new list with the elements of ``sequence`` in non-decreasing order.

    The input is left untouched. Any finite sequence is accepted, including
    tuples and the empty sequence.
    """
    return bubble_sort(list(sequence))
