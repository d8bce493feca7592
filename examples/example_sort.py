# example_sort.py
from __future__ import annotations

from seqsort import against, ensures, is_permutation, is_sorted, requires, sort_spec


@against(sort_spec, max_examples=200)
@ensures(lambda xs, result: is_sorted(result) and is_permutation(xs, result))
@requires(lambda xs: xs is not None)
def insertion_sort(xs: list[int]) -> list[int]:
    out = list(xs)
    for i in range(1, len(out)):
        key = out[i]
        j = i - 1
        while j >= 0 and out[j] > key:
            out[j + 1] = out[j]
            j -= 1
        out[j + 1] = key
    return out
