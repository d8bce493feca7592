# example_broken_sort.py
from __future__ import annotations

from seqsort import against, ensures, is_permutation, is_sorted, sort_spec


@against(sort_spec, max_examples=200)
@ensures(lambda xs, result: is_sorted(result) and is_permutation(xs, result))
def short_pass_sort(xs: list[int]) -> list[int]:
    # Inner scan stops one pair early, so the last pair is never compared.
    out = list(xs)
    n = len(out)
    for i in range(n):
        for j in range(n - 2 - i):
            if out[j] > out[j + 1]:
                out[j], out[j + 1] = out[j + 1], out[j]
    return out
