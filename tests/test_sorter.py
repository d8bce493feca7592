"""Tests for the bubble sort itself."""

from __future__ import annotations

from collections import Counter

import pytest
from hypothesis import given
from hypothesis import strategies as st

from seqsort import ContractViolation, InvalidArgument, bubble_sort, is_permutation, is_sorted, sort, sort_spec
from seqsort._contracts import get_contracts
from seqsort._strategies import int_sequences


# ---------------------------------------------------------------------------
# Fixed examples
# ---------------------------------------------------------------------------

class TestSortExamples:
    @pytest.mark.parametrize(
        "given_xs, expected",
        [
            ([], []),
            ([5], [5]),
            ([5, 3, 4, 1, 2], [1, 2, 3, 4, 5]),
            ([2, 2, 1], [1, 2, 2]),
            ([1, 2, 3], [1, 2, 3]),
            ([3, 2, 1], [1, 2, 3]),
            ([-(2**31), 2**31 - 1, 0, -1], [-(2**31), -1, 0, 2**31 - 1]),
        ],
    )
    def test_sorts(self, given_xs, expected):
        assert sort(given_xs) == expected

    def test_does_not_mutate_input(self):
        xs = [3, 1, 2]
        out = sort(xs)
        assert xs == [3, 1, 2]
        assert out is not xs

    def test_accepts_tuple(self):
        assert sort((4, 2, 3)) == [2, 3, 4]

    def test_none_is_invalid_argument(self):
        with pytest.raises(InvalidArgument, match="must not be None"):
            sort(None)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            sort(None)

    def test_unhashable_elements(self):
        assert sort([[2], [1], [1, 0]]) == [[1], [1, 0], [2]]


class TestBubbleSortInPlace:
    def test_returns_same_object(self):
        xs = [2, 1]
        assert bubble_sort(xs) is xs
        assert xs == [1, 2]

    def test_empty(self):
        xs: list[int] = []
        assert bubble_sort(xs) == []

    def test_none_rejected(self):
        with pytest.raises(InvalidArgument):
            bubble_sort(None)

    def test_tuple_rejected(self):
        with pytest.raises(InvalidArgument, match="tuple"):
            bubble_sort((2, 1))

    def test_sorts_other_comparables(self):
        assert bubble_sort(["pear", "apple", "fig"]) == ["apple", "fig", "pear"]

    def test_on_pass_stops_early_when_sorted(self):
        passes = []
        bubble_sort([1, 2, 3, 4], on_pass=lambda i, xs: passes.append(i))
        assert passes == [0]

    def test_on_pass_sees_largest_settle_at_tail(self):
        snapshots = []
        bubble_sort([4, 3, 2, 1], on_pass=lambda i, xs: snapshots.append(list(xs)))
        assert snapshots[0][-1] == 4
        assert snapshots[1][-2:] == [3, 4]
        assert snapshots[-1] == [1, 2, 3, 4]
        assert len(snapshots) <= 4


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

class TestSortProperties:
    @given(int_sequences(max_size=40))
    def test_result_is_sorted(self, xs):
        assert is_sorted(sort(xs))

    @given(int_sequences(max_size=40))
    def test_result_is_permutation(self, xs):
        assert Counter(sort(xs)) == Counter(xs)

    @given(int_sequences())
    def test_idempotent(self, xs):
        once = sort(xs)
        assert sort(once) == once

    @given(int_sequences())
    def test_matches_reference(self, xs):
        assert sort(xs) == sort_spec(xs)

    @given(int_sequences())
    def test_in_place_matches_copying(self, xs):
        assert bubble_sort(list(xs)) == sort(xs)

    @given(st.lists(st.integers(min_value=-3, max_value=3), max_size=30))
    def test_many_duplicates(self, xs):
        assert sort(xs) == sorted(xs)


# ---------------------------------------------------------------------------
# Contracts on sort
# ---------------------------------------------------------------------------

class TestSortContracts:
    def test_contracts_attached(self):
        b = get_contracts(sort)
        assert len(b["requires"]) == 1
        assert len(b["ensures"]) == 1
        assert b["against"]["spec"] is sort_spec

    def test_reference_is_spec(self):
        assert get_contracts(sort_spec)["is_spec"] is True

    def test_postcondition_catches_broken_result(self, monkeypatch):
        import seqsort._sorter as sorter_mod

        # sort's body looks up bubble_sort in its module globals at call time.
        monkeypatch.setattr(sorter_mod, "bubble_sort", lambda xs: xs[::-1])
        with pytest.raises(ContractViolation, match="Postcondition failed"):
            sort([1, 2, 3])


class TestPredicates:
    def test_is_sorted(self):
        assert is_sorted([])
        assert is_sorted([1, 1, 2])
        assert not is_sorted([2, 1])

    def test_is_permutation(self):
        assert is_permutation([1, 2, 2], [2, 1, 2])
        assert not is_permutation([1, 2], [1, 2, 2])
        assert not is_permutation([1, 2, 2], [1, 1, 2])

    def test_is_permutation_unhashable(self):
        assert is_permutation([[1], [2]], [[2], [1]])
        assert not is_permutation([[1], [2]], [[1], [1]])
