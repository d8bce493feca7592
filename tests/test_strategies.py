"""Tests for Hypothesis strategy derivation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

import pytest
from hypothesis import given

from seqsort import InvalidArgument, bubble_sort, sort
from seqsort._strategies import (
    find_satisfying_kwargs,
    fixed_width_ints,
    int_range,
    int_sequences,
    sequence_parameter,
    strategy_for_function,
)


class TestIntRange:
    def test_default_is_32_bit(self):
        assert int_range() == (-(2**31), 2**31 - 1)

    def test_eight_bit(self):
        assert int_range(8) == (-128, 127)

    @pytest.mark.parametrize("bits", [0, 65, -1])
    def test_rejects_bad_width(self, bits):
        with pytest.raises(InvalidArgument):
            int_range(bits)


class TestIntSequences:
    @given(int_sequences(bits=8, max_size=5))
    def test_respects_width_and_size(self, xs):
        assert len(xs) <= 5
        assert all(-128 <= x <= 127 for x in xs)

    @given(fixed_width_ints(16))
    def test_fixed_width(self, x):
        assert -(2**15) <= x < 2**15


class TestStrategyForFunction:
    @given(strategy_for_function(sort, bits=8, max_list_size=4))
    def test_sort_kwargs(self, kwargs):
        assert set(kwargs) == {"sequence"}
        assert isinstance(kwargs["sequence"], list)
        assert len(kwargs["sequence"]) <= 4

    @given(strategy_for_function(bubble_sort, max_list_size=3))
    def test_skips_keyword_only_defaults(self, kwargs):
        assert set(kwargs) == {"xs"}

    def test_tuple_and_optional_hints(self):
        def f(a: tuple[int, ...], b: Optional[int]) -> None:
            return None
        kwargs = find_satisfying_kwargs(f, strategy_for_function(f, max_list_size=3))
        assert isinstance(kwargs["a"], tuple)
        assert kwargs["b"] is None or isinstance(kwargs["b"], int)

    def test_find_satisfying_respects_requires(self):
        from seqsort import requires

        @requires(lambda xs: len(xs) >= 2)
        def f(xs: list[int]) -> list[int]:
            return xs
        kwargs = find_satisfying_kwargs(f, strategy_for_function(f))
        assert len(kwargs["xs"]) >= 2


class TestSequenceParameter:
    def test_sort(self):
        assert sequence_parameter(sort) == "sequence"

    def test_bubble_sort_ignores_hook(self):
        assert sequence_parameter(bubble_sort) == "xs"

    def test_abc_sequence(self):
        def f(items: Sequence[int]) -> list[int]:
            return list(items)
        assert sequence_parameter(f) == "items"

    def test_scalar_parameter(self):
        def f(xs: list[int], k: int) -> list[int]:
            return xs
        assert sequence_parameter(f) is None
