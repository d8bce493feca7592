from __future__ import annotations

import collections.abc
import inspect
import types
from collections.abc import Callable
from typing import Any, Union, get_args, get_origin, get_type_hints

from hypothesis import find
from hypothesis import strategies as st

from seqsort._contracts import _check_requires, _root_original
from seqsort._errors import InvalidArgument

DEFAULT_BITS = 32

_SEQUENCE_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)


def int_range(bits: int = DEFAULT_BITS) -> tuple[int, int]:
    if not 1 <= bits <= 64:
        raise InvalidArgument(f"bits must be between 1 and 64, got {bits}")
    return -(2 ** (bits - 1)), 2 ** (bits - 1) - 1


def fixed_width_ints(bits: int = DEFAULT_BITS) -> st.SearchStrategy[int]:
    lo, hi = int_range(bits)
    return st.integers(min_value=lo, max_value=hi)


def int_sequences(*, bits: int = DEFAULT_BITS, max_size: int = 20) -> st.SearchStrategy[list[int]]:
    """Lists of signed ``bits``-wide integers, up to ``max_size`` long."""
    return st.lists(fixed_width_ints(bits), max_size=max_size)


def _strategy_for_type(
    tp: Any, *, bits: int = DEFAULT_BITS, max_list_size: int = 20, depth: int = 0
) -> st.SearchStrategy[Any]:
    if depth > 3:
        return st.none()

    origin = get_origin(tp)
    args = get_args(tp)

    if tp is int:
        return fixed_width_ints(bits)
    if tp is bool:
        return st.booleans()
    if tp is Any:
        return fixed_width_ints(bits)

    if origin is Union or origin is types.UnionType:
        others = [a for a in args if a is not type(None)]
        inner = [_strategy_for_type(a, bits=bits, max_list_size=max_list_size, depth=depth + 1) for a in others]
        if len(others) < len(args):
            inner.insert(0, st.none())
        return st.one_of(*inner)

    if origin in _SEQUENCE_ORIGINS or tp in _SEQUENCE_ORIGINS:
        (elem,) = args if args else (int,)
        return st.lists(
            _strategy_for_type(elem, bits=bits, max_list_size=max_list_size, depth=depth + 1),
            max_size=max_list_size,
        )

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return st.lists(
                _strategy_for_type(args[0], bits=bits, max_list_size=max_list_size, depth=depth + 1),
                max_size=max_list_size,
            ).map(tuple)
        return st.tuples(
            *[_strategy_for_type(a, bits=bits, max_list_size=max_list_size, depth=depth + 1) for a in args]
        )

    return st.just(None)


def strategy_for_function(
    fn: Callable[..., Any], *, bits: int = DEFAULT_BITS, max_list_size: int = 20
) -> st.SearchStrategy[dict[str, Any]]:
    """Keyword-argument strategy derived from ``fn``'s type hints.

    Keyword-only parameters with defaults (hooks, options) are left out so the
    function runs with its defaults.
    """
    root = _root_original(fn)
    sig = inspect.signature(root)
    hints = get_type_hints(root)

    kwargs_strats: dict[str, st.SearchStrategy[Any]] = {}
    for name, param in sig.parameters.items():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.kind is param.KEYWORD_ONLY and param.default is not inspect.Parameter.empty:
            continue
        tp = hints.get(name, Any)
        kwargs_strats[name] = _strategy_for_type(tp, bits=bits, max_list_size=max_list_size)

    return st.fixed_dictionaries(kwargs_strats)


def sequence_parameter(fn: Callable[..., Any]) -> str | None:
    """Name of ``fn``'s single sequence-typed parameter, if it has exactly one."""
    root = _root_original(fn)
    hints = get_type_hints(root)
    names = []
    for name, param in inspect.signature(root).parameters.items():
        if param.kind is param.KEYWORD_ONLY and param.default is not inspect.Parameter.empty:
            continue
        tp = hints.get(name)
        origin = get_origin(tp)
        if origin in _SEQUENCE_ORIGINS or origin is tuple or tp in _SEQUENCE_ORIGINS:
            names.append(name)
        else:
            return None
    return names[0] if len(names) == 1 else None


def find_satisfying_kwargs(
    fn: Callable[..., Any], strat_kwargs: st.SearchStrategy[dict[str, Any]]
) -> dict[str, Any]:
    root = _root_original(fn)

    def ok(kwargs: dict[str, Any]) -> bool:
        ok_pre, _, _ = _check_requires(root, (), kwargs)
        return ok_pre

    return find(strat_kwargs, ok)
