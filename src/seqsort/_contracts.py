"""Runtime contracts for sequence functions.

Contracts are stored in a bundle on the innermost (undecorated) function so
that stacked decorators, the self-check engine and ``get_contracts`` all see
the same metadata no matter which wrapper they were handed.
"""

from __future__ import annotations

import copy
import functools
from collections.abc import Callable
from typing import Any

from seqsort._errors import ContractViolation
from seqsort._util import _qualified_name, _safe_call

_BUNDLE_ATTR = "__seqsort_contracts__"
_ORIGINAL_ATTR = "__seqsort_original__"


def _root_original(fn: Callable[..., Any]) -> Callable[..., Any]:
    cur = fn
    while True:
        nxt = getattr(cur, _ORIGINAL_ATTR, None)
        if nxt is None:
            return cur
        cur = nxt


def get_contracts(fn: Callable[..., Any]) -> dict[str, Any]:
    base = _root_original(fn)
    if not hasattr(base, _BUNDLE_ATTR):
        setattr(base, _BUNDLE_ATTR, {"requires": [], "ensures": [], "against": None, "is_spec": False})
    return getattr(base, _BUNDLE_ATTR)  # type: ignore[no-any-return]


def has_contracts(fn: Any) -> bool:
    return callable(fn) and hasattr(_root_original(fn), _BUNDLE_ATTR)


def _set_original(wrapper: Callable[..., Any], original: Callable[..., Any]) -> None:
    setattr(wrapper, _ORIGINAL_ATTR, original)


def _check_requires(
    fn: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> tuple[bool, str, type[Exception]]:
    for clause in get_contracts(fn)["requires"]:
        ok, err = _safe_call(clause["pred"], *args, **kwargs)
        if not ok:
            return False, clause["message"] or err or "returned False", clause["exc"]
    return True, "", ContractViolation


def _check_ensures(
    fn: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    result: Any,
) -> tuple[bool, str]:
    for pred in get_contracts(fn)["ensures"]:
        ok, err = _safe_call(pred, *args, **kwargs, result=result)
        if not ok:
            return False, err or "returned False"
    return True, ""


def _enforce_requires(fn: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
    ok, err, exc = _check_requires(fn, args, kwargs)
    if not ok:
        raise exc(f"Precondition failed for {_qualified_name(_root_original(fn))}: {err}")


def requires(
    pred: Callable[..., bool],
    *,
    exc: type[Exception] = ContractViolation,
    message: str | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        get_contracts(fn)["requires"].append({"pred": pred, "exc": exc, "message": message})

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            _enforce_requires(fn, args, kwargs)
            return fn(*args, **kwargs)

        _set_original(wrapper, fn)
        return wrapper

    return deco


def ensures(pred: Callable[..., bool]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        get_contracts(fn)["ensures"].append(pred)

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            _enforce_requires(fn, args, kwargs)
            # Postconditions see the arguments as they were before an in-place call.
            old_args, old_kwargs = copy.deepcopy((args, kwargs))
            result = fn(*args, **kwargs)
            ok, err = _check_ensures(fn, old_args, old_kwargs, result)
            if not ok:
                raise ContractViolation(f"Postcondition failed for {_qualified_name(_root_original(fn))}: {err}")
            return result

        _set_original(wrapper, fn)
        return wrapper

    return deco


def spec(fn: Callable[..., Any]) -> Callable[..., Any]:
    get_contracts(fn)["is_spec"] = True
    return fn


def against(
    spec_fn: Callable[..., Any],
    *,
    eq: Callable[[Any, Any], bool] | None = None,
    max_examples: int = 200,
    deadline_ms: int | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        get_contracts(fn)["against"] = {
            "spec": spec_fn,
            "eq": eq,
            "max_examples": max_examples,
            "deadline_ms": deadline_ms,
        }
        return fn

    return deco
