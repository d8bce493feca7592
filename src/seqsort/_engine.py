from __future__ import annotations

import copy
import dataclasses
import importlib
import json
import os
import time
from collections.abc import Callable
from typing import Any

from hypothesis import HealthCheck, assume, find, given, settings
from hypothesis.errors import FailedHealthCheck, NoSuchExample

from seqsort._contracts import _check_ensures, _check_requires, _root_original, get_contracts, has_contracts
from seqsort._properties import is_sorted_permutation
from seqsort._strategies import DEFAULT_BITS, find_satisfying_kwargs, sequence_parameter, strategy_for_function
from seqsort._util import _ensure_dir, _jsonable, _now_iso, _qualified_name, _timed_since

# Fixed inputs every sorter must get right regardless of what Hypothesis draws.
BOUNDARY_CASES: list[list[int]] = [
    [],
    [5],
    [5, 3, 4, 1, 2],
    [2, 2, 1],
    [1, 2, 3],
    [3, 2, 1],
    [-(2**31), 2**31 - 1, 0, -1],
]

_SUPPRESSED = [HealthCheck.too_slow, HealthCheck.filter_too_much]


@dataclasses.dataclass
class ObligationResult:
    function: str
    obligation: str
    status: str  # "pass" | "fail" | "error" | "skip"
    details: dict[str, Any]
    duration_s: float = 0.0

    def to_json(self) -> dict[str, Any]:
        return {
            "function": self.function,
            "obligation": self.obligation,
            "status": self.status,
            "details": self.details,
            "duration_s": round(self.duration_s, 3),
        }


def _collect_functions(module: Any) -> list[Callable[..., Any]]:
    fns: list[Callable[..., Any]] = []
    seen: set[int] = set()
    for _name, obj in vars(module).items():
        if not has_contracts(obj):
            continue
        # Re-exported names point at the same function; check it once.
        root = _root_original(obj)
        if id(root) in seen:
            continue
        seen.add(id(root))
        fns.append(obj)
    return fns


def _default_eq(a: Any, b: Any) -> bool:
    return a == b


def _run_case(
    root: Callable[..., Any], spec_fn: Callable[..., Any] | None, eq: Callable[[Any, Any], bool], kwargs: dict[str, Any]
) -> dict[str, Any] | None:
    """Run one input through ``root`` (and ``spec_fn``); return a counterexample or None."""
    impl_r = root(**copy.deepcopy(kwargs))
    ok_post, post_err = _check_ensures(root, (), copy.deepcopy(kwargs), impl_r)
    if not ok_post:
        return {
            "kwargs": _jsonable(kwargs),
            "impl_result": _jsonable(impl_r),
            "spec_result": None,
            "note": f"ensures failed: {post_err}",
        }
    if spec_fn is None:
        return None
    # Positional, so a reference may name its parameters differently.
    spec_r = spec_fn(*copy.deepcopy(list(kwargs.values())))
    if not eq(impl_r, spec_r):
        return {"kwargs": _jsonable(kwargs), "impl_result": _jsonable(impl_r), "spec_result": _jsonable(spec_r)}
    return None


def _find_counterexample(
    root: Callable[..., Any],
    spec_fn: Callable[..., Any],
    eq: Callable[[Any, Any], bool],
    *,
    bits: int,
    max_list_size: int,
) -> dict[str, Any] | None:
    strat_kwargs = strategy_for_function(root, bits=bits, max_list_size=max_list_size)

    def fails(kwargs: dict[str, Any]) -> bool:
        ok_pre, _, _ = _check_requires(root, (), kwargs)
        if not ok_pre:
            return False
        try:
            return _run_case(root, spec_fn, eq, kwargs) is not None
        except Exception:
            return True

    try:
        kwargs = find(strat_kwargs, fails)
    except NoSuchExample:
        return None

    try:
        return _run_case(root, spec_fn, eq, kwargs)
    except Exception as e:
        return {"kwargs": _jsonable(kwargs), "error": f"{type(e).__name__}: {e}"}


def _check_smoke(root: Callable[..., Any], qn: str, b: dict[str, Any], *, bits: int, max_list_size: int) -> ObligationResult:
    t0 = time.monotonic()
    try:
        example = find_satisfying_kwargs(root, strategy_for_function(root, bits=bits, max_list_size=max_list_size))
    except NoSuchExample:
        return ObligationResult(qn, "requires_satisfiable", "fail", {"error": "No satisfying input found"}, _timed_since(t0))

    try:
        r = root(**copy.deepcopy(example))
        ok_post, post_err = _check_ensures(root, (), copy.deepcopy(example), r)
    except Exception as e:
        return ObligationResult(qn, "contracts_smoke", "error", {"error": f"{type(e).__name__}: {e}"}, _timed_since(t0))

    if not ok_post:
        return ObligationResult(
            qn,
            "ensures_holds_on_smoke",
            "fail",
            {"example": _jsonable(example), "result": _jsonable(r), "error": post_err},
            _timed_since(t0),
        )
    return ObligationResult(
        qn,
        "contracts_smoke",
        "pass",
        {"example": _jsonable(example), "requires": len(b["requires"]), "ensures": len(b["ensures"])},
        _timed_since(t0),
    )


def _check_equiv(root: Callable[..., Any], qn: str, b: dict[str, Any], *, bits: int, max_list_size: int) -> ObligationResult:
    t0 = time.monotonic()
    cfg = b["against"]
    spec_fn = cfg["spec"]
    eq = cfg["eq"] or _default_eq
    max_examples = int(cfg["max_examples"])
    spec_name = _qualified_name(spec_fn)

    # Deterministic probe first; find() shrinks whatever it hits.
    ce = _find_counterexample(root, spec_fn, eq, bits=bits, max_list_size=max_list_size)
    if ce is not None:
        return ObligationResult(
            qn,
            "equiv_to_spec",
            "fail",
            {"spec": spec_name, "error": "counterexample found by find()", "counterexample": ce},
            _timed_since(t0),
        )

    strat_kwargs = strategy_for_function(root, bits=bits, max_list_size=max_list_size)
    shrunk_ce: list[dict[str, Any] | None] = [None]

    @settings(
        max_examples=max_examples,
        deadline=cfg["deadline_ms"],
        suppress_health_check=_SUPPRESSED,
        derandomize=False,
    )
    @given(strat_kwargs)
    def prop(kwargs: dict[str, Any]) -> None:
        ok_pre, _, _ = _check_requires(root, (), kwargs)
        assume(ok_pre)
        found = _run_case(root, spec_fn, eq, kwargs)
        if found is not None:
            shrunk_ce[0] = found
            raise AssertionError(found.get("note", "impl != spec"))

    try:
        prop()
    except FailedHealthCheck as e:
        return ObligationResult(
            qn, "equiv_to_spec", "fail", {"spec": spec_name, "error": f"FailedHealthCheck: {e}"}, _timed_since(t0)
        )
    except AssertionError as e:
        return ObligationResult(
            qn,
            "equiv_to_spec",
            "fail",
            {"spec": spec_name, "error": str(e), "counterexample": shrunk_ce[0]},
            _timed_since(t0),
        )
    except Exception as e:
        return ObligationResult(
            qn, "equiv_to_spec", "error", {"spec": spec_name, "error": f"{type(e).__name__}: {e}"}, _timed_since(t0)
        )
    return ObligationResult(
        qn,
        "equiv_to_spec",
        "pass",
        {"spec": spec_name, "max_examples": max_examples},
        _timed_since(t0),
    )


def _check_idempotent(
    root: Callable[..., Any], qn: str, param: str, *, bits: int, max_list_size: int, max_examples: int
) -> ObligationResult:
    t0 = time.monotonic()
    failure: list[dict[str, Any] | None] = [None]

    @settings(max_examples=max_examples, deadline=None, suppress_health_check=_SUPPRESSED)
    @given(strategy_for_function(root, bits=bits, max_list_size=max_list_size))
    def prop(kwargs: dict[str, Any]) -> None:
        ok_pre, _, _ = _check_requires(root, (), kwargs)
        assume(ok_pre)
        once = root(**copy.deepcopy(kwargs))
        twice = root(**{**copy.deepcopy(kwargs), param: copy.deepcopy(once)})
        if once != twice:
            failure[0] = {"kwargs": _jsonable(kwargs), "once": _jsonable(once), "twice": _jsonable(twice)}
            raise AssertionError("f(f(x)) != f(x)")

    try:
        prop()
    except AssertionError as e:
        return ObligationResult(qn, "idempotent", "fail", {"error": str(e), "counterexample": failure[0]}, _timed_since(t0))
    except Exception as e:
        return ObligationResult(qn, "idempotent", "error", {"error": f"{type(e).__name__}: {e}"}, _timed_since(t0))
    return ObligationResult(qn, "idempotent", "pass", {"max_examples": max_examples}, _timed_since(t0))


def _check_boundaries(root: Callable[..., Any], qn: str, param: str, b: dict[str, Any]) -> ObligationResult:
    t0 = time.monotonic()
    spec_fn = b["against"]["spec"] if b["against"] else None
    eq = (b["against"]["eq"] if b["against"] else None) or _default_eq
    failures: list[dict[str, Any]] = []
    for case in BOUNDARY_CASES:
        kwargs = {param: list(case)}
        try:
            ce = _run_case(root, spec_fn, eq, kwargs)
            if ce is None and spec_fn is None:
                result = root(**copy.deepcopy(kwargs))
                if not is_sorted_permutation(case, result):
                    ce = {"kwargs": _jsonable(kwargs), "impl_result": _jsonable(result)}
        except Exception as e:
            ce = {"kwargs": _jsonable(kwargs), "error": f"{type(e).__name__}: {e}"}
        if ce is not None:
            failures.append(ce)

    status = "fail" if failures else "pass"
    return ObligationResult(qn, "boundaries", status, {"cases": len(BOUNDARY_CASES), "failures": failures}, _timed_since(t0))


def check_function(
    fn: Callable[..., Any],
    *,
    bits: int = DEFAULT_BITS,
    max_list_size: int = 20,
    smoke_max_list_size: int = 5,
    idempotence_examples: int = 100,
    on_result: Callable[[ObligationResult], None] | None = None,
) -> list[ObligationResult]:
    """Run every obligation that applies to one contract-decorated function."""
    root = _root_original(fn)
    b = get_contracts(root)
    qn = _qualified_name(root)
    results: list[ObligationResult] = []

    def _emit(result: ObligationResult) -> None:
        results.append(result)
        if on_result is not None:
            on_result(result)

    smoke = _check_smoke(root, qn, b, bits=bits, max_list_size=smoke_max_list_size)
    _emit(smoke)
    if smoke.obligation == "requires_satisfiable":
        return results

    if b["against"] is not None and b["against"]["spec"] is not None:
        _emit(_check_equiv(root, qn, b, bits=bits, max_list_size=max_list_size))
    else:
        _emit(ObligationResult(qn, "equiv_to_spec", "skip", {"reason": "no @against(spec) attached"}))

    if b["is_spec"]:
        return results

    param = sequence_parameter(root)
    if param is None:
        reason = {"reason": "function does not take exactly one sequence argument"}
        _emit(ObligationResult(qn, "idempotent", "skip", reason))
        _emit(ObligationResult(qn, "boundaries", "skip", reason))
        return results

    _emit(
        _check_idempotent(
            root, qn, param, bits=bits, max_list_size=max_list_size, max_examples=idempotence_examples
        )
    )
    _emit(_check_boundaries(root, qn, param, b))
    return results


def check_module(
    module_name: str,
    *,
    out_dir: str = ".seqsort",
    bits: int = DEFAULT_BITS,
    max_list_size: int = 20,
    smoke_max_list_size: int = 5,
    on_result: Callable[[ObligationResult], None] | None = None,
) -> tuple[list[ObligationResult], dict[str, Any]]:
    _ensure_dir(out_dir)

    module = importlib.import_module(module_name)
    funcs = _collect_functions(module)

    results: list[ObligationResult] = []
    trust: dict[str, Any] = {"module": module_name, "timestamp": _now_iso(), "functions": []}

    for fn in funcs:
        fn_results = check_function(
            fn,
            bits=bits,
            max_list_size=max_list_size,
            smoke_max_list_size=smoke_max_list_size,
            on_result=on_result,
        )
        results.extend(fn_results)
        trust["functions"].append(
            {
                "function": _qualified_name(_root_original(fn)),
                "obligations": {r.obligation: r.status for r in fn_results},
            }
        )

    with open(os.path.join(out_dir, f"{module_name}.obligations.json"), "w") as f:
        json.dump([r.to_json() for r in results], f, indent=2, default=str)
    with open(os.path.join(out_dir, f"{module_name}.trust.json"), "w") as f:
        json.dump(trust, f, indent=2, default=str)

    return results, trust
