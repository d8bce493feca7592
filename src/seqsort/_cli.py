from __future__ import annotations

import argparse
import importlib
import json
import sys
import time

from seqsort._engine import ObligationResult, check_module
from seqsort._errors import InvalidArgument
from seqsort._sorter import bubble_sort, sort
from seqsort._strategies import DEFAULT_BITS, int_range
from seqsort._term import bold, dim, force_color, green, red, style, yellow
from seqsort._tutorial import HOSTS, PLATFORMS, detect_platform, install_tutorial, load_tutorial, render_tutorial


def _status_label(status: str) -> str:
    if status == "pass":
        return green("PASS")
    if status == "fail":
        return style("FAIL", "red", "bold")
    if status == "error":
        return red("ERROR")
    if status == "skip":
        return yellow("SKIP")
    return status.upper()


def _print_result_line(r: ObligationResult, *, verbose: bool = False) -> None:
    # Pad on the raw status so ANSI codes don't break alignment.
    pad = " " * (5 - len(r.status))
    timing = "  " + dim(f"({r.duration_s:.1f}s)") if r.duration_s >= 0.05 else ""
    print(f"  {pad}{_status_label(r.status)}  {r.obligation:<22}  {bold(r.function)}{timing}")

    if not verbose or r.status not in ("fail", "error"):
        return
    ce = r.details.get("counterexample")
    if isinstance(ce, dict):
        for key, label in (("kwargs", "kwargs"), ("impl_result", "impl"), ("spec_result", "spec")):
            if key in ce:
                print(f"         {label + ':':<8}{json.dumps(ce[key], default=str)}")
        for key in ("note", "error"):
            if key in ce:
                print(f"         {key + ':':<8}{ce[key]}")
    for failure in r.details.get("failures", []):
        print(f"         case:   {json.dumps(failure, default=str)}")
    if "error" in r.details and not ce:
        print(f"         error:  {r.details['error']}")


def _print_summary(results: list[ObligationResult], total_s: float, out_dir: str) -> None:
    passed = sum(1 for r in results if r.status == "pass")
    failed = sum(1 for r in results if r.status in ("fail", "error"))
    skipped = sum(1 for r in results if r.status == "skip")

    parts: list[str] = []
    if passed:
        parts.append(green(f"{passed} passed"))
    if failed:
        parts.append(red(f"{failed} failed"))
    if skipped:
        parts.append(dim(f"{skipped} skipped"))

    summary = ", ".join(parts) if parts else "no obligations"
    print(f"\n{summary}  {dim(f'({total_s:.1f}s total)')}  {dim(f'JSON reports in {out_dir}/')}")


def _fixed_width_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    lo, hi = int_range(DEFAULT_BITS)
    if not lo <= value <= hi:
        raise argparse.ArgumentTypeError(f"{value} does not fit in a signed {DEFAULT_BITS}-bit integer")
    return value


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be zero or more, got {value}")
    return value


def _cmd_sort(args: argparse.Namespace) -> int:
    if args.trace:
        def on_pass(i: int, xs: list[int]) -> None:
            print(dim(f"pass {i + 1}: {' '.join(str(x) for x in xs)}"), file=sys.stderr)

        result = bubble_sort(list(args.values), on_pass=on_pass)
    else:
        result = sort(args.values)

    if args.json:
        print(json.dumps(result))
    else:
        print(" ".join(str(x) for x in result))
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    json_mode = args.json

    def on_result(r: ObligationResult) -> None:
        if not json_mode and not args.quiet:
            _print_result_line(r, verbose=args.verbose)

    try:
        importlib.import_module(args.module)
    except ImportError as e:
        print(f"error: could not import module '{args.module}': {e}", file=sys.stderr)
        return 1

    t_start = time.monotonic()
    try:
        results, _trust = check_module(
            args.module,
            out_dir=args.out,
            bits=args.bits,
            max_list_size=args.max_list_size,
            smoke_max_list_size=args.smoke_max_list_size,
            on_result=on_result,
        )
    except InvalidArgument as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    total_s = time.monotonic() - t_start

    if not results:
        if json_mode:
            print("[]")
        else:
            print(f"warning: no contract-decorated functions found in '{args.module}'", file=sys.stderr)
        return 0

    if json_mode:
        print(json.dumps([r.to_json() for r in results], indent=2, default=str))
    else:
        _print_summary(results, total_s, args.out)

    return 1 if any(r.status in ("fail", "error") for r in results) else 0


def _cmd_tutorial(args: argparse.Namespace) -> int:
    platform = args.platform or detect_platform()
    try:
        if args.dest:
            path = install_tutorial(args.dest, platform=platform, host=args.host)
            print(f"tutorial written to {path}")
        else:
            sys.stdout.write(render_tutorial(load_tutorial(), platform=platform, host=args.host))
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="seqsort", description="Bubble sort integers and check sorters against their contracts.")
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    sub = p.add_subparsers(dest="command")

    ps = sub.add_parser("sort", parents=[common], help="Sort integers given on the command line")
    ps.add_argument("values", nargs="+", type=_fixed_width_int, help="Signed 32-bit integers")
    ps.add_argument("--in-place-trace", dest="trace", action="store_true", help="Print the list after every pass to stderr")
    ps.add_argument("--json", action="store_true", help="Print the result as a JSON array")
    ps.set_defaults(handler=_cmd_sort)

    pc = sub.add_parser("check", parents=[common], help="Run contract checks on a module")
    pc.add_argument("module", help="Python module to import (e.g. seqsort._sorter)")
    pc.add_argument("--out", default=".seqsort", help="Output directory for JSON reports")
    pc.add_argument("--bits", type=int, default=DEFAULT_BITS, help="Width of generated signed integers")
    pc.add_argument("--max-list-size", type=_non_negative_int, default=20, help="Max size for generated sequences")
    pc.add_argument("--smoke-max-list-size", type=_non_negative_int, default=5, help="Max size for smoke-test generation")
    pc.add_argument("-v", "--verbose", action="store_true", help="Show counterexample details")
    pc.add_argument("-q", "--quiet", action="store_true", help="Only print summary and exit code")
    pc.add_argument("--json", action="store_true", help="Output results as JSON array to stdout")
    pc.set_defaults(handler=_cmd_check)

    pt = sub.add_parser("tutorial", parents=[common], help="Print or install the editor tutorial")
    pt.add_argument("--platform", choices=PLATFORMS, default=None, help="Key bindings to use (default: detect)")
    pt.add_argument("--host", choices=HOSTS, default="vscode", help="Editor the tutorial is opened in")
    pt.add_argument("--dest", default=None, help="Directory to install the tutorial into instead of printing it")
    pt.set_defaults(handler=_cmd_tutorial)
    return p


def main(argv: list[str] | None = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)

    if getattr(args, "no_color", False):
        force_color(False)

    if args.command is None:
        p.print_help(sys.stderr)
        return 2
    return args.handler(args)
