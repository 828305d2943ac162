"""Command-line interface for callorder."""

from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import replace
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from callorder.config import HARNESS_CONFIG, HarnessConfig
from callorder.contract import Contract
from callorder.logging import configure_verbosity, get_logger
from callorder.model.action import outcome_name
from callorder.results import Result
from callorder.suite import Suite, SuiteResult, resolve_target

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width
        max_col_width: Optional cap on cell width; longer cells are clipped.

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = []
    for col_idx in range(len(clipped_headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = []
    lines.append(format_row(clipped_headers))
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in clipped_rows:
        lines.append(format_row(row))

    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Return grammatically correct unit for count n."""
    if n == 1:
        return singular
    return plural or (singular + "s")


def _positive_float(value: str) -> float:
    """Parse a strictly positive number of seconds for ``--timeout``."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if not seconds > 0:
        raise argparse.ArgumentTypeError(f"must be a positive number, got {value}")
    return seconds


def _ensure_cwd_importable() -> None:
    """Make modules in the working directory importable as contract targets.

    ``python -m callorder`` already puts the working directory on ``sys.path``;
    the installed console script puts its own bin directory there instead.
    """
    cwd = os.getcwd()
    if "" in sys.path or cwd in sys.path:
        return
    sys.path.insert(0, cwd)
    logger.debug(f"Added working directory to sys.path: {cwd}")


def _print_result(name: str, result: Result) -> None:
    if result.passed:
        print(
            f"✅ {name}: {result.scenarios} {_plural(result.scenarios, 'scenario')} passed"
        )
        return
    if result.fault is not None:
        print(f"❌ {name}: {result.description}")
        return
    print(
        f"❌ {name}: {len(result.failures)} of {result.scenarios} "
        f"{_plural(result.scenarios, 'scenario')} failed"
    )
    if result.description:
        for line in result.description.splitlines():
            print(f"  {line}")


def _print_suite_summary(suite_result: SuiteResult) -> None:
    rows = []
    for outcome in suite_result.outcomes:
        res = outcome.result
        status = "passed" if res.passed else ("fault" if res.fault else "failed")
        rows.append(
            [
                outcome.name,
                status,
                str(res.scenarios),
                str(len(res.failures)),
                _format_duration(outcome.elapsed),
            ]
        )
    print(
        _format_table(
            ["Contract", "Status", "Scenarios", "Failures", "Time"],
            rows,
            max_col_width=40,
        )
    )


def _run_suite(
    path: Path,
    results_path: Optional[Path],
    stdout: bool,
) -> None:
    """Run every contract of a suite file.

    Args:
        path: Suite YAML file.
        results_path: Optional path where JSON results are written.
        stdout: Whether to also print JSON results to stdout.
    """
    logger.info(f"Loading suite from: {path}")
    _start_time = perf_counter()

    try:
        suite = Suite.from_yaml(path.read_text())
        suite_result = suite.run()
    except FileNotFoundError:
        logger.error(f"Suite file not found: {path}")
        print(f"❌ ERROR: Suite file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to run suite: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to run suite: {type(e).__name__}: {e}")
        sys.exit(1)

    for outcome in suite_result.outcomes:
        _print_result(outcome.name, outcome.result)
    print()
    _print_suite_summary(suite_result)

    if results_path is not None or stdout:
        json_str = json.dumps(suite_result.to_dict(), indent=2, default=str)
        if results_path is not None:
            results_path.parent.mkdir(parents=True, exist_ok=True)
            results_path.write_text(json_str)
            logger.info(f"Results written to: {results_path}")
            print(f"✅ Results written to: {results_path}")
        if stdout:
            print(json_str)

    _elapsed = perf_counter() - _start_time
    failed = len(suite_result.failed)
    logger.info(
        f"Suite finished in {_format_duration(_elapsed)}: "
        f"{len(suite_result.outcomes) - failed} passed, {failed} failed"
    )
    if not suite_result.passed:
        sys.exit(1)


def _load_contract(target: str) -> Contract:
    try:
        return resolve_target(target)
    except Exception as e:
        logger.error(f"Failed to load contract: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to load contract '{target}': {e}")
        sys.exit(1)


def _check_contract(target: str, timeout: Optional[float], as_json: bool) -> None:
    """Verify one contract and exit non-zero if it fails."""
    contract = _load_contract(target)
    config: HarnessConfig = HARNESS_CONFIG
    if timeout is not None:
        config = replace(HARNESS_CONFIG, scenario_timeout=timeout)

    result = contract.run(config)
    if as_json:
        print(json.dumps({"name": contract.name, **result.to_dict()}, indent=2))
    else:
        _print_result(contract.name, result)
    if not result.passed:
        sys.exit(1)


def _inspect_contract(target: str, detail: bool) -> None:
    """Print the actions, templates and scenario count of a contract."""
    contract = _load_contract(target)

    print("=" * 60)
    print(f"CONTRACT: {contract.name}")
    print("=" * 60)
    if contract.description:
        print(contract.description)
        print()

    print(f"Actions ({len(contract.actions)}):")
    rows = [
        [str(i), a.name, ", ".join(outcome_name(p) for p in a.outcomes)]
        for i, a in enumerate(contract.actions)
    ]
    if rows:
        print(_format_table(["#", "Action", "Outcomes"], rows, min_width=2))
    else:
        print("   (none)")

    try:
        templates = contract.templates()
    except ValueError as e:
        print(f"❌ ERROR: Invalid valid-sequence template: {e}")
        sys.exit(1)

    print(f"\nValid sequences ({len(templates)}):")
    for i, t in enumerate(templates):
        print(f"   [{i}] {t.describe()}")

    count = contract.scenario_count()
    print(f"\nScenarios: {count}")
    if detail:
        for i, permutation in enumerate(contract.scenarios()):
            entries = ", ".join(f"{c.name} -> {c.outcome_name}" for c in permutation)
            print(f"   [{i}] {entries or '<no actions>'}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``callorder`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="callorder",
        description="Verify call-ordering contracts across every outcome permutation.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,check,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Run every contract in a suite")
    run_parser.add_argument("suite", type=Path, help="Path to suite YAML")
    run_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Export results to this JSON file",
    )
    run_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print JSON results to stdout",
    )

    check_parser = subparsers.add_parser("check", help="Verify a single contract")
    check_parser.add_argument("target", help="Contract target as module:attr")
    check_parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Seconds to wait for each scenario to settle (default: no limit)",
    )
    check_parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Show a contract's actions, templates and scenarios"
    )
    inspect_parser.add_argument("target", help="Contract target as module:attr")
    inspect_parser.add_argument(
        "--detail",
        "-d",
        action="store_true",
        help="List every scenario",
    )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    configure_verbosity(args.verbose, args.quiet)
    _ensure_cwd_importable()

    if args.command == "run":
        _run_suite(args.suite, args.results, args.stdout)
    elif args.command == "check":
        _check_contract(args.target, args.timeout, args.json)
    elif args.command == "inspect":
        _inspect_contract(args.target, args.detail)


if __name__ == "__main__":
    main()
