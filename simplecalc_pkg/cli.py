"""Command-line shell: argument parsing, output formatting and exit codes."""

from __future__ import annotations

import argparse
import json
import sys

from . import config as _config
from .api import calculate, supported_operators
from .config import VERSION
from .logging_config import get_logger, setup_logging
from .types import CalcResult

logger = get_logger("cli")


def format_operator_table() -> str:
    """Render the supported operators as the usage listing."""
    lines = ["Supported Operators:"]
    for token, description in supported_operators():
        lines.append(f"  ({token}) {description}")
    return "\n".join(lines)


def _health_check() -> int:
    """Run health check to verify dependencies and a set of known calculations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running simplecalc health check...")
    print("-" * 50)

    try:
        import numpy

        print(f"[OK] NumPy {numpy.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] NumPy import failed: {e}")
        checks_failed += 1

    known = [
        (("10", "+", "5"), "15"),
        (("10", "/", "3"), "3.33"),
        (("-7", "%", "2"), "-1"),
        (("1", "<<<", "1"), "2"),
        (("1", ">>>", "1"), "2147483648"),
        (("2147483647", "+", "1"), "OVERFLOW"),
        (("7", "/", "0"), "DIVISION_BY_ZERO"),
        (("-1", "&", "1"), "INVALID_OPERAND"),
    ]
    for args, expected in known:
        label = " ".join(args)
        try:
            res = calculate(*args)
        except Exception as e:  # pylint: disable=broad-except
            print(f"[FAIL] {label}: raised {type(e).__name__}: {e}")
            checks_failed += 1
            continue
        got = res.value.format() if res.ok else res.code
        if got == expected:
            print(f"[OK] {label} -> {got}")
            checks_passed += 1
        else:
            print(f"[FAIL] {label}: expected {expected}, got {got}")
            checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_result(
    res: CalcResult, output_format: str = "human", show_expression: bool = False
) -> None:
    """Print a result in the specified format.

    Results go to stdout. A failure always writes an "Error:" line to
    stderr; in JSON mode the error record is also written to stdout.
    """
    precision = _config.FLOAT_PRECISION
    if output_format == "json":
        print(json.dumps(res.to_dict(precision), indent=2, ensure_ascii=False))
        if not res.ok:
            print(f"Error: {res.error}", file=sys.stderr)
        return
    if not res.ok:
        print(f"Error: {res.error}", file=sys.stderr)
        if res.code == "UNSUPPORTED_OPERATOR":
            print(format_operator_table(), file=sys.stderr)
        return
    formatted = res.value.format(precision)
    if show_expression:
        print(f"{res.operand1} {res.operator} {res.operand2} = {formatted}")
    else:
        print(formatted)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; positionals are optional so that flags like
    --version work alone, and main_entry checks them itself.
    """
    parser = argparse.ArgumentParser(
        prog="simplecalc",
        description="Simple 32-bit arithmetic and bitwise calculator",
        epilog=format_operator_table(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("operand1", nargs="?", help="first operand (base-10 integer)")
    parser.add_argument("operator", nargs="?", help="operator token, quoted for the shell")
    parser.add_argument("operand2", nargs="?", help="second operand (base-10 integer)")
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-x",
        "--show-expression",
        action="store_true",
        help="Print 'operand1 operator operand2 = result' instead of the bare result",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Fraction digits for division results"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--operators", action="store_true", help="List supported operators and exit"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=_config.DEFAULT_LOG_LEVEL,
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    return parser


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the simplecalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 for calculation errors; usage errors exit with 2)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.precision is not None:
        if args.precision < 0:
            parser.error("--precision must be non-negative")
        _config.FLOAT_PRECISION = int(args.precision)

    if args.version:
        print(VERSION)
        return 0
    if args.operators:
        print(format_operator_table())
        return 0
    if args.health_check:
        return _health_check()

    positional = [args.operand1, args.operator, args.operand2]
    if any(value is None for value in positional):
        parser.error("expected: operand1 operator operand2")

    logger.info("Calculating %s %s %s", *positional)
    res = calculate(*positional)
    print_result(res, output_format=args.format, show_expression=args.show_expression)
    return 0 if res.ok else 1


if __name__ == "__main__":
    sys.exit(main_entry())
