from __future__ import annotations

import argparse
import logging

from .. import api
from .. import config
from ..utils.formatting import print_result_pretty

_logger = logging.getLogger(__name__)


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running DiffGraph health check...")
    print("-" * 50)

    for module_name in ("numpy", "sympy", "matplotlib"):
        try:
            module = __import__(module_name)
            print(f"[OK] {module_name} {module.__version__} imported successfully")
            checks_passed += 1
        except ImportError as e:
            print(f"[FAIL] {module_name} import failed: {e}")
            checks_failed += 1

    # Check parsing and differentiation
    try:
        result = api.derivative("x^2")
        if result.get("ok") and result.get("derivative") == "2 * x":
            print("[OK] Differentiation works")
            checks_passed += 1
        else:
            print(f"[FAIL] Differentiation check failed: {result}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Differentiation check failed: {e}")
        checks_failed += 1

    # Check tangent construction
    try:
        result = api.evaluate_formula("x^2", 3)
        if result.get("ok") and result.get("value") == 9 and result.get(
            "derivative_value"
        ) == 6:
            print("[OK] Evaluation works")
            checks_passed += 1
        else:
            print(f"[FAIL] Evaluation check failed: {result}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Evaluation check failed: {e}")
        checks_failed += 1

    print("-" * 50)
    print(f"Health check complete: {checks_passed} passed, {checks_failed} failed")
    return 0 if checks_failed == 0 else 1


def repl_loop(output_format: str = "human") -> None:
    """Start the interactive REPL."""
    from .context import ReplContext
    from .repl_core import REPL

    repl = REPL(ReplContext(output_format=output_format))
    repl.start()


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for DiffGraph CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="diffgraph")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Differentiate one formula, print its tangent lines and exit",
        dest="eval_expr",
    )
    parser.add_argument(
        "-n",
        "--points",
        type=str,
        help=f"Number of tangent points ({config.MIN_POINTS}-{config.MAX_POINTS})",
    )
    parser.add_argument(
        "-x",
        "--at",
        type=float,
        help="Evaluate the formula and its derivative at this x instead",
    )
    parser.add_argument(
        "--save",
        type=str,
        help="Save the tangent grid plot to this file",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--max-passes",
        type=int,
        help="Maximum simplifier passes",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    from ..logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    # Apply CLI configuration overrides
    if args.max_passes and args.max_passes > 0:
        config.SIMPLIFY_MAX_PASSES = int(args.max_passes)

    if args.version:
        print(config.VERSION)
        return 0
    if args.health_check:
        return _health_check()

    if args.eval_expr is None:
        repl_loop(args.format)
        return 0

    formula = args.eval_expr
    if args.at is not None:
        result = api.evaluate_formula(formula, args.at)
    else:
        result = api.tangent_lines(formula, args.points)
    print_result_pretty(result, args.format)
    if not result.get("ok"):
        return 1

    if args.save:
        plot_result = api.plot(formula, args.points, args.save)
        if args.format == "human" or not plot_result.get("ok"):
            print_result_pretty(plot_result, args.format)
        if not plot_result.get("ok"):
            return 1
    return 0
