"""
Run the laissez-faire and equal-pay equilibria.

Usage:
    equalpay
    equalpay --config examples/default_calibration.yaml
    equalpay --c 2.0 --save-solution output/solution.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from equalpay.core.config_loader import load_run_config
from equalpay.core.errors import DomainError, InvalidParameters
from equalpay.core.parameters import CalibrationParams, SolverSettings
from equalpay.model import EqualPayModel
from equalpay.reporting import format_report_summary

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2

_PARAMETER_NAMES = ("b", "alpha", "y", "k", "d", "c", "mu")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="equalpay",
        description="Solve search-and-matching equilibria under laissez-faire and equal pay",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Reference calibration
  equalpay

  # Calibration and solver settings from YAML
  equalpay --config run.yaml

  # Override one parameter and save the solution
  equalpay --c 2.0 --save-solution output/solution.json

  # Analytic wage partials with a tighter tolerance
  equalpay --derivatives analytic --tolerance 1e-10
        """,
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML run configuration")
    for name in _PARAMETER_NAMES:
        parser.add_argument(f"--{name}", type=float, default=None, help=f"Override calibration '{name}'")
    parser.add_argument("--tolerance", type=float, default=None, help="FOC residual tolerance")
    parser.add_argument("--max-iterations", type=int, default=None, help="Solver evaluation budget")
    parser.add_argument(
        "--method",
        choices=["hybr", "broyden1"],
        default=None,
        help="Root-finding method (hybr: MINPACK hybrid Powell)",
    )
    parser.add_argument(
        "--derivatives",
        choices=["central", "analytic"],
        default=None,
        help="Wage partial derivatives: central differences or analytic",
    )
    parser.add_argument("--save-solution", type=Path, default=None, help="Save report to JSON file")
    parser.add_argument("--save-table", type=Path, default=None, help="Save comparison table to CSV")
    parser.add_argument("--summary", action="store_true", help="Print a one-line summary")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def _resolve_model(args: argparse.Namespace) -> tuple[EqualPayModel, Path | None]:
    params = CalibrationParams()
    settings = SolverSettings()
    output_path: Path | None = None
    if args.config is not None:
        config = load_run_config(args.config)
        params = config.calibration
        settings = config.solver
        output_path = config.output_path

    overrides = {
        name: getattr(args, name) for name in _PARAMETER_NAMES if getattr(args, name) is not None
    }
    if overrides:
        params = params.with_overrides(**overrides)

    solver_overrides = {
        "tolerance": args.tolerance,
        "max_iterations": args.max_iterations,
        "method": args.method,
        "derivatives": args.derivatives,
    }
    solver_overrides = {k: v for k, v in solver_overrides.items() if v is not None}
    if solver_overrides:
        settings = SolverSettings(**{**settings.model_dump(), **solver_overrides})

    if args.save_solution is not None:
        output_path = args.save_solution
    return EqualPayModel(params=params, settings=settings), output_path


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        model, output_path = _resolve_model(args)
    except InvalidParameters as exc:
        logger.error("Invalid parameters: %s", exc)
        return EXIT_INVALID

    try:
        report = model.run()
    except DomainError as exc:
        logger.error("Market equilibrium undefined: %s", exc)
        return EXIT_FAILED

    print(report.format())
    if args.summary:
        print()
        print(format_report_summary(report))
    if output_path is not None:
        report.save_json(output_path)
        logger.info("Solution saved to %s", output_path)
    if args.save_table is not None:
        args.save_table.parent.mkdir(parents=True, exist_ok=True)
        report.to_frame().to_csv(args.save_table)
        logger.info("Comparison table saved to %s", args.save_table)

    return EXIT_OK if report.passed else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
