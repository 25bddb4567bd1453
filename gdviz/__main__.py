"""
gdviz entry point.

Usage:
    python -m gdviz
    python -m gdviz --seed 7 --learning-rate 0.02
    python -m gdviz --headless --steps 2000 --seed 1
    python -m gdviz --loglevel DEBUG --log-console
"""

import sys
import argparse

from .logging import DEFAULT_LOG_FILE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="gdviz - animate gradient descent fitting a line, with its MSE loss surface"
    )
    parser.add_argument(
        "-n", "--samples",
        type=int,
        default=None,
        help="Number of synthetic observations (default: 120)"
    )
    parser.add_argument(
        "--slope",
        type=float,
        default=None,
        help="Ground-truth slope used to generate data (default: -0.8)"
    )
    parser.add_argument(
        "--intercept",
        type=float,
        default=None,
        help="Ground-truth intercept used to generate data (default: 10)"
    )
    parser.add_argument(
        "--noise",
        type=float,
        default=None,
        help="Standard deviation of the Gaussian noise (default: 1.2)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible data (default: random)"
    )
    parser.add_argument(
        "--learning-rate",
        default=None,
        help="Initial learning rate, clamped to [1e-4, 1] (default: 0.01)"
    )
    parser.add_argument(
        "--percentile",
        type=float,
        default=None,
        help="Percentile of log-MSE used as the color-scale upper bound (default: 0.9)"
    )
    parser.add_argument(
        "--auto-start",
        action="store_true",
        help="Start descending as soon as the window opens"
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window and print the final parameters"
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=1000,
        help="Steps to run in headless mode (default: 1000)"
    )
    parser.add_argument(
        "-l", "--loglevel",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help=f"Set logging level (default: WARNING). DEBUG writes to {DEFAULT_LOG_FILE}"
    )
    parser.add_argument(
        "--logfile",
        default=DEFAULT_LOG_FILE,
        help=f"Log file path (default: {DEFAULT_LOG_FILE})"
    )
    parser.add_argument(
        "--log-console",
        action="store_true",
        help="Also log to console (stderr)"
    )
    return parser


def config_from_args(args):
    """Merge CLI overrides over the settings file and defaults."""
    from .core.engine import clamp_learning_rate
    from .core.settings import AppConfig

    overrides = {
        "samples": args.samples,
        "slope": args.slope,
        "intercept": args.intercept,
        "noise": args.noise,
        "seed": args.seed,
        "surface_percentile": args.percentile,
    }
    if args.learning_rate is not None:
        overrides["learning_rate"] = clamp_learning_rate(args.learning_rate)
    return AppConfig.from_settings(overrides)


def run_headless(config, steps: int) -> int:
    """Descend for a fixed number of steps and report the result."""
    from .core.session import Session

    session = Session.create(config)
    session.engine.start()
    frames = session.loop.run(max_frames=steps)
    p = session.engine.params
    print(f"steps={frames} w={p.w:.6f} b={p.b:.6f} mse={session.engine.loss:.6f}")
    return 0


def main(argv=None):
    """Main entry point for gdviz."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Setup logging before importing anything else
    from .logging import setup_logging
    setup_logging(
        level=args.loglevel,
        log_file=args.logfile,
        console=args.log_console
    )

    from .core.dataset import InvalidDataset

    config = config_from_args(args)

    try:
        if args.headless:
            return run_headless(config, args.steps)

        # Import here to avoid slow startup for --help and headless runs
        from .gui.app import run_app
        return run_app(config=config, auto_start=args.auto_start)
    except InvalidDataset as e:
        parser.error(str(e))


if __name__ == "__main__":
    sys.exit(main())
