"""CLI entrypoint for timing fastscale against scipy.stats.zscore.

Usage:
    fastscale-benchmark [--n-rows 100000 --n-cols 100] [--repeats 10] [--plot timings.png]
"""

import argparse
import logging
import sys

from fastscale.pipeline.benchmark import benchmark_normal, format_summary
from fastscale.types import Axis


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Benchmark normalization of a random normal matrix.",
    )
    parser.add_argument("--n-rows", type=int, default=100_000,
                        help="Number of rows (default: 100000).")
    parser.add_argument("--n-cols", type=int, default=100,
                        help="Number of columns (default: 100).")
    parser.add_argument("--mean", type=float, default=14.0,
                        help="Mean of the sampled values (default: 14).")
    parser.add_argument("--sd", type=float, default=5.0,
                        help="Standard deviation of the sampled values (default: 5).")
    parser.add_argument("--repeats", type=int, default=10,
                        help="Timed calls per implementation (default: 10).")
    parser.add_argument("--axis", choices=[a.value for a in Axis], default=Axis.COLUMNS.value,
                        help="Normalize each column (default) or each row.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the generated matrix.")
    parser.add_argument("--plot", default=None,
                        help="Optional image file for a boxplot of call times.")
    parser.add_argument("--output", default=None,
                        help="Optional .npz/.mat file for raw per-call timings.")

    args = parser.parse_args(argv)

    try:
        result = benchmark_normal(
            n_rows=args.n_rows,
            n_cols=args.n_cols,
            mean=args.mean,
            sd=args.sd,
            repeats=args.repeats,
            axis=args.axis,
            seed=args.seed,
            plot_path=args.plot,
            output_path=args.output,
        )
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(format_summary(result))


if __name__ == "__main__":
    main()
