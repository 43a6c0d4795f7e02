"""CLI entrypoint for normalizing a matrix file.

Usage:
    fastscale-normalize INPUT OUTPUT [--axis rows] [--no-center] [--no-scale]
    fastscale-normalize INPUT OUTPUT --rows 0,1,2 --cols 3,4 --stats-out stats.npz
"""

import argparse
import logging
import sys

from fastscale.core.normalize import normalize
from fastscale.io.mat_interop import load_matrix, save_matrix
from fastscale.io.writers import write_stats
from fastscale.types import Axis

logger = logging.getLogger(__name__)


def _index_list(text: str) -> list[int]:
    try:
        return [int(tok) for tok in text.split(",") if tok.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got '{text}'")


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Center and scale the columns or rows of a matrix.",
    )
    parser.add_argument("input", help="Matrix file (.npy, .npz, .mat or .csv).")
    parser.add_argument("output", help="Output file; format follows the extension.")
    parser.add_argument("--axis", choices=[a.value for a in Axis], default=Axis.COLUMNS.value,
                        help="Normalize each column (default) or each row.")
    parser.add_argument("--no-center", action="store_true", default=False,
                        help="Do not subtract the mean.")
    parser.add_argument("--no-scale", action="store_true", default=False,
                        help="Do not divide by the standard deviation.")
    parser.add_argument("--rows", type=_index_list, default=None,
                        help="Comma-separated row indices to keep before normalizing.")
    parser.add_argument("--cols", type=_index_list, default=None,
                        help="Comma-separated column indices to keep before normalizing.")
    parser.add_argument("--variable", default=None,
                        help="Array name inside a .npz/.mat input with several arrays.")
    parser.add_argument("--stats-out", default=None,
                        help="Optional .npz/.mat file for the centers and scales used.")

    args = parser.parse_args(argv)

    try:
        matrix = load_matrix(args.input, variable=args.variable)
        result, stats = normalize(
            matrix,
            axis=args.axis,
            center=not args.no_center,
            scale=not args.no_scale,
            attach_stats=args.stats_out is not None,
            row_selector=args.rows,
            col_selector=args.cols,
        )
        save_matrix(args.output, result)
        if stats is not None:
            write_stats(args.stats_out, stats)
            logger.info("Wrote statistics to %s", args.stats_out)
    except (FileNotFoundError, ValueError, IndexError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    rows, cols = result.shape
    print(f"Normalized {rows}x{cols} matrix by {args.axis}. Output: {args.output}")


if __name__ == "__main__":
    main()
