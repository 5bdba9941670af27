"""
Command-line entry point: merge the approximation sets stored in result files.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from paretomerge.config import build_config
from paretomerge.foundation.exceptions import ParetoMergeError
from paretomerge.foundation.logging import configure_paretomerge_logging
from paretomerge.foundation.problem import available_problem_names
from paretomerge.merge import merge_files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paretomerge",
        description="Merge the approximation sets stored in one or more result files into a single non-dominated set.",
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "-b",
        "--problem",
        metavar="NAME",
        help=f"Problem name (e.g., {', '.join(available_problem_names()[:4])}).",
    )
    group.add_argument("-d", "--dimension", type=int, metavar="N", help="Number of objectives.")
    parser.add_argument("-v", "--vars", type=int, required=True, metavar="N", help="Number of decision variables.")
    parser.add_argument("-o", "--output", required=True, metavar="FILE", help="Output file containing the merged set.")
    parser.add_argument(
        "-e",
        "--epsilon",
        metavar="E1,E2,...",
        help="Epsilon values for epsilon-box dominance (one value is broadcast to all objectives).",
    )
    parser.add_argument(
        "-r",
        "--resultFile",
        "--result-file",
        dest="result_file",
        action="store_true",
        help="Write a result file instead of a bare objective listing.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every merged entry.")
    parser.add_argument("inputs", nargs="+", metavar="FILE", help="Result files to merge, in order.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_paretomerge_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = build_config(args)
        with config.resolve_shape() as shape:
            report = merge_files(
                config.inputs,
                shape,
                config.rule(),
                config.output,
                result_file=config.result_file,
            )
    except ParetoMergeError as exc:
        print(f"error: {exc.stage}: {exc}", file=sys.stderr)
        return 1

    print(
        f"Merged {report.entries} entries from {report.sources} file(s): "
        f"{len(report.members)} solutions written to {config.output}."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
