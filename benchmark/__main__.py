"""Benchmark runner for singular value kernels.

This module times the registered SVD kernels on a seeded real matrix and a
seeded complex matrix ``A + iB`` and prints how they compare at the median.

Run with: python -m benchmark
"""

import argparse
import logging
import sys

import torch

from svdbench import (
    ElementType,
    KernelExecutionError,
    default_registry,
    format_results,
    random_complex,
    random_real,
    render_table,
    run,
)

logger = logging.getLogger("benchmark")


def run_benchmarks(
    matrix: torch.Tensor,
    kernel_names,
    repetitions: int,
    warmup_runs: int,
    unit: str,
) -> bool:
    """Run one comparison and print its table.

    Args:
        matrix: Input matrix shared by all kernels
        kernel_names: Requested kernel names
        repetitions: Timed calls per kernel
        warmup_runs: Discarded calls per kernel
        unit: Display unit for durations

    Returns:
        True when every kernel completed
    """
    element_type = ElementType.COMPLEX if matrix.is_complex() else ElementType.REAL
    names = []
    for name in kernel_names:
        if default_registry.supports(name, element_type):
            names.append(name)
        else:
            logger.warning("skipping %r: no %s support in this build", name, element_type)
    if not names:
        logger.warning("no kernel supports %s matrices, nothing to do", element_type)
        return True

    title = (
        f"SVD Benchmark ({element_type}, {matrix.shape[0]}x{matrix.shape[1]}, "
        f"{repetitions} runs, {warmup_runs} warm-up)"
    )
    ok = True
    try:
        results = run(names, matrix, repetitions, warmup_runs=warmup_runs)
    except KernelExecutionError as err:
        ok = False
        results = err.results
        for failure in err.failures.values() or [err]:
            print(f"FAILED: {failure}")

    if results:
        print()
        print(render_table(format_results(results), unit=unit, title=title))
    return ok


def main(argv=None):
    """Main benchmark entry point."""
    parser = argparse.ArgumentParser(
        description="Benchmark standard versus divide-and-conquer SVD",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--rows", type=int, default=400, help="Rows of the test matrices")
    parser.add_argument("--cols", type=int, default=400, help="Columns of the test matrices")
    parser.add_argument(
        "--repetitions", type=int, default=100, help="Number of timed runs per kernel"
    )
    parser.add_argument(
        "--warmup-runs", type=int, default=1, help="Number of warmup iterations"
    )
    parser.add_argument(
        "--kernels",
        nargs="+",
        default=["standard", "dc"],
        choices=default_registry.names(),
        help="Kernels to compare",
    )
    parser.add_argument("--seed", type=int, default=42, help="Seed of the matrix generator")
    parser.add_argument(
        "--unit",
        type=str,
        default="ms",
        choices=["ns", "us", "ms", "s"],
        help="Time unit of the tables",
    )
    parser.add_argument(
        "--no-complex",
        action="store_true",
        help="Skip the complex matrix benchmark",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.rows < 1 or args.cols < 1:
        parser.error("matrix dimensions must be positive")
    if args.repetitions < 1:
        parser.error("--repetitions must be at least 1")
    if args.warmup_runs < 0:
        parser.error("--warmup-runs must not be negative")

    generator = torch.Generator().manual_seed(args.seed)
    ok = run_benchmarks(
        random_real(args.rows, args.cols, generator=generator),
        args.kernels,
        args.repetitions,
        args.warmup_runs,
        args.unit,
    )

    if not args.no_complex:
        ok = run_benchmarks(
            random_complex(args.rows, args.cols, generator=generator),
            args.kernels,
            args.repetitions,
            args.warmup_runs,
            args.unit,
        ) and ok

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
