"""Timing harness for comparing registered kernels on one input.

Each kernel is called back to back on the identical matrix and every call is
timed with ``time.perf_counter_ns``, a monotonic clock that is unaffected by
system time adjustments. For CUDA inputs the device is synchronized before
the clock is read on both sides of the call, so asynchronous launches are
not mistaken for finished work.

Kernels are expected to leave their input untouched. The harness does not
verify this; a kernel that mutates the matrix makes every later measurement
of the same run undefined.

No warm-up is performed unless ``warmup_runs`` is given. Warm-up calls run
before the timed series and their durations are discarded.
"""

import logging
import time
from typing import Callable, Dict, List, Sequence

import torch

from .exceptions import InvalidArgumentError, KernelExecutionError
from .matrices import as_matrix, element_type_of
from .registry import KernelRegistry, default_registry
from .reporting import BenchmarkResult, summarize

logger = logging.getLogger(__name__)


def _check_count(name: str, value, minimum: int):
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise InvalidArgumentError(f"{name} must be an integer >= {minimum}, got {value!r}")


def _synchronize(matrix: torch.Tensor):
    if matrix.is_cuda:
        torch.cuda.synchronize(matrix.device)


def measure(
    kernel: Callable,
    matrix,
    repetitions: int,
    warmup_runs: int = 0,
    name: str = None,
) -> List[int]:
    """Time ``repetitions`` calls of ``kernel`` on ``matrix``.

    Args:
        kernel: Callable taking the matrix
        matrix: Input passed unchanged to every call
        repetitions: Number of timed calls, at least 1
        warmup_runs: Untimed calls made first, at least 0
        name: Kernel name used in error messages

    Returns:
        List of per-call durations in nanoseconds, in call order

    Raises:
        InvalidArgumentError: Bad repetition or warm-up count
        KernelExecutionError: A call raised; no samples are returned
    """
    _check_count("repetitions", repetitions, 1)
    _check_count("warmup_runs", warmup_runs, 0)
    name = name or getattr(kernel, "__name__", repr(kernel))

    # Warmup
    for index in range(1, warmup_runs + 1):
        try:
            kernel(matrix)
        except Exception as err:
            raise KernelExecutionError(name, index, err, warmup=True) from err
    if warmup_runs:
        _synchronize(matrix)

    # Benchmark
    times = []
    for index in range(1, repetitions + 1):
        _synchronize(matrix)
        start = time.perf_counter_ns()
        try:
            kernel(matrix)
            _synchronize(matrix)
        except Exception as err:
            raise KernelExecutionError(name, index, err) from err
        times.append(time.perf_counter_ns() - start)

    return times


def run(
    kernel_names: Sequence[str],
    input,
    repetitions: int,
    warmup_runs: int = 0,
    registry: KernelRegistry = None,
    raise_on_error: bool = True,
) -> Dict[str, BenchmarkResult]:
    """Benchmark several kernels on the same matrix.

    All names are resolved against the input's element type before anything
    is executed, so registry errors surface without partial work. A kernel
    failing at runtime does not stop the remaining kernels; its incomplete
    samples are dropped.

    Args:
        kernel_names: Registered kernel names; duplicates are measured once
        input: 2-D real or complex matrix
        repetitions: Timed calls per kernel, at least 1
        warmup_runs: Discarded calls per kernel before timing
        registry: Registry to resolve names in, the default one if None
        raise_on_error: Raise the first :class:`KernelExecutionError` once
            every kernel has run. When False, failures are logged and only
            completed kernels are returned.

    Returns:
        Mapping from kernel name to its BenchmarkResult, in request order

    Raises:
        InvalidArgumentError: Bad counts, no names, or an invalid matrix
        UnknownKernelError: A name is not registered
        UnsupportedTypeError: A kernel does not accept the element type
        KernelExecutionError: A kernel raised; carries ``results`` for the
            kernels that completed and ``failures`` for all that did not
    """
    _check_count("repetitions", repetitions, 1)
    _check_count("warmup_runs", warmup_runs, 0)
    if isinstance(kernel_names, str):
        kernel_names = [kernel_names]
    names = list(dict.fromkeys(kernel_names))
    if not names:
        raise InvalidArgumentError("at least one kernel name is required")

    registry = default_registry if registry is None else registry
    matrix = as_matrix(input)
    element_type = element_type_of(matrix)
    kernels = {name: registry.resolve(name, element_type) for name in names}

    logger.info(
        "benchmarking %s on %s %s matrix (%d repetitions, %d warm-up)",
        ", ".join(names),
        element_type,
        "x".join(str(size) for size in matrix.shape),
        repetitions,
        warmup_runs,
    )

    results = {}
    failures = {}
    for name, kernel in kernels.items():
        try:
            samples = measure(kernel, matrix, repetitions, warmup_runs, name=name)
        except KernelExecutionError as err:
            logger.error("%s", err)
            failures[name] = err
            continue
        results[name] = summarize(samples)
        logger.debug("kernel %r median %.0f ns", name, results[name].median)

    if failures and raise_on_error:
        first = next(iter(failures.values()))
        first.results = dict(results)
        first.failures = dict(failures)
        raise first
    return results


__all__ = ["measure", "run"]
