"""Summary statistics and comparison tables for timing samples."""

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Sequence

import torch

from .exceptions import EmptySampleError, InvalidArgumentError


_UNIT_SCALE = {"ns": 1.0, "us": 1e3, "ms": 1e6, "s": 1e9}


@dataclass(frozen=True)
class BenchmarkResult:
    """Aggregate timing of one kernel, all durations in nanoseconds."""

    count: int
    min: float
    max: float
    mean: float
    median: float
    std: float = 0.0


@dataclass(frozen=True)
class ReportRow:
    """One printable line of a comparison, durations in nanoseconds.

    ``relative`` is the kernel's median over the fastest median in the table.
    """

    name: str
    count: int
    min: float
    median: float
    mean: float
    max: float
    relative: float


def summarize(samples: Iterable[float]) -> BenchmarkResult:
    """Aggregate an ordered sequence of durations.

    Args:
        samples: Durations in nanoseconds, in measurement order; any
            iterable, consumed once

    Returns:
        BenchmarkResult: count, min, max, arithmetic mean, median and sample
        standard deviation (0.0 for a single sample)

    Raises:
        EmptySampleError: ``samples`` is empty
    """
    samples = list(samples)
    if not samples:
        raise EmptySampleError()

    times_tensor = torch.as_tensor(samples, dtype=torch.float64)
    ordered = torch.sort(times_tensor).values
    count = ordered.numel()
    middle = count // 2
    if count % 2:
        median = ordered[middle].item()
    else:
        median = (ordered[middle - 1].item() + ordered[middle].item()) / 2.0

    minimum = ordered[0].item()
    maximum = ordered[-1].item()
    # Float rounding can push the mean of equal samples a hair past the range.
    mean = min(max(times_tensor.mean().item(), minimum), maximum)
    std = times_tensor.std().item() if count > 1 else 0.0

    return BenchmarkResult(
        count=count,
        min=minimum,
        max=maximum,
        mean=mean,
        median=median,
        std=std,
    )


def format_results(results: Mapping[str, BenchmarkResult]) -> List[ReportRow]:
    """Turn per-kernel results into rows sorted by ascending median."""
    ordered = sorted(results.items(), key=lambda item: (item[1].median, item[0]))
    if not ordered:
        return []

    fastest = ordered[0][1].median
    rows = []
    for name, result in ordered:
        relative = result.median / fastest if fastest > 0 else float("nan")
        rows.append(
            ReportRow(
                name=name,
                count=result.count,
                min=result.min,
                median=result.median,
                mean=result.mean,
                max=result.max,
                relative=relative,
            )
        )
    return rows


def render_table(rows: Sequence[ReportRow], unit: str = "ms", title: str = None) -> str:
    """Render rows as a fixed-width text table.

    Args:
        rows: Output of :func:`format_results`
        unit: Display unit, one of ``ns``, ``us``, ``ms``, ``s``
        title: Optional heading printed above the table

    Raises:
        InvalidArgumentError: Unknown unit
    """
    try:
        scale = _UNIT_SCALE[unit]
    except KeyError:
        raise InvalidArgumentError(
            f"unknown time unit {unit!r}, expected one of {', '.join(_UNIT_SCALE)}"
        ) from None

    lines = []
    if title:
        lines.append(f"{'='*80}")
        lines.append(title)
        lines.append(f"{'='*80}")
    header = f"({unit})"
    lines.append(
        f"{'Kernel':<16} {'Count':>6} {'Min ' + header:>12} {'Median ' + header:>14} "
        f"{'Mean ' + header:>12} {'Max ' + header:>12} {'Relative':>9}"
    )
    lines.append(f"{'-'*80}")
    for row in rows:
        lines.append(
            f"{row.name:<16} {row.count:>6} {row.min / scale:>12.4f} "
            f"{row.median / scale:>14.4f} {row.mean / scale:>12.4f} "
            f"{row.max / scale:>12.4f} {row.relative:>8.2f}x"
        )
    lines.append(f"{'-'*80}")
    return "\n".join(lines)
