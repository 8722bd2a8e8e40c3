"""Benchmark harness for interchangeable singular value kernels.

This package times named kernel variants against each other on the same
matrix, using the standard versus divide-and-conquer LAPACK SVD drivers as
its built-in kernels for real and complex dense matrices.

Available functions:
    - register / resolve: Add and look up kernels on the default registry
    - run: Time several kernels on one matrix
    - measure: Time a single kernel callable
    - summarize: Aggregate timing samples into a BenchmarkResult
    - format_results / render_table: Comparison rows and text tables
    - base_svd, dc_svd, cx_base_svd, cx_dc_svd: Typed SVD wrappers

Requirements:
    - PyTorch
    - SciPy (LAPACK driver selection)
"""

import logging

from .exceptions import (
    DuplicateNameError,
    EmptySampleError,
    InvalidArgumentError,
    KernelExecutionError,
    SvdBenchError,
    UnknownKernelError,
    UnsupportedTypeError,
)
from .matrices import (
    ElementType,
    element_type_of,
    random_complex,
    random_real,
    scaled_identity,
)
from .registry import KernelRegistry, default_registry, register, resolve
from .reporting import (
    BenchmarkResult,
    ReportRow,
    format_results,
    render_table,
    summarize,
)
from .svd_kernels import (
    base_svd,
    complex_dc_available,
    cx_base_svd,
    cx_dc_svd,
    dc_svd,
    divide_and_conquer_svd,
    register_default_kernels,
    standard_svd,
    torch_svd,
)
from .timing import measure, run

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
