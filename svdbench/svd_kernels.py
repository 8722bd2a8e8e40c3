"""Singular value kernels: standard versus divide-and-conquer SVD.

LAPACK offers two drivers for the full singular value decomposition. The
standard one (``?gesvd``) reduces to bidiagonal form and runs implicit QR,
while the divide-and-conquer driver (``?gesdd``) splits the bidiagonal
problem recursively and is usually several times faster on square matrices
once singular vectors are requested. Both are reached through
``scipy.linalg.svd``, which selects the driver with ``lapack_driver``.

Every kernel computes the full decomposition ``X = U diag(S) V^H`` and
returns only ``S``, the singular values, as a 1-D ``float64`` tensor sorted
in descending order.

Available kernels:
    - standard_svd: ``gesvd`` for real or complex input
    - divide_and_conquer_svd: ``gesdd`` for real or complex input
    - torch_svd: ``torch.linalg.svdvals``
    - base_svd / dc_svd: real-only wrappers
    - cx_base_svd / cx_dc_svd: complex-only wrappers
"""

import logging
from functools import lru_cache

import numpy as np
import scipy.linalg
import torch

from .exceptions import UnsupportedTypeError
from .matrices import ElementType, as_matrix, element_type_of
from .registry import ALL_ELEMENT_TYPES, KernelRegistry, default_registry

logger = logging.getLogger(__name__)

STANDARD = "standard"
DIVIDE_AND_CONQUER = "dc"
TORCH = "torch"

_DRIVERS = {STANDARD: "gesvd", DIVIDE_AND_CONQUER: "gesdd"}


@lru_cache(maxsize=None)
def complex_dc_available() -> bool:
    """Whether the linked LAPACK exposes the complex divide-and-conquer driver.

    Reference LAPACK builds bundled with some host environments ship
    ``zgesvd`` but not ``zgesdd``; only builds linked against a full external
    LAPACK provide both.
    """
    try:
        scipy.linalg.get_lapack_funcs("gesdd", dtype=np.complex128)
    except (ValueError, AttributeError) as err:
        logger.warning("complex divide-and-conquer SVD unavailable: %s", err)
        return False
    return True


def _lapack_svdvals(matrix, method: str) -> torch.Tensor:
    matrix = as_matrix(matrix)
    # LAPACK works in place, so scipy must copy rather than reuse the buffer.
    array = matrix.detach().cpu().resolve_conj().resolve_neg().numpy()
    _, singular_values, _ = scipy.linalg.svd(
        array,
        full_matrices=False,
        compute_uv=True,
        overwrite_a=False,
        lapack_driver=_DRIVERS[method],
    )
    return torch.from_numpy(np.ascontiguousarray(singular_values)).to(torch.float64)


def standard_svd(matrix) -> torch.Tensor:
    """Singular values via the standard LAPACK driver (``gesvd``).

    Args:
        matrix (torch.Tensor|numpy.ndarray): Real or complex 2-D matrix

    Returns:
        torch.Tensor: Singular values, descending, dtype float64

    Example:
        >>> standard_svd(torch.eye(3) * 2.0)
        tensor([2., 2., 2.], dtype=torch.float64)
    """
    return _lapack_svdvals(matrix, STANDARD)


def divide_and_conquer_svd(matrix) -> torch.Tensor:
    """Singular values via the divide-and-conquer LAPACK driver (``gesdd``)."""
    return _lapack_svdvals(matrix, DIVIDE_AND_CONQUER)


def torch_svd(matrix) -> torch.Tensor:
    """Singular values via ``torch.linalg.svdvals`` on the matrix's device."""
    singular_values = torch.linalg.svdvals(as_matrix(matrix))
    return singular_values.to(device="cpu", dtype=torch.float64)


def _require(name: str, matrix, element_type: ElementType):
    actual = element_type_of(matrix)
    if actual is not element_type:
        raise UnsupportedTypeError(name, actual, (element_type,))


def base_svd(matrix) -> torch.Tensor:
    """Standard SVD of a real matrix."""
    _require("base_svd", matrix, ElementType.REAL)
    return standard_svd(matrix)


def dc_svd(matrix) -> torch.Tensor:
    """Divide-and-conquer SVD of a real matrix."""
    _require("dc_svd", matrix, ElementType.REAL)
    return divide_and_conquer_svd(matrix)


def cx_base_svd(matrix) -> torch.Tensor:
    """Standard SVD of a complex matrix."""
    _require("cx_base_svd", matrix, ElementType.COMPLEX)
    return standard_svd(matrix)


def cx_dc_svd(matrix) -> torch.Tensor:
    """Divide-and-conquer SVD of a complex matrix.

    Raises:
        UnsupportedTypeError: The LAPACK build lacks the complex driver
    """
    _require("cx_dc_svd", matrix, ElementType.COMPLEX)
    if not complex_dc_available():
        raise UnsupportedTypeError("cx_dc_svd", ElementType.COMPLEX, ())
    return divide_and_conquer_svd(matrix)


def register_default_kernels(registry: KernelRegistry) -> KernelRegistry:
    """Register the ``standard``, ``dc`` and ``torch`` kernels on ``registry``."""
    dc_types = ALL_ELEMENT_TYPES if complex_dc_available() else (ElementType.REAL,)
    registry.register(
        STANDARD, standard_svd, ALL_ELEMENT_TYPES, "LAPACK gesvd (bidiagonal QR)"
    )
    registry.register(
        DIVIDE_AND_CONQUER, divide_and_conquer_svd, dc_types, "LAPACK gesdd (divide-and-conquer)"
    )
    registry.register(TORCH, torch_svd, ALL_ELEMENT_TYPES, "torch.linalg.svdvals")
    return registry


register_default_kernels(default_registry)
