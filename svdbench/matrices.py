"""Dense test matrices and element-type classification.

Random matrices are drawn from an explicitly passed ``torch.Generator`` so
that benchmark inputs are reproducible without touching the global seed.
"""

import enum

import numpy as np
import torch

from .exceptions import InvalidArgumentError

_REAL_DTYPES = (torch.float32, torch.float64)
_COMPLEX_DTYPES = (torch.complex64, torch.complex128)


class ElementType(enum.Enum):
    """Element type of a dense matrix."""

    REAL = "real"
    COMPLEX = "complex"

    def __str__(self):
        return self.value


def as_matrix(matrix) -> torch.Tensor:
    """Return ``matrix`` as a tensor, sharing memory with native-order numpy input."""
    if isinstance(matrix, torch.Tensor):
        return matrix
    if isinstance(matrix, np.ndarray):
        if not matrix.dtype.isnative:
            matrix = np.asarray(matrix, dtype=matrix.dtype.newbyteorder("="))
        try:
            return torch.from_numpy(matrix)
        except TypeError as err:
            raise InvalidArgumentError(f"unsupported matrix dtype {matrix.dtype}") from err
    raise InvalidArgumentError(
        f"expected a torch.Tensor or numpy.ndarray, got {type(matrix).__name__}"
    )


def element_type_of(matrix) -> ElementType:
    """Classify a 2-D matrix as real or complex.

    Args:
        matrix: 2-D tensor (or numpy array) of float32/float64 or
            complex64/complex128 elements

    Returns:
        ElementType: REAL or COMPLEX

    Raises:
        InvalidArgumentError: For non 2-D input or any other dtype
    """
    matrix = as_matrix(matrix)
    if matrix.dim() != 2:
        raise InvalidArgumentError(
            f"expected a 2-D matrix, got a tensor of shape {tuple(matrix.shape)}"
        )
    if matrix.dtype in _REAL_DTYPES:
        return ElementType.REAL
    if matrix.dtype in _COMPLEX_DTYPES:
        return ElementType.COMPLEX
    raise InvalidArgumentError(f"unsupported matrix dtype {matrix.dtype}")


def _check_shape(rows: int, cols: int):
    if rows < 1 or cols < 1:
        raise InvalidArgumentError(f"matrix shape must be positive, got {rows}x{cols}")


def random_real(
    rows: int,
    cols: int,
    generator: torch.Generator = None,
    dtype: torch.dtype = torch.float64,
) -> torch.Tensor:
    """Standard normal real matrix of shape ``rows x cols``.

    Example:
        >>> g = torch.Generator().manual_seed(42)
        >>> X = random_real(400, 400, generator=g)
    """
    _check_shape(rows, cols)
    if dtype not in _REAL_DTYPES:
        raise InvalidArgumentError(f"{dtype} is not a real floating dtype")
    return torch.randn(rows, cols, generator=generator, dtype=dtype)


def random_complex(
    rows: int,
    cols: int,
    generator: torch.Generator = None,
    dtype: torch.dtype = torch.complex128,
) -> torch.Tensor:
    """Complex matrix ``A + 1j * B`` with independent standard normal A and B."""
    _check_shape(rows, cols)
    if dtype not in _COMPLEX_DTYPES:
        raise InvalidArgumentError(f"{dtype} is not a complex dtype")
    real_dtype = torch.float64 if dtype == torch.complex128 else torch.float32
    real = torch.randn(rows, cols, generator=generator, dtype=real_dtype)
    imag = torch.randn(rows, cols, generator=generator, dtype=real_dtype)
    return torch.complex(real, imag)


def scaled_identity(n: int, scale: float = 1.0, dtype: torch.dtype = torch.float64) -> torch.Tensor:
    """``scale * I`` of size ``n x n``; its singular values are all ``abs(scale)``."""
    _check_shape(n, n)
    return torch.eye(n, dtype=dtype).mul_(scale)
