"""
Kernel registry for interchangeable computational variants

Kernels are plain callables sharing one contract: a 2-D matrix goes in, the
singular values come out as a 1-D tensor sorted in descending order. Each
kernel is registered under a unique name together with the element types it
can handle, so the harness can dispatch by name and reject an input the
variant cannot process before anything is timed.

    registry = KernelRegistry()
    registry.register("standard", base_svd)
    registry.register("dc", dc_svd, element_types=(ElementType.REAL,))

    kernel = registry.resolve("dc", ElementType.REAL)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional

import torch

from .exceptions import (
    DuplicateNameError,
    InvalidArgumentError,
    UnknownKernelError,
    UnsupportedTypeError,
)
from .matrices import ElementType

logger = logging.getLogger(__name__)

Kernel = Callable[[torch.Tensor], torch.Tensor]

ALL_ELEMENT_TYPES = (ElementType.REAL, ElementType.COMPLEX)


@dataclass(frozen=True)
class KernelEntry:
    """A registered kernel and the element types it declares."""

    name: str
    kernel: Kernel
    element_types: FrozenSet[ElementType]
    description: str = ""


def _element_types(name, element_types) -> FrozenSet[ElementType]:
    if isinstance(element_types, (ElementType, str)):
        element_types = (element_types,)
    try:
        return frozenset(ElementType(kind) for kind in element_types)
    except (TypeError, ValueError):
        raise InvalidArgumentError(
            f"kernel {name!r} declares invalid element types {element_types!r}, "
            f"expected any of: {', '.join(kind.value for kind in ElementType)}"
        ) from None


class KernelRegistry:
    """Name-based lookup of kernels."""

    def __init__(self):
        self._entries: Dict[str, KernelEntry] = {}

    def register(
        self,
        name: str,
        kernel: Kernel,
        element_types: Iterable[ElementType] = ALL_ELEMENT_TYPES,
        description: str = "",
    ) -> Kernel:
        """Add ``kernel`` under ``name``.

        Args:
            name: Unique, non-empty kernel name
            kernel: Callable mapping a matrix to its singular values
            element_types: Element types the kernel accepts
            description: One-line text shown in listings

        Returns:
            The kernel itself, so ``register`` can wrap a definition

        Raises:
            DuplicateNameError: ``name`` is taken; the earlier kernel stays
            InvalidArgumentError: Empty name, non-callable kernel or no
                element types
        """
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"kernel name must be a non-empty string, got {name!r}")
        if not callable(kernel):
            raise InvalidArgumentError(f"kernel {name!r} is not callable")
        kinds = _element_types(name, element_types)
        if not kinds:
            raise InvalidArgumentError(f"kernel {name!r} declares no element types")
        if name in self._entries:
            raise DuplicateNameError(name)

        self._entries[name] = KernelEntry(name, kernel, kinds, description)
        logger.debug(
            "registered kernel %r for %s",
            name,
            ", ".join(sorted(kind.value for kind in kinds)),
        )
        return kernel

    def kernel(self, name: str, element_types: Iterable[ElementType] = ALL_ELEMENT_TYPES, description: str = ""):
        """Decorator form of :meth:`register`."""

        def decorator(fn: Kernel) -> Kernel:
            return self.register(name, fn, element_types=element_types, description=description)

        return decorator

    def entry(self, name: str) -> KernelEntry:
        try:
            return self._entries[name]
        except KeyError:
            raise UnknownKernelError(name, self.names()) from None

    def resolve(self, name: str, element_type: Optional[ElementType] = None) -> Kernel:
        """Look up a kernel, optionally checking it accepts ``element_type``.

        Raises:
            UnknownKernelError: Nothing is registered under ``name``
            UnsupportedTypeError: The kernel does not declare ``element_type``
        """
        entry = self.entry(name)
        if element_type is not None and element_type not in entry.element_types:
            raise UnsupportedTypeError(
                name, element_type, sorted(entry.element_types, key=lambda kind: kind.value)
            )
        return entry.kernel

    def supports(self, name: str, element_type: ElementType) -> bool:
        return element_type in self.entry(name).element_types

    def names(self) -> List[str]:
        return sorted(self._entries)

    def __contains__(self, name) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


default_registry = KernelRegistry()


def register(name, kernel, element_types=ALL_ELEMENT_TYPES, description=""):
    """Register a kernel on the default registry."""
    return default_registry.register(name, kernel, element_types, description)


def resolve(name, element_type=None):
    """Resolve a kernel from the default registry."""
    return default_registry.resolve(name, element_type)


__all__ = [
    "ALL_ELEMENT_TYPES",
    "Kernel",
    "KernelEntry",
    "KernelRegistry",
    "default_registry",
    "register",
    "resolve",
]
