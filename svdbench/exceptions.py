"""Exception hierarchy for the kernel benchmark harness.

Every error raised by the registry, the timing harness and the reporter
derives from :class:`SvdBenchError`, so callers can catch the whole family
at once or pick out the specific failure.
"""


class SvdBenchError(Exception):
    """Base class for all benchmark harness errors."""


class DuplicateNameError(SvdBenchError):
    """A kernel is already registered under this name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"kernel {name!r} is already registered")


class UnknownKernelError(SvdBenchError, KeyError):
    """No kernel is registered under this name."""

    def __init__(self, name: str, available=()):
        self.name = name
        self.available = tuple(available)
        super().__init__(name)

    def __str__(self):
        known = ", ".join(self.available) or "none"
        return f"unknown kernel {self.name!r} (registered: {known})"


class UnsupportedTypeError(SvdBenchError, TypeError):
    """The kernel does not handle the element type of the given matrix."""

    def __init__(self, name: str, element_type, supported=()):
        self.name = name
        self.element_type = element_type
        self.supported = tuple(supported)
        kinds = ", ".join(str(kind) for kind in self.supported) or "none"
        super().__init__(
            f"kernel {name!r} does not support {element_type} matrices "
            f"(supported: {kinds})"
        )


class InvalidArgumentError(SvdBenchError, ValueError):
    """An argument is outside its valid range."""


class EmptySampleError(SvdBenchError, ValueError):
    """Statistics were requested for an empty sample sequence."""

    def __init__(self, message: str = "cannot summarize an empty sample sequence"):
        super().__init__(message)


class KernelExecutionError(SvdBenchError):
    """A kernel raised while being measured.

    Attributes:
        name: Registered name of the failing kernel
        repetition: 1-based index of the failing call within its series
        warmup: True when the failure happened during a discarded warm-up run
        results: Results of the kernels that completed in the same ``run``
        failures: Every failure of the same ``run``, keyed by kernel name
    """

    def __init__(self, name: str, repetition: int, cause: BaseException, warmup: bool = False):
        self.name = name
        self.repetition = repetition
        self.cause = cause
        self.warmup = warmup
        self.results = {}
        self.failures = {}
        phase = "warm-up run" if warmup else "repetition"
        super().__init__(
            f"kernel {name!r} failed at {phase} {repetition}: "
            f"{type(cause).__name__}: {cause}"
        )
