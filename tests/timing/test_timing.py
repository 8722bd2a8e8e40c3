"""Unit tests for the timing harness.

This module covers:
- Sample counts matching the requested repetitions
- Argument validation
- Warm-up runs being executed but not timed
- Failure isolation between kernels
- Repetition index reporting for failing kernels
- Input matrices left untouched
"""

import sys

sys.path.append("./")

import unittest
import torch
from svdbench import (
    ElementType,
    InvalidArgumentError,
    KernelExecutionError,
    KernelRegistry,
    UnknownKernelError,
    UnsupportedTypeError,
    measure,
    run,
    scaled_identity,
    standard_svd,
)


class _CountingKernel:
    """Kernel returning sorted singular values and counting its calls."""

    def __init__(self, fail_on=None):
        self.calls = 0
        self.fail_on = fail_on

    def __call__(self, matrix):
        self.calls += 1
        if self.fail_on is not None and self.calls == self.fail_on:
            raise RuntimeError("boom")
        return torch.linalg.svdvals(matrix).to(torch.float64)


class TestMeasure(unittest.TestCase):
    """Test suite for measure."""

    def setUp(self):
        self.matrix = scaled_identity(4, 3.0)

    def test_sample_count(self):
        for repetitions in [1, 2, 7]:
            kernel = _CountingKernel()
            samples = measure(kernel, self.matrix, repetitions)
            self.assertEqual(len(samples), repetitions)
            self.assertEqual(kernel.calls, repetitions)
            self.assertTrue(all(isinstance(s, int) and s >= 0 for s in samples))

    def test_warmup_runs_not_timed(self):
        kernel = _CountingKernel()
        samples = measure(kernel, self.matrix, 3, warmup_runs=2)
        self.assertEqual(len(samples), 3)
        self.assertEqual(kernel.calls, 5)

    def test_invalid_counts(self):
        kernel = _CountingKernel()
        for repetitions in [0, -1, 1.5, True, "3"]:
            with self.assertRaises(InvalidArgumentError):
                measure(kernel, self.matrix, repetitions)
        with self.assertRaises(InvalidArgumentError):
            measure(kernel, self.matrix, 1, warmup_runs=-1)
        self.assertEqual(kernel.calls, 0)

    def test_failure_reports_index(self):
        kernel = _CountingKernel(fail_on=3)
        with self.assertRaises(KernelExecutionError) as context:
            measure(kernel, self.matrix, 5, name="flaky")
        error = context.exception
        self.assertEqual(error.name, "flaky")
        self.assertEqual(error.repetition, 3)
        self.assertFalse(error.warmup)
        self.assertIsInstance(error.__cause__, RuntimeError)
        self.assertIn("flaky", str(error))
        self.assertIn("3", str(error))
        self.assertEqual(kernel.calls, 3)

    def test_warmup_failure(self):
        kernel = _CountingKernel(fail_on=1)
        with self.assertRaises(KernelExecutionError) as context:
            measure(kernel, self.matrix, 5, warmup_runs=2, name="cold")
        self.assertTrue(context.exception.warmup)
        self.assertEqual(context.exception.repetition, 1)


class TestRun(unittest.TestCase):
    """Test suite for run."""

    def setUp(self):
        self.registry = KernelRegistry()
        self.matrix = scaled_identity(4, 2.0)

    def test_end_to_end_standard(self):
        self.registry.register("standard", standard_svd)
        results = run(["standard"], self.matrix, 5, registry=self.registry)
        self.assertEqual(list(results), ["standard"])
        result = results["standard"]
        self.assertEqual(result.count, 5)
        for value in [result.min, result.median, result.mean, result.max]:
            self.assertTrue(torch.isfinite(torch.tensor(value)))
            self.assertGreaterEqual(value, 0.0)
        self.assertLessEqual(result.min, result.median)
        self.assertLessEqual(result.median, result.max)

    def test_repetition_count_for_each_kernel(self):
        self.registry.register("a", _CountingKernel())
        self.registry.register("b", _CountingKernel())
        results = run(["a", "b", "a"], self.matrix, 4, registry=self.registry)
        self.assertEqual(list(results), ["a", "b"])
        self.assertTrue(all(r.count == 4 for r in results.values()))

    def test_flaky_kernel(self):
        self.registry.register("flaky", _CountingKernel(fail_on=3))
        with self.assertRaises(KernelExecutionError) as context:
            run(["flaky"], self.matrix, 5, registry=self.registry)
        error = context.exception
        self.assertEqual(error.repetition, 3)
        self.assertNotIn("flaky", error.results)
        self.assertIn("flaky", error.failures)

    def test_failure_isolation(self):
        healthy = _CountingKernel()
        self.registry.register("flaky", _CountingKernel(fail_on=2))
        self.registry.register("healthy", healthy)
        with self.assertRaises(KernelExecutionError) as context:
            run(["flaky", "healthy"], self.matrix, 5, registry=self.registry)
        self.assertEqual(healthy.calls, 5)
        self.assertEqual(context.exception.results["healthy"].count, 5)

    def test_no_raise_drops_failed_kernel(self):
        self.registry.register("flaky", _CountingKernel(fail_on=1))
        self.registry.register("healthy", _CountingKernel())
        with self.assertLogs("svdbench.timing", level="ERROR"):
            results = run(
                ["flaky", "healthy"],
                self.matrix,
                3,
                registry=self.registry,
                raise_on_error=False,
            )
        self.assertEqual(list(results), ["healthy"])

    def test_resolution_errors_before_execution(self):
        kernel = _CountingKernel()
        self.registry.register("real", kernel, element_types=(ElementType.REAL,))
        with self.assertRaises(UnknownKernelError):
            run(["real", "missing"], self.matrix, 2, registry=self.registry)
        with self.assertRaises(UnsupportedTypeError):
            run(["real"], self.matrix.to(torch.complex128), 2, registry=self.registry)
        self.assertEqual(kernel.calls, 0)

    def test_invalid_arguments(self):
        self.registry.register("k", _CountingKernel())
        with self.assertRaises(InvalidArgumentError):
            run(["k"], self.matrix, 0, registry=self.registry)
        with self.assertRaises(InvalidArgumentError):
            run([], self.matrix, 1, registry=self.registry)
        with self.assertRaises(InvalidArgumentError):
            run(["k"], torch.ones(2, 2, 2), 1, registry=self.registry)
        with self.assertRaises(InvalidArgumentError):
            run(["k"], torch.ones(2, 2, dtype=torch.int64), 1, registry=self.registry)

    def test_input_not_mutated(self):
        self.registry.register("standard", standard_svd)
        matrix = torch.randn(6, 6, generator=torch.Generator().manual_seed(0), dtype=torch.float64)
        original = matrix.clone()
        run(["standard"], matrix, 3, registry=self.registry)
        self.assertTrue(torch.equal(matrix, original))

    @unittest.skipUnless(torch.cuda.is_available(), "CUDA is not available")
    def test_cuda_input(self):
        self.registry.register("k", _CountingKernel())
        results = run(["k"], self.matrix.to("cuda"), 3, registry=self.registry)
        self.assertEqual(results["k"].count, 3)


if __name__ == "__main__":
    unittest.main()
