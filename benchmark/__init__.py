"""Benchmark suite for singular value kernels.

This package compares the standard and divide-and-conquer SVD drivers on
seeded real and complex matrices.
"""
