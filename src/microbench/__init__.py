"""Microbenchmark runner for timing pluggable operations."""

from .benchmark import (
    BenchmarkCase,
    BenchmarkError,
    BenchmarkResult,
    BenchmarkRunner,
    DuplicateNameError,
    InvalidIterationCountError,
    OperationFailedError,
    UnknownCaseError,
)
from .config import ConfigLoader

__version__ = "0.1.0"

__all__ = [
    "BenchmarkRunner",
    "BenchmarkCase",
    "BenchmarkResult",
    "ConfigLoader",
    "BenchmarkError",
    "DuplicateNameError",
    "InvalidIterationCountError",
    "OperationFailedError",
    "UnknownCaseError",
]
