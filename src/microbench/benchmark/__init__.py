"""Benchmark execution package."""

from .case import (
    TIME_UNITS,
    BenchmarkCase,
    BenchmarkError,
    BenchmarkResult,
    DuplicateNameError,
    InvalidIterationCountError,
    OperationFailedError,
    UnknownCaseError,
)
from .metrics import MetricsCollector
from .runner import BenchmarkRunner

__all__ = [
    "BenchmarkRunner",
    "MetricsCollector",
    "BenchmarkCase",
    "BenchmarkResult",
    "TIME_UNITS",
    "BenchmarkError",
    "DuplicateNameError",
    "InvalidIterationCountError",
    "OperationFailedError",
    "UnknownCaseError",
]
