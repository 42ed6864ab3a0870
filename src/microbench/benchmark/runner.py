"""
Benchmark Runner for microbench.

This module provides the main benchmark execution logic: case
registration, untimed warmup, timed measurement on a monotonic
clock, and per-case failure isolation.
"""

import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..config.config_loader import default_config, validate_benchmark_section
from .case import (
    BenchmarkCase,
    BenchmarkError,
    BenchmarkResult,
    DuplicateNameError,
    OperationFailedError,
    UnknownCaseError,
    validate_iterations,
)
from .metrics import MetricsCollector


class BenchmarkRunner:
    """
    Main benchmark runner.

    Registers named zero-argument operations, executes each of them a
    fixed number of times and reports the average duration per case.
    Cases run sequentially in registration order.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, verbose: bool = False):
        """
        Initialize BenchmarkRunner.

        Args:
            config: Benchmark configuration dictionary (see ConfigLoader);
                the built-in defaults are used when omitted
            verbose: Print progress and summaries while running

        Raises:
            ValueError: If the 'benchmark' section of the config is invalid
        """
        self.config = config if config is not None else default_config()
        self.verbose = verbose

        section = self.config.get("benchmark", {})
        if not isinstance(section, dict):
            raise ValueError("'benchmark' section must be a mapping")

        benchmark = {**default_config()["benchmark"], **section}
        validate_benchmark_section(benchmark)
        self.warmup_iterations: int = benchmark["warmup_iterations"]
        self.default_iterations: int = benchmark["iterations"]
        self.time_unit: str = benchmark["time_unit"]

        self._cases: Dict[str, BenchmarkCase] = {}
        # Registration is closed while any run or run_one is active
        self._run_depth = 0

    @property
    def cases(self) -> Tuple[BenchmarkCase, ...]:
        """Registered cases in registration order."""
        return tuple(self._cases.values())

    @property
    def names(self) -> List[str]:
        return list(self._cases)

    def register(self, name: str, operation: Callable[[], Any]) -> BenchmarkCase:
        """
        Register a benchmark case.

        Args:
            name: Unique case name
            operation: Zero-argument callable to time

        Returns:
            The registered BenchmarkCase

        Raises:
            DuplicateNameError: If the name is already registered
            ValueError: If the name is empty or not a string
            TypeError: If the operation is not callable
            BenchmarkError: If called while a run is in progress
        """
        if self._run_depth:
            raise BenchmarkError("Cannot register cases while a run is in progress")
        if not isinstance(name, str) or not name:
            raise ValueError(f"Case name must be a non-empty string, got {name!r}")
        if not callable(operation):
            raise TypeError(f"Operation for case '{name}' must be callable")
        if name in self._cases:
            raise DuplicateNameError(name)

        case = BenchmarkCase(name=name, operation=operation)
        self._cases[name] = case
        return case

    def register_all(self, operations: Mapping[str, Callable[[], Any]]) -> List[BenchmarkCase]:
        """
        Register every name -> operation pair of a mapping, in mapping order.

        Returns:
            The registered cases
        """
        return [self.register(name, operation) for name, operation in operations.items()]

    def run(self, iterations: Optional[int] = None) -> List[BenchmarkResult]:
        """
        Run all registered cases.

        A failing case does not stop the remaining cases. Once every case
        has run, the first failure is raised with the successful results
        and all failures attached to it.

        Args:
            iterations: Timed invocations per case (config default if None)

        Returns:
            One BenchmarkResult per case, in registration order

        Raises:
            InvalidIterationCountError: If iterations < 1
            OperationFailedError: If any case's operation raised
        """
        iterations = self._resolve_iterations(iterations)

        self._print_banner(f"Running {len(self._cases)} benchmark(s)")

        results: List[BenchmarkResult] = []
        failures: List[OperationFailedError] = []

        self._run_depth += 1
        try:
            for case in tuple(self._cases.values()):
                try:
                    results.append(self._measure(case, iterations))
                except OperationFailedError as e:
                    self._log(f"✗ {case.name} failed: {e}")
                    failures.append(e)
        finally:
            self._run_depth -= 1

        if failures:
            first = failures[0]
            first.results = results
            first.failures = failures
            raise first

        return results

    def run_one(self, name: str, iterations: Optional[int] = None) -> BenchmarkResult:
        """
        Run a single registered case.

        Args:
            name: Name of the case to run
            iterations: Timed invocations (config default if None)

        Returns:
            BenchmarkResult for the case

        Raises:
            UnknownCaseError: If the name is not registered
            InvalidIterationCountError: If iterations < 1
            OperationFailedError: If the operation raised
        """
        if name not in self._cases:
            raise UnknownCaseError(name, list(self._cases))

        iterations = self._resolve_iterations(iterations)

        self._run_depth += 1
        try:
            return self._measure(self._cases[name], iterations)
        finally:
            self._run_depth -= 1

    def _resolve_iterations(self, iterations: Optional[int]) -> int:
        if iterations is None:
            iterations = self.default_iterations
        return validate_iterations(iterations)

    def _measure(self, case: BenchmarkCase, iterations: int) -> BenchmarkResult:
        """
        Warm up and time a single case.

        Args:
            case: Case to measure
            iterations: Number of timed invocations

        Returns:
            BenchmarkResult for the case

        Raises:
            OperationFailedError: On the first failing invocation
        """
        self._log(f"\n{case.name}")

        # Warmup phase
        if self.warmup_iterations:
            self._log(f"  Warmup: {self.warmup_iterations} iterations...")
        for i in range(self.warmup_iterations):
            try:
                case.operation()
            except Exception as e:
                raise OperationFailedError(case.name, i, e, phase="warmup") from e

        # Measurement phase
        self._log(f"  Measuring: {iterations} iterations...")
        metrics = MetricsCollector()
        for i in range(iterations):
            start = time.perf_counter_ns()
            try:
                case.operation()
            except Exception as e:
                raise OperationFailedError(case.name, i, e) from e
            metrics.add_duration(time.perf_counter_ns() - start)

        result = BenchmarkResult(
            name=case.name,
            iterations=iterations,
            total_duration_nanos=metrics.total_ns,
            warmup_iterations=self.warmup_iterations,
            statistics={
                **metrics.calculate_statistics(),
                "num_outliers": len(metrics.detect_outliers()),
            },
        )

        self._log(
            f"  ✓ {result.average_in(self.time_unit):.6f} {self.time_unit}/op "
            f"(p95: {result.statistics['duration_p95_ns']:.0f} ns)"
        )

        return result

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message)

    def _print_banner(self, title: str) -> None:
        self._log("\n" + "=" * 60)
        self._log(title)
        self._log("=" * 60)

    def __len__(self) -> int:
        return len(self._cases)

    def __contains__(self, name: object) -> bool:
        return name in self._cases

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"BenchmarkRunner(cases={len(self._cases)}, "
            f"warmup={self.warmup_iterations}, iterations={self.default_iterations})"
        )
