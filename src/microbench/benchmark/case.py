"""
Benchmark cases and results for microbench.

This module defines the records exchanged with the benchmark runner:
the registered unit of work, the timing outcome of a run, and the
exception hierarchy raised while registering or running cases.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence

# Nanoseconds per supported output time unit
TIME_UNITS: Dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
}


@dataclass(frozen=True)
class BenchmarkCase:
    """
    A named, registered unit of work to be timed.

    Attributes:
        name: Unique name of the case within a runner
        operation: Zero-argument callable invoked once per iteration
    """

    name: str
    operation: Callable[[], Any]

    def __call__(self) -> Any:
        return self.operation()


@dataclass(frozen=True)
class BenchmarkResult:
    """
    Timing outcome for one BenchmarkCase over a run.

    Attributes:
        name: Name of the measured case
        iterations: Number of timed invocations (always >= 1)
        total_duration_nanos: Sum of the timed invocation durations
        warmup_iterations: Number of untimed invocations run beforehand
        statistics: Descriptive statistics over the per-invocation samples
    """

    name: str
    iterations: int
    total_duration_nanos: int
    warmup_iterations: int = 0
    statistics: Dict[str, float] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if self.iterations < 1:
            raise InvalidIterationCountError(self.iterations)
        if self.total_duration_nanos < 0:
            raise ValueError(
                f"total_duration_nanos must be non-negative, got {self.total_duration_nanos}"
            )

    @property
    def average_duration_nanos(self) -> float:
        """Average duration of a single invocation in nanoseconds."""
        return self.total_duration_nanos / self.iterations

    def average_in(self, unit: str = "ms") -> float:
        """
        Average invocation duration converted to another time unit.

        Args:
            unit: One of 'ns', 'us', 'ms' or 's'

        Returns:
            Average duration expressed in the requested unit

        Raises:
            ValueError: If the unit is not supported
        """
        if unit not in TIME_UNITS:
            raise ValueError(f"Unknown time unit '{unit}'. Available units: {list(TIME_UNITS)}")
        return self.average_duration_nanos / TIME_UNITS[unit]

    def to_dict(self) -> Dict[str, Any]:
        """
        Export the result as plain values.

        Returns:
            Dictionary with the result fields and the computed average
        """
        return {
            "name": self.name,
            "iterations": self.iterations,
            "warmup_iterations": self.warmup_iterations,
            "total_duration_nanos": self.total_duration_nanos,
            "average_duration_nanos": self.average_duration_nanos,
            "statistics": dict(self.statistics),
        }

    def __str__(self) -> str:
        return (
            f"{self.name}: {self.average_in('ms'):.6f} ms/op "
            f"({self.iterations} iterations)"
        )


class BenchmarkError(Exception):
    """Base exception for benchmark errors."""

    pass


class DuplicateNameError(BenchmarkError):
    """Exception raised when a case name is registered twice."""

    def __init__(self, name: str):
        super().__init__(f"Benchmark case '{name}' is already registered")
        self.name = name


class InvalidIterationCountError(BenchmarkError, ValueError):
    """Exception raised when an iteration count is below one."""

    def __init__(self, iterations: Any, minimum: int = 1):
        super().__init__(f"iterations must be an integer >= {minimum}, got {iterations!r}")
        self.iterations = iterations


class UnknownCaseError(BenchmarkError, KeyError):
    """Exception raised when a case name is not registered."""

    def __init__(self, name: str, available: Sequence[str] = ()):
        super().__init__(
            f"Unknown benchmark case '{name}'. Available cases: {list(available)}"
        )
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class OperationFailedError(BenchmarkError):
    """
    Exception raised when a benchmarked operation fails.

    Wraps the original exception (also available as __cause__) together
    with the case name, the phase and the 0-based iteration index at
    which the failure occurred. When raised from BenchmarkRunner.run(),
    ``results`` holds the results of the cases that succeeded and
    ``failures`` every case failure of that run.
    """

    def __init__(
        self,
        case_name: str,
        iteration: int,
        cause: BaseException,
        phase: str = "measurement",
    ):
        super().__init__(
            f"Benchmark case '{case_name}' failed at {phase} iteration {iteration}: "
            f"{type(cause).__name__}: {cause}"
        )
        self.case_name = case_name
        self.iteration = iteration
        self.cause = cause
        self.phase = phase
        self.results: List[BenchmarkResult] = []
        self.failures: List["OperationFailedError"] = [self]

    @property
    def failed_cases(self) -> List[str]:
        """Names of every failed case, in registration order."""
        return [failure.case_name for failure in self.failures]


def validate_iterations(iterations: Any, minimum: int = 1) -> int:
    """
    Validate an iteration count.

    Args:
        iterations: Requested iteration count
        minimum: Smallest accepted value

    Returns:
        The validated iteration count

    Raises:
        InvalidIterationCountError: If the count is not an integer >= minimum
    """
    # bool is an int subclass but never a meaningful count
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < minimum:
        raise InvalidIterationCountError(iterations, minimum)
    return iterations
