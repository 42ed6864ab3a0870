"""
Metrics Collector for microbench.

This module collects per-invocation durations for a benchmark case
and calculates descriptive statistics over them.
"""

from typing import Dict, List

import numpy as np


class MetricsCollector:
    """
    Per-invocation duration collector.

    Durations are recorded in nanoseconds, as read from a monotonic
    clock, and summarized with numpy.
    """

    def __init__(self):
        """Initialize MetricsCollector."""
        # Duration samples (in nanoseconds)
        self.durations: List[int] = []

    def add_duration(self, duration_ns: int) -> None:
        """
        Add a duration sample.

        Args:
            duration_ns: Duration of one invocation in nanoseconds
        """
        self.durations.append(duration_ns)

    @property
    def total_ns(self) -> int:
        """Sum of all recorded durations in nanoseconds."""
        return sum(self.durations)

    @property
    def num_samples(self) -> int:
        return len(self.durations)

    def calculate_statistics(self) -> Dict[str, float]:
        """
        Calculate descriptive statistics.

        Returns:
            Dictionary containing all statistics (durations in nanoseconds)
        """
        if not self.durations:
            return self._get_empty_stats()

        durations_array = np.array(self.durations, dtype=np.float64)

        return {
            "duration_mean_ns": float(np.mean(durations_array)),
            "duration_median_ns": float(np.median(durations_array)),
            "duration_std_ns": float(np.std(durations_array)),
            "duration_min_ns": float(np.min(durations_array)),
            "duration_max_ns": float(np.max(durations_array)),
            "duration_p50_ns": float(np.percentile(durations_array, 50)),
            "duration_p95_ns": float(np.percentile(durations_array, 95)),
            "duration_p99_ns": float(np.percentile(durations_array, 99)),
            "num_samples": len(self.durations),
        }

    def detect_outliers(self, method: str = "iqr", threshold: float = 1.5) -> List[int]:
        """
        Detect outlier indices in duration measurements.

        Args:
            method: Outlier detection method ('iqr' or 'zscore')
            threshold: Threshold for outlier detection (1.5 for IQR, 3.0 for z-score)

        Returns:
            List of indices corresponding to outliers

        Raises:
            ValueError: If the method is not recognized
        """
        if method not in ("iqr", "zscore"):
            raise ValueError(f"Unknown outlier method '{method}'. Use 'iqr' or 'zscore'")

        if not self.durations:
            return []

        durations_array = np.array(self.durations, dtype=np.float64)

        if method == "iqr":
            q1 = np.percentile(durations_array, 25)
            q3 = np.percentile(durations_array, 75)
            iqr = q3 - q1

            lower_bound = q1 - threshold * iqr
            upper_bound = q3 + threshold * iqr

            return [
                i for i, val in enumerate(durations_array)
                if val < lower_bound or val > upper_bound
            ]

        mean = np.mean(durations_array)
        std = np.std(durations_array)
        if std == 0:
            return []

        z_scores = np.abs((durations_array - mean) / std)
        return [i for i, z in enumerate(z_scores) if z > threshold]

    def _get_empty_stats(self) -> Dict[str, float]:
        """Get empty statistics dictionary."""
        return {
            "duration_mean_ns": 0.0,
            "duration_median_ns": 0.0,
            "duration_std_ns": 0.0,
            "duration_min_ns": 0.0,
            "duration_max_ns": 0.0,
            "duration_p50_ns": 0.0,
            "duration_p95_ns": 0.0,
            "duration_p99_ns": 0.0,
            "num_samples": 0,
        }

    def __repr__(self) -> str:
        """String representation of the collector."""
        return f"MetricsCollector(samples={len(self.durations)})"
