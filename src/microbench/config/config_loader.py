"""
Configuration Loader for microbench.

This module provides functionality to load, validate, and manage
benchmark configuration from YAML files.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml

ENV_PREFIX = "MICROBENCH_"

TIME_UNIT_CHOICES = ("ns", "us", "ms", "s")

DEFAULT_CONFIG: Dict[str, Any] = {
    "benchmark": {
        "warmup_iterations": 0,
        "iterations": 1,
        "time_unit": "ms",
    },
    "modes": {
        "quick": {"warmup_iterations": 0, "iterations": 10},
        "standard": {"warmup_iterations": 100, "iterations": 1000},
        "full": {"warmup_iterations": 1000, "iterations": 100000},
    },
    "suites": {
        "string_manipulation": {
            "input": "hello world",
            "pattern": "[aeiou]",
            "replacement": "x",
        },
    },
}


def default_config() -> Dict[str, Any]:
    """Return a fresh copy of the built-in configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


class ConfigLoader:
    """
    Configuration loader and validator.

    Handles loading benchmark configuration from YAML files,
    applying environment variable overrides, and validating
    configuration values. Sections missing from the file are
    filled in from DEFAULT_CONFIG.
    """

    def __init__(self, config_path: Union[str, Path]):
        """
        Initialize ConfigLoader.

        Args:
            config_path: Path to the configuration YAML file

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            yaml.YAMLError: If configuration file is invalid YAML
            ValueError: If configuration values are invalid
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.config = self._merge_defaults(self._load_yaml())
        self._apply_environment_overrides()
        self._validate_config()

    def _load_yaml(self) -> Dict[str, Any]:
        """
        Load YAML configuration file.

        Returns:
            Dictionary containing configuration

        Raises:
            yaml.YAMLError: If YAML is invalid
            ValueError: If the file is empty or not a mapping
        """
        with open(self.config_path, "r") as f:
            config = yaml.safe_load(f)

        if config is None:
            raise ValueError("Configuration file is empty")
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping")

        return config

    def _merge_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Fill sections and keys missing from the file with defaults."""
        merged = default_config()
        for section, values in config.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(values)
            else:
                merged[section] = values
        return merged

    def _apply_environment_overrides(self) -> None:
        """
        Apply environment variable overrides to configuration.

        Environment variables should be in format:
        MICROBENCH_<SECTION>__<KEY>=<VALUE>

        Examples:
            MICROBENCH_BENCHMARK__WARMUP_ITERATIONS=100
            MICROBENCH_SUITES__STRING_MANIPULATION__PATTERN=[a-z]
        """
        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            # Double underscores separate levels, keys keep single ones
            parts = key[len(ENV_PREFIX) :].lower().split("__")

            if len(parts) < 2 or not all(parts):
                continue

            # Navigate to the target config section
            current = self.config
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]

            current[parts[-1]] = self._convert_type(value)

    def _convert_type(self, value: str) -> Union[str, int, float, bool]:
        """
        Convert string value to appropriate type.

        Args:
            value: String value from environment variable

        Returns:
            Converted value
        """
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def _validate_config(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        benchmark = self.config.get("benchmark")
        if not isinstance(benchmark, dict):
            raise ValueError("'benchmark' section must be a mapping")

        validate_benchmark_section(benchmark)

        modes = self.config.get("modes", {})
        if not isinstance(modes, dict):
            raise ValueError("'modes' section must be a mapping")

        for mode_name, mode_settings in modes.items():
            if not isinstance(mode_settings, dict):
                raise ValueError(f"Mode '{mode_name}' must be a mapping")
            validate_benchmark_section({**benchmark, **mode_settings})

        suites = self.config.get("suites", {})
        if not isinstance(suites, dict):
            raise ValueError("'suites' section must be a mapping")

        for suite_name, suite_settings in suites.items():
            if not isinstance(suite_settings, dict):
                raise ValueError(f"Suite '{suite_name}' must be a mapping")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Path to configuration key using dots (e.g., 'benchmark.iterations')
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default

        Examples:
            >>> config.get('benchmark.warmup_iterations')
            0
            >>> config.get('nonexistent.key', default=100)
            100
        """
        keys = key_path.split(".")
        current = self.config

        for key in keys:
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]

        return current

    def get_mode_config(self, mode: str = "standard") -> Dict[str, Any]:
        """
        Get configuration for a specific run mode.

        Args:
            mode: Run mode ('quick', 'standard', or 'full')

        Returns:
            Configuration dictionary for the specified mode

        Raises:
            ValueError: If mode is not recognized
        """
        modes = self.config.get("modes", {})
        if mode not in modes:
            raise ValueError(f"Unknown mode '{mode}'. Available modes: {list(modes.keys())}")

        mode_config = copy.deepcopy(self.config)
        mode_config["benchmark"].update(modes[mode])
        mode_config["mode"] = mode

        return mode_config

    def to_dict(self) -> Dict[str, Any]:
        """
        Get the full configuration as a dictionary.

        Returns:
            Complete configuration dictionary
        """
        return copy.deepcopy(self.config)

    def save(self, output_path: Union[str, Path]) -> None:
        """
        Save configuration to a YAML file.

        Args:
            output_path: Path where to save the configuration
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w") as f:
            yaml.dump(self.config, f, default_flow_style=False, sort_keys=False)

    def __repr__(self) -> str:
        """String representation of ConfigLoader."""
        return f"ConfigLoader(config_path='{self.config_path}')"

    def __str__(self) -> str:
        """Human-readable string representation."""
        benchmark = self.config["benchmark"]
        return (
            f"BenchmarkConfig(iterations={benchmark['iterations']}, "
            f"warmup={benchmark['warmup_iterations']}, "
            f"source='{self.config_path}')"
        )


def validate_benchmark_section(section: Dict[str, Any]) -> None:
    """
    Validate the values of a 'benchmark' section.

    Args:
        section: Benchmark section dictionary

    Raises:
        ValueError: If a value is missing or out of range
    """
    _validate_int(section, "warmup_iterations", minimum=0)
    _validate_int(section, "iterations", minimum=1)

    time_unit = section.get("time_unit", "ms")
    if time_unit not in TIME_UNIT_CHOICES:
        raise ValueError(
            f"'time_unit' must be one of {list(TIME_UNIT_CHOICES)}, got {time_unit!r}"
        )


def _validate_int(section: Dict[str, Any], key: str, minimum: int) -> None:
    """
    Validate that a configuration value is an integer >= minimum.

    Raises:
        ValueError: If value is missing or not an integer >= minimum
    """
    if key not in section:
        raise ValueError(f"Missing '{key}' in configuration section")

    value = section[key]
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ValueError(f"'{key}' must be an integer >= {minimum}, got {value}")
