"""
String manipulation benchmark suite.

Times a regex-based substring replacement on a short input string.
"""

import re
from typing import Any, Dict, List, Optional

from ..benchmark.case import BenchmarkCase
from ..benchmark.runner import BenchmarkRunner
from ..config.config_loader import DEFAULT_CONFIG

SUITE_NAME = "string_manipulation"


def regex_replace(input: str, pattern: str, replacement: str) -> str:
    """Replace every match of ``pattern`` in ``input`` with ``replacement``."""
    return re.sub(pattern, replacement, input)


def register_string_benchmarks(
    runner: BenchmarkRunner, config: Optional[Dict[str, Any]] = None
) -> List[BenchmarkCase]:
    """
    Register the string manipulation cases on a runner.

    Args:
        runner: Runner to register the cases on
        config: Configuration dictionary; inputs are read from
            suites.string_manipulation, falling back to the defaults

    Returns:
        The registered cases

    Raises:
        ValueError: If the suites section or its entry is not a mapping
    """
    settings = dict(DEFAULT_CONFIG["suites"][SUITE_NAME])
    if config is not None:
        suites = config.get("suites", {})
        if not isinstance(suites, dict):
            raise ValueError("'suites' section must be a mapping")
        overrides = suites.get(SUITE_NAME, {})
        if not isinstance(overrides, dict):
            raise ValueError(f"Suite '{SUITE_NAME}' must be a mapping")
        settings.update(overrides)

    text = settings["input"]
    pattern = settings["pattern"]
    replacement = settings["replacement"]

    return runner.register_all(
        {
            "regex_replace": lambda: regex_replace(text, pattern, replacement),
        }
    )
