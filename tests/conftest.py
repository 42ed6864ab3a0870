"""
Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides:
- Path setup for importing the microbench package from src/
- Common fixtures for tests
"""

import sys
from pathlib import Path

import pytest

# Add src/ to Python path so tests run without an installed package
src_root = Path(__file__).parent.parent / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))


@pytest.fixture
def runner():
    """A runner with the built-in defaults (no warmup)."""
    from microbench.benchmark import BenchmarkRunner

    return BenchmarkRunner()


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config file and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "benchmark_config.yaml"
        path.write_text(content)
        return path

    return _write


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Drop MICROBENCH_* variables inherited from the outer environment."""
    import os

    for key in list(os.environ):
        if key.startswith("MICROBENCH_"):
            monkeypatch.delenv(key)
