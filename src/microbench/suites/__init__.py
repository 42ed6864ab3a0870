"""Bundled benchmark suites."""

from .string_manipulation import regex_replace, register_string_benchmarks

__all__ = ["regex_replace", "register_string_benchmarks"]
