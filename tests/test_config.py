"""Tests for ConfigLoader."""

import pytest

from microbench.config import DEFAULT_CONFIG, ConfigLoader, default_config

BASIC_CONFIG = """
benchmark:
  warmup_iterations: 5
  iterations: 20
  time_unit: us
"""


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_load(self, config_file):
        loader = ConfigLoader(config_file(BASIC_CONFIG))

        assert loader.get("benchmark.warmup_iterations") == 5
        assert loader.get("benchmark.iterations") == 20
        assert loader.get("benchmark.time_unit") == "us"

    def test_missing_sections_use_defaults(self, config_file):
        """Keys and sections absent from the file come from the defaults."""
        loader = ConfigLoader(config_file("benchmark:\n  iterations: 3\n"))

        assert loader.get("benchmark.iterations") == 3
        assert loader.get("benchmark.warmup_iterations") == 0
        assert loader.get("suites.string_manipulation.pattern") == "[aeiou]"
        assert "quick" in loader.get("modes")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader(tmp_path / "nope.yaml")

    def test_empty_file(self, config_file):
        with pytest.raises(ValueError, match="empty"):
            ConfigLoader(config_file(""))

    def test_non_mapping_file(self, config_file):
        with pytest.raises(ValueError, match="mapping"):
            ConfigLoader(config_file("- just\n- a list\n"))

    @pytest.mark.parametrize(
        "content, match",
        [
            ("benchmark:\n  iterations: 0\n", "iterations"),
            ("benchmark:\n  iterations: ten\n", "iterations"),
            ("benchmark:\n  warmup_iterations: -1\n", "warmup_iterations"),
            ("benchmark:\n  time_unit: hours\n", "time_unit"),
            ("modes:\n  quick:\n    iterations: 0\n", "iterations"),
            ("benchmark:\n  iterations: 2\nsuites:\n", "'suites' section must be a mapping"),
            ("suites:\n  string_manipulation:\n", "string_manipulation"),
        ],
    )
    def test_validation(self, config_file, content, match):
        """Invalid values are rejected when loading."""
        with pytest.raises(ValueError, match=match):
            ConfigLoader(config_file(content))

    def test_environment_overrides(self, config_file, monkeypatch):
        """MICROBENCH_<SECTION>__<KEY> variables override file values."""
        monkeypatch.setenv("MICROBENCH_BENCHMARK__ITERATIONS", "50")
        monkeypatch.setenv("MICROBENCH_SUITES__STRING_MANIPULATION__PATTERN", "[a-z]")

        loader = ConfigLoader(config_file(BASIC_CONFIG))

        assert loader.get("benchmark.iterations") == 50
        assert loader.get("benchmark.warmup_iterations") == 5
        assert loader.get("suites.string_manipulation.pattern") == "[a-z]"

    def test_invalid_environment_override(self, config_file, monkeypatch):
        """Overrides are validated like file values."""
        monkeypatch.setenv("MICROBENCH_BENCHMARK__ITERATIONS", "0")

        with pytest.raises(ValueError, match="iterations"):
            ConfigLoader(config_file(BASIC_CONFIG))

    def test_convert_type(self, config_file):
        loader = ConfigLoader(config_file(BASIC_CONFIG))

        assert loader._convert_type("true") is True
        assert loader._convert_type("No") is False
        assert loader._convert_type("12") == 12
        assert loader._convert_type("0.5") == 0.5
        assert loader._convert_type("ms") == "ms"

    def test_get_default(self, config_file):
        loader = ConfigLoader(config_file(BASIC_CONFIG))

        assert loader.get("nonexistent.key", default=100) == 100
        assert loader.get("benchmark.iterations.deeper") is None

    def test_get_mode_config(self, config_file):
        """Mode overrides apply to a copy of the configuration."""
        loader = ConfigLoader(config_file(BASIC_CONFIG))

        quick = loader.get_mode_config("quick")

        assert quick["mode"] == "quick"
        assert quick["benchmark"]["iterations"] == 10
        assert quick["benchmark"]["warmup_iterations"] == 0
        assert quick["benchmark"]["time_unit"] == "us"
        assert loader.get("benchmark.iterations") == 20

    def test_unknown_mode(self, config_file):
        loader = ConfigLoader(config_file(BASIC_CONFIG))

        with pytest.raises(ValueError, match="Unknown mode"):
            loader.get_mode_config("turbo")

    def test_save(self, config_file, tmp_path):
        """Saved configuration loads back to the same values."""
        loader = ConfigLoader(config_file(BASIC_CONFIG))
        output = tmp_path / "out" / "saved.yaml"

        loader.save(output)

        assert ConfigLoader(output).to_dict() == loader.to_dict()

    def test_repr_and_str(self, config_file):
        loader = ConfigLoader(config_file(BASIC_CONFIG))

        assert "ConfigLoader" in repr(loader)
        assert "iterations=20" in str(loader)


class TestDefaultConfig:
    """Tests for the built-in configuration."""

    def test_default_config_is_a_copy(self):
        config = default_config()
        config["benchmark"]["iterations"] = 999

        assert DEFAULT_CONFIG["benchmark"]["iterations"] == 1
        assert default_config()["benchmark"]["iterations"] == 1
