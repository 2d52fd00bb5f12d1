"""Tests for config module."""

from pathlib import Path

import pytest

from codewhiskers.config import (
    Config,
    ComplexityThresholds,
    ProfilerSettings,
    get_complexity_thresholds,
    get_profiler_settings,
    load_config,
)
from codewhiskers.errors import ConfigurationError
from codewhiskers.filesystem import find_project_root, walk_up_for_config


def test_config_initialization(temp_dir: Path):
    """Test Config object initialization."""
    config = Config(project_root=temp_dir, config_dict={"complexity": {"low_max": 1}})

    assert config.project_root == temp_dir
    assert config.settings["complexity"] == {"low_max": 1}
    assert "complexity" in config
    assert config.is_present()


def test_config_get_method(sample_config: Config):
    assert sample_config.get("profile")["long_function_lines"] == 10
    assert sample_config.get("nonexistent", "default") == "default"


def test_config_getitem_missing_key(sample_config: Config):
    with pytest.raises(KeyError, match="not found"):
        sample_config["missing"]


def test_config_section_ignores_non_tables(temp_dir: Path):
    config = Config(project_root=temp_dir, config_dict={"complexity": "high"})

    assert config.section("complexity") == {}
    assert config.section("profile") == {}


def test_config_copies_input_dict(temp_dir: Path):
    raw = {"profile": {}}
    config = Config(project_root=temp_dir, config_dict=raw)
    raw["extra"] = True

    assert "extra" not in config


def test_load_config_from_pyproject(pyproject_toml: Path):
    """Test loading config from pyproject.toml."""
    config = load_config(pyproject_toml.parent)

    assert config.is_present()
    assert config.project_root == pyproject_toml.parent.resolve()
    assert config.section("complexity") == {"low_max": 4, "medium_max": 9}


def test_load_config_walks_up(pyproject_toml: Path):
    nested = pyproject_toml.parent / "src" / "deep"
    nested.mkdir(parents=True)

    assert load_config(nested).project_root == pyproject_toml.parent.resolve()


def test_load_config_no_file(temp_dir: Path):
    config = load_config(temp_dir)

    assert not config.is_present()


def test_load_config_without_tool_section(temp_dir: Path):
    (temp_dir / "pyproject.toml").write_text('[project]\nname = "bare"\n')
    config = load_config(temp_dir)

    assert config.project_root == temp_dir.resolve()
    assert config.settings == {}
    assert not config.is_present()


def test_load_config_invalid_toml(temp_dir: Path):
    (temp_dir / "pyproject.toml").write_text("[tool.codewhiskers\nbroken = ")

    assert load_config(temp_dir).settings == {}


def test_default_thresholds():
    thresholds = get_complexity_thresholds()

    assert (thresholds.low_max, thresholds.medium_max) == (3.0, 7.0)


def test_thresholds_from_file(pyproject_toml: Path, monkeypatch):
    monkeypatch.delenv("CODEWHISKERS_COMPLEXITY_LOW_MAX", raising=False)
    monkeypatch.delenv("CODEWHISKERS_COMPLEXITY_MEDIUM_MAX", raising=False)

    thresholds = get_complexity_thresholds(load_config(pyproject_toml.parent))

    assert thresholds == ComplexityThresholds(low_max=4.0, medium_max=9.0)


def test_environment_overrides_file(sample_config: Config, monkeypatch):
    monkeypatch.setenv("CODEWHISKERS_COMPLEXITY_MEDIUM_MAX", "12")
    monkeypatch.setenv("CODEWHISKERS_COMPLEXITY_LOW_MAX", "not-a-number")

    thresholds = get_complexity_thresholds(sample_config)

    assert thresholds.low_max == 2.0
    assert thresholds.medium_max == 12.0


def test_invalid_thresholds_in_file(temp_dir: Path):
    config = Config(project_root=temp_dir, config_dict={"complexity": {"low_max": 8, "medium_max": 2}})

    with pytest.raises(ConfigurationError):
        get_complexity_thresholds(config)


def test_non_numeric_threshold_in_file(temp_dir: Path):
    config = Config(project_root=temp_dir, config_dict={"complexity": {"low_max": "three"}})

    with pytest.raises(ConfigurationError):
        get_complexity_thresholds(config)


def test_profiler_settings_from_config(sample_config: Config):
    settings = get_profiler_settings(sample_config)

    assert settings.long_function_lines == 10
    assert settings.debug_logging_limit == 5
    assert settings.ignore_dirs == ["node_modules", "dist", "build", ".git", ".vscode", "vendor"]


def test_profiler_settings_defaults():
    assert get_profiler_settings() == ProfilerSettings()


def test_profiler_settings_unknown_keys_warn(temp_dir: Path, caplog):
    config = Config(project_root=temp_dir, config_dict={"profile": {"colour": "blue"}})

    with caplog.at_level("WARNING"):
        settings = get_profiler_settings(config)

    assert settings == ProfilerSettings()
    assert "colour" in caplog.text


def test_profiler_settings_rejects_bad_ignore_dirs(temp_dir: Path):
    config = Config(project_root=temp_dir, config_dict={"profile": {"ignore_dirs": "vendor"}})

    with pytest.raises(ConfigurationError, match="ignore_dirs"):
        get_profiler_settings(config)


@pytest.mark.parametrize(
    "overrides",
    [
        {"long_function_lines": 0},
        {"comment_ratio_min": 0.5, "comment_ratio_good": 0.1},
        {"intermediate_score": 30},
    ],
)
def test_profiler_settings_validation(overrides):
    with pytest.raises(ConfigurationError):
        ProfilerSettings(**overrides)


def test_walk_up_for_config(pyproject_toml: Path):
    nested = pyproject_toml.parent / "a" / "b"
    nested.mkdir(parents=True)

    assert walk_up_for_config(nested) == pyproject_toml.parent.resolve()


def test_find_project_root_accepts_package_json(temp_dir: Path):
    (temp_dir / "package.json").write_text("{}")
    (temp_dir / "lib").mkdir()

    assert find_project_root(temp_dir / "lib") == temp_dir.resolve()
