"""Pytest configuration and fixtures for codewhiskers tests."""

import tempfile
from pathlib import Path
from typing import Iterator

import pytest

from codewhiskers.config import Config
from tests.helpers.sources import SHOP_SOURCE, SUM_SOURCE


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sum_js(temp_dir: Path) -> Path:
    """A one-function JavaScript file."""
    file_path = temp_dir / "sum.js"
    file_path.write_text(SUM_SOURCE + "\n")
    return file_path


@pytest.fixture
def shop_js(temp_dir: Path) -> Path:
    file_path = temp_dir / "shop.js"
    file_path.write_text(SHOP_SOURCE)
    return file_path


@pytest.fixture
def sample_config(temp_dir: Path) -> Config:
    """Create a sample Config object for testing."""
    return Config(
        project_root=temp_dir,
        config_dict={
            "complexity": {"low_max": 2, "medium_max": 5},
            "profile": {"long_function_lines": 10, "ignore_dirs": ["vendor"]},
        },
    )


@pytest.fixture
def pyproject_toml(temp_dir: Path) -> Path:
    """Create a sample pyproject.toml file."""
    config_path = temp_dir / "pyproject.toml"
    config_path.write_text(
        """[project]
name = "demo"

[tool.codewhiskers.complexity]
low_max = 4
medium_max = 9

[tool.codewhiskers.profile]
debug_logging_limit = 10
ignore_dirs = ["vendor"]
"""
    )
    return config_path


@pytest.fixture
def sample_workspace(temp_dir: Path) -> Path:
    """A small mixed-language project tree."""
    (temp_dir / "src").mkdir()
    (temp_dir / "src" / "app.js").write_text(
        "const greet = (name) => `hi ${name}`;\n"
        "const { a, b } = opts;\n"
        "async function load() { await fetch('/x'); }\n"
    )
    (temp_dir / "src" / "util.py").write_text(
        "# helpers\n"
        "def squares(xs):\n"
        "    return [x * x for x in xs]\n"
    )
    (temp_dir / "node_modules" / "lib").mkdir(parents=True)
    (temp_dir / "node_modules" / "lib" / "index.js").write_text("console.log('vendored');\n")
    (temp_dir / "README.md").write_text("# demo\n")
    return temp_dir
