"""
Tests for configuration resolution.
"""

import tempfile
from pathlib import Path

import pytest

from advent_harness.config import HarnessConfig, find_project_root, parse_year
from advent_harness.exceptions import ConfigurationError


class TestFindProjectRoot:
    """Test upward marker search."""

    def test_finds_pyproject_from_nested_directory(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            root = Path(temp_dir).resolve()
            (root / "pyproject.toml").write_text("[project]\nname = 'x'\n")
            nested = root / "solutions" / "deep"
            nested.mkdir(parents=True)

            # Act / Assert
            assert find_project_root(nested) == root

    def test_finds_data_and_solutions_directories(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir).resolve()
            (root / "data").mkdir()
            (root / "solutions").mkdir()

            assert find_project_root(root / "solutions") == root

    def test_raises_without_marker(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            start = Path(temp_dir) / "nothing" / "here"
            start.mkdir(parents=True)

            with pytest.raises(ConfigurationError):
                _ = find_project_root(start)


class TestParseYear:
    """Test year parsing from the environment."""

    @pytest.mark.parametrize(
        "raw, expected",
        [("2023", 2023), (" 2015 ", 2015), (None, None), ("", None), ("twenty", None), ("-1", None)],
    )
    def test_parse_year(self, raw: str | None, expected: int | None) -> None:
        assert parse_year(raw) == expected


class TestHarnessConfig:
    """Test one-shot configuration loading."""

    def test_explicit_root_wins(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir, tempfile.TemporaryDirectory() as env_dir:
            config = HarnessConfig.load(root=temp_dir, environ={"AOC_ROOT": env_dir})

            assert config.root == Path(temp_dir).resolve()
            assert config.year is None

    def test_environment_supplies_root_and_year(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config = HarnessConfig.load(environ={"AOC_ROOT": temp_dir, "AOC_YEAR": "2023"})

            assert config.root == Path(temp_dir).resolve()
            assert config.year == 2023
            assert config.timings_path == config.root / ".timings.json"
            assert config.readme_path == config.root / "README.md"
            assert config.solutions_dir == config.root / "solutions"

    def test_root_must_exist(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with pytest.raises(ConfigurationError):
                _ = HarnessConfig(root=Path(temp_dir) / "missing")
