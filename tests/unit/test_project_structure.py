"""
Unit tests for project structure validation.

Tests verify that all required directories, files, and modules exist
and are properly configured.
"""

import importlib
from pathlib import Path

import pytest


class TestProjectStructure:
    """Test suite for validating project directory structure."""

    def test_required_directories_exist(self, project_root: Path) -> None:
        """
        Test that all required top-level directories exist.

        Args:
            project_root: Project root directory fixture.
        """
        required_dirs = ["src", "tests", "examples"]

        missing_dirs = [d for d in required_dirs if not (project_root / d).exists()]

        assert not missing_dirs, f"Missing required directories: {missing_dirs}"

    def test_module_init_files_exist(self, src_dir: Path) -> None:
        """
        Test that all module directories contain __init__.py files.

        Args:
            src_dir: Source directory fixture.
        """
        package_dir = src_dir / "csrtool"
        module_dirs = [
            package_dir,
            package_dir / "cli",
            package_dir / "config",
            package_dir / "csr",
            package_dir / "keys",
            package_dir / "logging_audit",
            package_dir / "models",
            package_dir / "utils",
        ]

        missing_init_files = [
            str(d.relative_to(src_dir))
            for d in module_dirs
            if not (d / "__init__.py").exists()
        ]

        assert not missing_init_files, f"Missing __init__.py files in: {missing_init_files}"

    @pytest.mark.parametrize(
        "module_name",
        [
            "csrtool",
            "csrtool.bindings",
            "csrtool.cli.main",
            "csrtool.config",
            "csrtool.csr",
            "csrtool.keys",
            "csrtool.logging_audit",
            "csrtool.models",
            "csrtool.utils.exceptions",
            "csrtool.utils.output_manager",
        ],
    )
    def test_modules_importable(self, module_name: str) -> None:
        """
        Test that every package module imports cleanly.

        Args:
            module_name: Dotted module path to import.
        """
        assert importlib.import_module(module_name) is not None

    def test_example_config_is_valid(self, project_root: Path) -> None:
        """
        Test the shipped example configuration validates.

        Args:
            project_root: Project root directory fixture.
        """
        from csrtool.config import load_config

        config = load_config(project_root / "examples" / "config.example.json")

        assert config.generate.key_type == "ec256"
