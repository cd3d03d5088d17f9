"""Reusable directory structure fixtures for testing.

This module provides pytest fixtures that create manager roots, installed
Go versions and nested project directories.
"""

import os
from pathlib import Path
from typing import Iterable

import pytest

from govm.core.directory import GovmPaths, ensure_structure

DEFAULT_BINARIES = ("go", "gofmt")


def create_install(
    paths: GovmPaths, version: str, binaries: Iterable[str] = DEFAULT_BINARIES
) -> Path:
    """
    Create a fake installed Go version.

    Each binary is a small executable shell script under ``bin/``.

    Returns:
        Path to the install directory
    """
    install_dir = paths.versions_dir / version
    bin_dir = install_dir / "bin"
    bin_dir.mkdir(parents=True)

    for binary in binaries:
        name = f"{binary}.exe" if os.name == "nt" else binary
        binary_path = bin_dir / name
        binary_path.write_text(f"#!/bin/sh\necho {binary} {version}\n")
        binary_path.chmod(0o755)

    (install_dir / "VERSION").write_text(f"go{version}\n")
    return install_dir


@pytest.fixture
def govm_paths(tmp_path) -> GovmPaths:
    """
    Create an empty manager root.

    Example:
        def test_layout(govm_paths):
            assert govm_paths.versions_dir.is_dir()
    """
    return ensure_structure(GovmPaths(tmp_path / ".govm"))


@pytest.fixture
def govm_paths_with_versions(govm_paths) -> GovmPaths:
    """
    Create a manager root with 1.20.0, 1.21.5 and 1.22.0 installed.

    No global default is set.
    """
    for version in ("1.20.0", "1.21.5", "1.22.0"):
        create_install(govm_paths, version)
    return govm_paths


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """
    Create a nested project tree: ``workspace/project/src/pkg``.

    Returns:
        Path to the ``workspace/project`` directory
    """
    project = tmp_path / "workspace" / "project"
    (project / "src" / "pkg").mkdir(parents=True)
    return project
