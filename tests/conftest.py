"""
Pytest configuration and shared fixtures for govm tests.
"""

from pathlib import Path
from typing import List, Mapping, Sequence, Tuple

import pytest

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.directories import (
    govm_paths,
    govm_paths_with_versions,
    project_dir,
)
from tests.fixtures.installers import fake_installer, TEST_PLATFORM

from govm.core.config import GovmConfig
from govm.toolchain.lifecycle import LifecycleOrchestrator
from govm.toolchain.shims import ManagerCommand
from govm.versions.resolution import ResolutionContext

MANAGER = ManagerCommand(Path("/opt/govm/bin/govm"))


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


# ============================================================================
# Shared Test Fixtures
# ============================================================================


class RecordingRunner:
    """Process runner that records commands instead of spawning them."""

    def __init__(self, returncode: int = 0):
        self.returncode = returncode
        self.calls: List[Tuple[List[str], Mapping[str, str]]] = []

    def __call__(self, command: Sequence[str], env: Mapping[str, str]) -> int:
        self.calls.append((list(command), dict(env)))
        return self.returncode


@pytest.fixture
def runner() -> RecordingRunner:
    """Create a process runner that never spawns anything."""
    return RecordingRunner()


@pytest.fixture
def make_orchestrator(govm_paths, fake_installer, project_dir, runner):
    """
    Factory for orchestrators bound to the test manager root.

    Keyword arguments override the defaults: ``override`` (GOVM_VERSION
    value), ``cwd`` (working directory) and any constructor argument.

    Example:
        def test_exec(make_orchestrator):
            orchestrator = make_orchestrator(override="1.22.0")
    """

    def factory(override=None, cwd=None, **kwargs) -> LifecycleOrchestrator:
        context = ResolutionContext(
            override=override,
            cwd=Path(cwd) if cwd is not None else project_dir,
            global_marker=govm_paths.global_version_file,
        )
        options = {
            "installer": fake_installer,
            "config": GovmConfig(),
            "manager": MANAGER,
            "platform_info": TEST_PLATFORM,
            "environ": {"PATH": "/usr/bin"},
            "process_runner": runner,
        }
        options.update(kwargs)
        return LifecycleOrchestrator(govm_paths, context=context, **options)

    return factory


@pytest.fixture
def orchestrator(make_orchestrator) -> LifecycleOrchestrator:
    """Create an orchestrator working in the test project directory."""
    return make_orchestrator()


@pytest.fixture
def isolated_home(tmp_path, monkeypatch) -> Path:
    """Create isolated home directory for tests."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))
    monkeypatch.delenv("GOVM_ROOT", raising=False)
    monkeypatch.delenv("GOVM_VERSION", raising=False)

    return fake_home
