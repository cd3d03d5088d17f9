"""Test fixtures for govm tests.

This package provides reusable pytest fixtures for testing govm components.
Fixtures are organized by type:

- directories: Manager roots, installed versions and project trees
- installers: A fake ``Installer`` and catalog builders

Import fixtures in your tests using:
    from tests.fixtures.directories import govm_paths
    from tests.fixtures.installers import fake_installer
"""

__all__ = [
    "directories",
    "installers",
]
