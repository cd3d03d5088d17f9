"""
Unit tests for the platform detection module.

Tests cover:
- PlatformInfo formatting
- OS detection
- Architecture normalization to Go names
- Cache behavior
"""

from unittest.mock import patch

import pytest

from govm.core.platform import (
    PlatformInfo,
    _detect_architecture,
    _detect_os,
    detect_platform,
)


class TestPlatformInfo:
    """Tests for PlatformInfo dataclass."""

    def test_platform_string(self):
        """Test platform string generation."""
        info = PlatformInfo(os="darwin", arch="arm64")
        assert info.platform_string() == "darwin-arm64"
        assert str(info) == "darwin-arm64"

    def test_frozen(self):
        """Test PlatformInfo is immutable."""
        info = PlatformInfo(os="linux", arch="amd64")
        with pytest.raises(AttributeError):
            info.os = "windows"


class TestDetectOS:
    """Tests for _detect_os()."""

    @pytest.mark.parametrize(
        "system,expected",
        [
            ("Linux", "linux"),
            ("Darwin", "darwin"),
            ("Windows", "windows"),
            ("FreeBSD", "unknown"),
        ],
    )
    def test_detect_os(self, system, expected):
        """Test platform.system() values map to GOOS names."""
        with patch("govm.core.platform.platform.system", return_value=system):
            assert _detect_os() == expected


class TestDetectArchitecture:
    """Tests for _detect_architecture()."""

    @pytest.mark.parametrize(
        "machine,expected",
        [
            ("x86_64", "amd64"),
            ("AMD64", "amd64"),
            ("aarch64", "arm64"),
            ("arm64", "arm64"),
            ("i686", "386"),
            ("armv7l", "armv6l"),
            ("riscv64", "unknown"),
        ],
    )
    def test_detect_architecture(self, machine, expected):
        """Test platform.machine() values map to GOARCH names."""
        with patch("govm.core.platform.platform.machine", return_value=machine):
            assert _detect_architecture() == expected


class TestDetectPlatform:
    """Tests for detect_platform()."""

    def test_cached(self):
        """Test detection runs once per process."""
        detect_platform.cache_clear()
        try:
            with patch(
                "govm.core.platform._detect_os", return_value="linux"
            ) as os_mock:
                first = detect_platform()
                second = detect_platform()
        finally:
            detect_platform.cache_clear()

        assert first is second
        assert os_mock.call_count == 1
