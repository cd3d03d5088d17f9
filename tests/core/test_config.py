"""
Unit tests for the config module.

Tests cover:
- Defaults when config.yaml is missing or empty
- Parsing of every supported key
- Validation errors
"""

import pytest

from govm.core.config import (
    DEFAULT_BINARIES,
    DEFAULT_CATALOG_URL,
    GovmConfig,
    load_config,
)
from govm.core.exceptions import ConfigError


@pytest.fixture
def config_file(tmp_path):
    """Path of a config.yaml in a temporary root."""
    return tmp_path / "config.yaml"


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file(self, config_file):
        """Test a missing file gives defaults."""
        config = load_config(config_file)

        assert config == GovmConfig()
        assert config.catalog_url == DEFAULT_CATALOG_URL
        assert config.binaries == DEFAULT_BINARIES
        assert config.prune_keep == 3

    def test_empty_file(self, config_file):
        """Test an empty file gives defaults."""
        config_file.write_text("")
        assert load_config(config_file) == GovmConfig()

    def test_full_config(self, config_file):
        """Test every supported key is read."""
        config_file.write_text(
            "catalog_url: https://mirror.example.test/dl/?mode=json\n"
            "download_base: https://mirror.example.test/dl/\n"
            "binaries: [go, gofmt, go]\n"
            "prune:\n"
            "  keep: 5\n"
            "download:\n"
            "  timeout: 60\n"
            "  max_retries: 2\n"
        )

        config = load_config(config_file)

        assert config.catalog_url == "https://mirror.example.test/dl/?mode=json"
        assert config.download_base == "https://mirror.example.test/dl/"
        assert config.binaries == ["go", "gofmt"]
        assert config.prune_keep == 5
        assert config.download.timeout == 60
        assert config.download.max_retries == 2

    def test_defaults_not_shared(self, config_file):
        """Test default binary lists are independent between configs."""
        first = load_config(config_file)
        first.binaries.append("vet")
        assert load_config(config_file).binaries == DEFAULT_BINARIES

    @pytest.mark.parametrize(
        "content",
        [
            "binaries: go\n",
            "binaries: []\n",
            "binaries: [../go]\n",
            "prune:\n  keep: -1\n",
            "prune:\n  keep: true\n",
            "prune: 3\n",
            "download:\n  timeout: 0\n",
            "download:\n  max_retries: two\n",
            "catalog_url: ''\n",
            "- just\n- a list\n",
        ],
    )
    def test_invalid_values(self, config_file, content):
        """Test invalid values raise ConfigError."""
        config_file.write_text(content)
        with pytest.raises(ConfigError):
            load_config(config_file)

    def test_invalid_yaml(self, config_file):
        """Test malformed YAML raises ConfigError naming the file."""
        config_file.write_text("binaries: [go\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(config_file)
