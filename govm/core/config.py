"""YAML configuration for govm.

The optional ``<root>/config.yaml`` tunes where releases come from, which
binaries get shims, and download behaviour. A missing file means defaults.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from govm.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_URL = "https://go.dev/dl/?mode=json&include=all"
DEFAULT_DOWNLOAD_BASE = "https://go.dev/dl/"
DEFAULT_BINARIES = ["go", "gofmt"]


@dataclass
class DownloadConfig:
    """Network download settings."""

    timeout: int = 30
    max_retries: int = 3


@dataclass
class GovmConfig:
    """Complete govm configuration."""

    catalog_url: str = DEFAULT_CATALOG_URL
    download_base: str = DEFAULT_DOWNLOAD_BASE
    binaries: List[str] = field(default_factory=lambda: list(DEFAULT_BINARIES))
    prune_keep: int = 3
    download: DownloadConfig = field(default_factory=DownloadConfig)


def load_config(config_path: Path) -> GovmConfig:
    """
    Load govm configuration from a YAML file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Parsed configuration (defaults if the file doesn't exist or is empty)

    Raises:
        ConfigError: If the file is not valid YAML or has invalid values
    """
    if not config_path.exists():
        logger.debug(f"Config file not found (optional): {config_path}")
        return GovmConfig()

    logger.debug(f"Loading configuration from {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}")

    if data is None:
        return GovmConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    return _parse_config(data, config_path)


def _parse_config(data: Dict[str, Any], config_path: Path) -> GovmConfig:
    config = GovmConfig()

    for key in ("catalog_url", "download_base"):
        if key in data:
            value = data[key]
            if not isinstance(value, str) or not value:
                raise ConfigError(f"{config_path}: '{key}' must be a non-empty string")
            setattr(config, key, value)

    if "binaries" in data:
        binaries = data["binaries"]
        if (
            not isinstance(binaries, list)
            or not binaries
            or not all(_is_binary_name(b) for b in binaries)
        ):
            raise ConfigError(
                f"{config_path}: 'binaries' must be a non-empty list of names"
            )
        config.binaries = list(dict.fromkeys(binaries))

    prune = data.get("prune") or {}
    if not isinstance(prune, dict):
        raise ConfigError(f"{config_path}: 'prune' must be a mapping")
    if "keep" in prune:
        config.prune_keep = _int_at_least(prune["keep"], 0, "prune.keep", config_path)

    download = data.get("download") or {}
    if not isinstance(download, dict):
        raise ConfigError(f"{config_path}: 'download' must be a mapping")
    if "timeout" in download:
        config.download.timeout = _int_at_least(
            download["timeout"], 1, "download.timeout", config_path
        )
    if "max_retries" in download:
        config.download.max_retries = _int_at_least(
            download["max_retries"], 1, "download.max_retries", config_path
        )

    return config


def _is_binary_name(value: Any) -> bool:
    return (
        isinstance(value, str)
        and bool(value)
        and "/" not in value
        and "\\" not in value
        and not value.startswith(".")
    )


def _int_at_least(value: Any, minimum: int, key: str, config_path: Path) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigError(f"{config_path}: '{key}' must be an integer >= {minimum}")
    return value


__all__ = [
    "DEFAULT_CATALOG_URL",
    "DEFAULT_DOWNLOAD_BASE",
    "DEFAULT_BINARIES",
    "DownloadConfig",
    "GovmConfig",
    "load_config",
]
