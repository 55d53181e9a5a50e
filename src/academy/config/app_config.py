"""Application configuration loader.

Loads centralized configuration from data/config/app_config_v1.yaml,
falling back to built-in defaults when the file is missing.

Usage:
    from academy.config.app_config import load_app_config, get_data_dir

    config = load_app_config()
    content_dir = get_content_dir()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

# Overrides paths.data_dir when set
DATA_DIR_ENV = "ACADEMY_DATA_DIR"


@dataclass
class SiteConfig:
    """Presentation settings for the rendered site."""

    title: str = "Apex Academy"
    description: str = "Salesforce development curriculum"
    words_per_minute: int = 200
    related_limit: int = 3
    excerpt_length: int = 160


@dataclass
class AppConfig:
    """Application-wide configuration."""

    site: SiteConfig = field(default_factory=SiteConfig)
    paths: dict[str, str] = field(default_factory=dict)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "site": {
            "title": "Apex Academy",
            "description": "Salesforce development curriculum",
            "words_per_minute": 200,
            "related_limit": 3,
            "excerpt_length": 160,
        },
        "paths": {
            "data_dir": "data",
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    site_data = data.get("site", {}) or {}
    site = SiteConfig(
        title=site_data.get("title", "Apex Academy"),
        description=site_data.get("description", "Salesforce development curriculum"),
        words_per_minute=int(site_data.get("words_per_minute", 200)),
        related_limit=int(site_data.get("related_limit", 3)),
        excerpt_length=int(site_data.get("excerpt_length", 160)),
    )

    paths = data.get("paths", {}) or {}

    return AppConfig(site=site, paths=paths)


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, using defaults when no file exists.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any]

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(data)
    return _cached_config


def get_data_dir() -> Path:
    """Resolve the data directory.

    The ACADEMY_DATA_DIR environment variable wins over paths.data_dir.
    """
    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    config = load_app_config()
    return Path(config.paths.get("data_dir", "data"))


def get_content_dir(data_dir: Path | None = None) -> Path:
    """Directory holding topics/ and tutorials/."""
    return (data_dir or get_data_dir()) / "content"


def get_state_dir(data_dir: Path | None = None) -> Path:
    """Directory holding learner progress state."""
    return (data_dir or get_data_dir()) / "state"


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
