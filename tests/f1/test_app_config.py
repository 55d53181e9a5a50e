"""Tests for app configuration (F1).

Tests the configuration loading, data directory resolution, and fallbacks.
"""

from pathlib import Path

import pytest

from academy.config.app_config import (
    CONFIG_FILE,
    DATA_DIR_ENV,
    AppConfig,
    SiteConfig,
    get_content_dir,
    get_data_dir,
    get_state_dir,
    load_app_config,
)


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Empty project directory as cwd, without data dir override."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    return tmp_path


def write_config(project_dir: Path, text: str) -> None:
    path = project_dir / CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestLoadAppConfig:
    """Tests for load_app_config function."""

    def test_defaults_without_file(self, project_dir):
        """Missing config file uses built-in defaults."""
        config = load_app_config()
        assert isinstance(config, AppConfig)
        assert isinstance(config.site, SiteConfig)
        assert config.site.title == "Apex Academy"
        assert config.site.words_per_minute == 200
        assert config.site.related_limit == 3

    def test_load_config_from_yaml(self, project_dir):
        """Values come from app_config_v1.yaml."""
        write_config(project_dir, "site:\n  title: Test Site\n  words_per_minute: 100\n")
        config = load_app_config()
        assert config.site.title == "Test Site"
        assert config.site.words_per_minute == 100
        assert config.site.excerpt_length == 160

    def test_cached(self, project_dir):
        """Second load returns the cached object."""
        assert load_app_config() is load_app_config()

    def test_force_reload(self, project_dir):
        """force_reload picks up file changes."""
        load_app_config()
        write_config(project_dir, "site:\n  title: Changed\n")
        assert load_app_config().site.title == "Apex Academy"
        assert load_app_config(force_reload=True).site.title == "Changed"


class TestDataDirectories:
    """Tests for data directory resolution."""

    def test_default_data_dir(self, project_dir):
        assert get_data_dir() == Path("data")

    def test_data_dir_from_config(self, project_dir):
        write_config(project_dir, "paths:\n  data_dir: custom\n")
        assert get_data_dir() == Path("custom")

    def test_env_overrides_config(self, project_dir, monkeypatch):
        write_config(project_dir, "paths:\n  data_dir: custom\n")
        monkeypatch.setenv(DATA_DIR_ENV, "/srv/academy")
        assert get_data_dir() == Path("/srv/academy")

    def test_content_and_state_dirs(self, project_dir):
        assert get_content_dir(Path("x")) == Path("x/content")
        assert get_state_dir(Path("x")) == Path("x/state")
        assert get_content_dir() == Path("data/content")
