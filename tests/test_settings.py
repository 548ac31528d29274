"""Tests for svg_tint.settings module."""

import pytest
import yaml
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_tint.settings import (
    DEFAULT_TOOL_PATH,
    Settings,
    SettingsStore,
    parse_settings,
    user_cache_root,
    user_config_dir,
)


class TestParseSettings:
    """Tests for parse_settings function."""

    def test_empty(self):
        settings = parse_settings({})
        assert settings.tool_path == DEFAULT_TOOL_PATH
        assert settings.palette_file is None
        assert settings.cache_dir is None

    def test_all_fields(self):
        settings = parse_settings(
            {
                "tool_path": "/opt/homebrew/bin/rsvg-convert",
                "palette_file": "/tmp/colors.json",
                "cache_dir": "/tmp/cache",
            }
        )
        assert settings.tool_path == "/opt/homebrew/bin/rsvg-convert"
        assert settings.palette_file == Path("/tmp/colors.json")
        assert settings.cache_dir == Path("/tmp/cache")

    def test_invalid_tool_path(self):
        with pytest.raises(ValueError, match="tool_path"):
            parse_settings({"tool_path": ""})
        with pytest.raises(ValueError, match="tool_path"):
            parse_settings({"tool_path": 42})


class TestSettingsStore:
    """Tests for SettingsStore class."""

    def test_missing_file_returns_defaults(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.yaml")
        assert store.load() == Settings()

    def test_empty_file_returns_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert SettingsStore(path).load() == Settings()

    def test_save_and_load(self, tmp_path):
        store = SettingsStore(tmp_path / "nested" / "settings.yaml")
        settings = Settings(tool_path="/usr/bin/rsvg-convert", palette_file=Path("/x/c.json"))
        store.save(settings)
        assert store.load() == settings

    def test_saved_file_is_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        SettingsStore(path).save(Settings(tool_path="/usr/bin/rsvg-convert"))
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data == {"tool_path": "/usr/bin/rsvg-convert"}

    def test_non_dict_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="YAML dictionary"):
            SettingsStore(path).load()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("tool_path: [unclosed\n", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            SettingsStore(path).load()

    def test_tool_path_is_reread(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.yaml")
        assert store.tool_path == DEFAULT_TOOL_PATH
        store.set_tool_path("/opt/bin/rsvg-convert")
        assert store.tool_path == "/opt/bin/rsvg-convert"

        # Edited outside the store
        store.path.write_text("tool_path: /usr/bin/rsvg-convert\n", encoding="utf-8")
        assert store.tool_path == "/usr/bin/rsvg-convert"

    def test_default_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert SettingsStore().path == tmp_path / "svg-tint" / "settings.yaml"


class TestPlatformDirs:
    """Tests for platform directory helpers."""

    def test_config_dir_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert user_config_dir() == tmp_path / ".config" / "svg-tint"

    def test_cache_root_linux(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
        assert user_cache_root() == tmp_path

    def test_cache_root_macos(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "platform", "darwin")
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert user_cache_root() == tmp_path / "Library" / "Caches"
