"""Persisted user settings and platform directories."""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_TOOL_PATH = "/usr/local/bin/rsvg-convert"
APP_DIR_NAME = "svg-tint"
SETTINGS_FILE_NAME = "settings.yaml"


def user_documents_dir() -> Path:
    """Per-user documents directory."""
    return Path.home() / "Documents"


def user_cache_root() -> Path:
    """Per-user cache root for the current platform.

    macOS uses ~/Library/Caches; other platforms honor $XDG_CACHE_HOME and
    fall back to ~/.cache.
    """
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches"
    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".cache"


def user_config_dir() -> Path:
    """Per-user configuration directory for this application."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_DIR_NAME


@dataclass
class Settings:
    """User preferences."""

    tool_path: str = DEFAULT_TOOL_PATH
    palette_file: Path | None = None
    cache_dir: Path | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for YAML serialization."""
        result: dict = {"tool_path": self.tool_path}
        if self.palette_file is not None:
            result["palette_file"] = str(self.palette_file)
        if self.cache_dir is not None:
            result["cache_dir"] = str(self.cache_dir)
        return result


def parse_settings(data: dict) -> Settings:
    """Parse settings from YAML data.

    Args:
        data: Settings dictionary.

    Returns:
        Parsed Settings.

    Raises:
        ValueError: If the format is invalid.
    """
    settings = Settings()

    if "tool_path" in data:
        tool_path = data["tool_path"]
        if not isinstance(tool_path, str) or not tool_path.strip():
            raise ValueError("tool_path must be a non-empty string")
        settings.tool_path = tool_path

    if data.get("palette_file") is not None:
        settings.palette_file = Path(str(data["palette_file"])).expanduser()

    if data.get("cache_dir") is not None:
        settings.cache_dir = Path(str(data["cache_dir"])).expanduser()

    return settings


class SettingsStore:
    """YAML-backed settings file.

    Every load() re-reads the file so edits made while the process runs take
    effect on the next call.
    """

    def __init__(self, path: Path | None = None):
        self.path = path if path is not None else user_config_dir() / SETTINGS_FILE_NAME

    def load(self) -> Settings:
        """Read settings, falling back to defaults if the file is absent.

        Returns:
            Loaded Settings.

        Raises:
            yaml.YAMLError: If the file is not valid YAML.
            ValueError: If the settings format is invalid.
        """
        if not self.path.is_file():
            return Settings()

        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            return Settings()
        if not isinstance(data, dict):
            raise ValueError("Settings file must be a YAML dictionary")

        return parse_settings(data)

    def save(self, settings: Settings) -> None:
        """Write settings to disk, creating the parent directory."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(settings.to_dict(), f, sort_keys=True)
        logger.info("Settings saved to %s", self.path)

    @property
    def tool_path(self) -> str:
        """Currently configured rasterizer path."""
        return self.load().tool_path

    def set_tool_path(self, tool_path: str) -> None:
        """Persist a new rasterizer path."""
        settings = self.load()
        settings.tool_path = tool_path
        self.save(settings)
