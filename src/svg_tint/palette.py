"""Color palette mapping source fill colors to tint colors."""

import json
import logging
from pathlib import Path

from .settings import user_documents_dir
from .utils import normalize_hex

logger = logging.getLogger(__name__)

# Built-in source -> tint mappings
DEFAULT_COLORS = {
    "#111114": "#ffffff",
    "#484852": "#484852",
    "#71717a": "#787c85",
    "#9d9da3": "#3c4047",
}

PALETTE_FILE_NAME = "SvgTintColors.json"


def default_palette_path() -> Path:
    """Location of the user's color override file."""
    return user_documents_dir() / PALETTE_FILE_NAME


def normalize_entries(data: dict, source: str = "palette") -> dict[str, str]:
    """Normalize a raw color mapping.

    Entries whose key or value is not a hex color are skipped with a
    warning.

    Args:
        data: Mapping of hex color strings.
        source: Label used in log messages.

    Returns:
        Mapping with lower-case ``#rrggbb`` keys and values.
    """
    entries: dict[str, str] = {}
    for key, value in data.items():
        src = normalize_hex(key) if isinstance(key, str) else None
        dst = normalize_hex(value) if isinstance(value, str) else None
        if src is None or dst is None:
            logger.warning("Ignoring invalid %s entry: %r -> %r", source, key, value)
            continue
        entries[src] = dst
    return entries


def load_overrides(path: Path) -> dict[str, str]:
    """Read user color overrides from a JSON file.

    Never raises: a missing directory, missing file, unreadable file or
    malformed JSON is logged and yields an empty mapping.

    Args:
        path: Path to the JSON override file.

    Returns:
        Normalized override mapping.
    """
    if not path.parent.is_dir():
        logger.warning("Palette directory not found: %s", path.parent)
        return {}

    if not path.is_file():
        logger.info("Palette file not found: %s", path)
        return {}

    try:
        data = json.loads(path.read_bytes().decode("utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Failed to read palette file %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Palette file must contain a JSON object: %s", path)
        return {}

    return normalize_entries(data, source=str(path))


class ColorPalette:
    """Mapping from source fill colors to tint colors.

    User overrides are merged over the built-in defaults; on a key
    collision the override wins.
    """

    def __init__(
        self,
        overrides: dict[str, str] | None = None,
        defaults: dict[str, str] | None = None,
        path: Path | None = None,
    ):
        self._defaults = normalize_entries(
            DEFAULT_COLORS if defaults is None else defaults, source="default"
        )
        self.path = path
        self.entries: dict[str, str] = {}
        self._merge(normalize_entries(overrides or {}, source="override"))

    def _merge(self, overrides: dict[str, str]) -> None:
        entries = dict(self._defaults)
        entries.update(overrides)
        self.entries = entries

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        defaults: dict[str, str] | None = None,
    ) -> "ColorPalette":
        """Build a palette from the defaults and an optional override file.

        Args:
            path: Override file (default: ~/Documents/SvgTintColors.json).
            defaults: Built-in mapping (default: DEFAULT_COLORS).

        Returns:
            Loaded ColorPalette.
        """
        if path is None:
            path = default_palette_path()
        palette = cls(defaults=defaults, path=path)
        palette._merge(load_overrides(path))
        return palette

    def reload(self) -> None:
        """Re-read the override file this palette was loaded from."""
        overrides = load_overrides(self.path) if self.path is not None else {}
        self._merge(overrides)

    def resolve(self, source_color: str | None) -> str | None:
        """Look up the tint color for a source color.

        Args:
            source_color: Source fill color in any hex notation.

        Returns:
            Normalized tint color, or None if the color is unknown.
        """
        key = normalize_hex(source_color)
        if key is None:
            return None
        return self.entries.get(key)

    def __contains__(self, color: str) -> bool:
        return self.resolve(color) is not None

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return dict(sorted(self.entries.items()))
