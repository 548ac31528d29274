"""Scratch directory for intermediate SVG files."""

import logging
import os
import sys
import tempfile
from pathlib import Path

from .settings import user_cache_root

logger = logging.getLogger(__name__)

CACHE_DIR_NAME = "svg-tint"


class CacheRootError(RuntimeError):
    """The platform cache root does not exist."""


class CacheDirectory:
    """Private scratch space holding tinted SVGs before rasterization.

    The directory is created lazily and is never removed itself; only its
    contents are purged.
    """

    def __init__(self, root: Path | None = None):
        self._root = root
        self._platform_root = root is None

    @property
    def root(self) -> Path:
        if self._root is None:
            self._root = user_cache_root() / CACHE_DIR_NAME
        return self._root

    def ensure(self) -> Path:
        """Create the cache directory if needed.

        Outside macOS the platform cache root ($XDG_CACHE_HOME or ~/.cache)
        is created on demand, as it may not exist on a fresh account. An
        explicit root's parent must already exist.

        Returns:
            The cache directory path.

        Raises:
            CacheRootError: If the parent cache root does not exist or
                cannot be created.
        """
        root = self.root
        if self._platform_root and sys.platform != "darwin":
            try:
                root.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise CacheRootError(f"Cannot create cache root {root.parent}: {e}") from e
        if not root.parent.is_dir():
            raise CacheRootError(f"Cache root not found: {root.parent}")
        root.mkdir(exist_ok=True)
        return root

    def purge(self) -> list[Path]:
        """Remove everything inside the cache directory.

        Entries are removed deepest first. A failure on one entry is logged
        and the purge continues.

        Returns:
            Paths that could not be removed.
        """
        root = self.ensure()
        failed: list[Path] = []
        entries = sorted(root.rglob("*"), key=lambda p: len(p.parts), reverse=True)
        for entry in entries:
            try:
                if entry.is_dir() and not entry.is_symlink():
                    entry.rmdir()
                else:
                    entry.unlink()
            except OSError as e:
                logger.warning("Failed to remove cached file %s: %s", entry, e)
                failed.append(entry)
        if entries:
            logger.debug("Purged %d cache entries from %s", len(entries) - len(failed), root)
        return failed

    def path_for(self, name: str) -> Path:
        """Cache path of the SVG file for an output name."""
        return self.root / f"{name}.svg"

    def write(self, markup: str, name: str) -> Path:
        """Atomically write SVG markup to ``<name>.svg``.

        Args:
            markup: SVG text.
            name: Output name without extension.

        Returns:
            Path of the written file.

        Raises:
            OSError: If the file cannot be written.
        """
        root = self.ensure()
        target = self.path_for(name)
        fd, tmp_name = tempfile.mkstemp(dir=root, prefix=".tmp-", suffix=".svg")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(markup)
            os.replace(tmp_name, target)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return target

    def files(self) -> list[Path]:
        """Files currently in the cache, sorted by name."""
        if not self.root.is_dir():
            return []
        return sorted(p for p in self.root.iterdir() if p.is_file())
